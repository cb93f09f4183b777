"""Bearer-token guard for protected routes."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional, TypeVar

from flask import g, request

from .errors import AuthError, MalformedHeaderError, MissingHeaderError
from .extensions import get_state

BEARER_PREFIX = "Bearer "

F = TypeVar("F", bound=Callable)


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated caller attached to the request context."""

    user_id: int
    email: str


def extract_bearer_token(header: Optional[str]) -> str:
    """Return the token carried by an ``Authorization`` header value."""

    if not header:
        raise MissingHeaderError()
    if not header.startswith(BEARER_PREFIX):
        raise MalformedHeaderError()
    token = header[len(BEARER_PREFIX):].strip()
    if not token:
        raise MalformedHeaderError()
    return token


def require_auth() -> None:
    """``before_request`` hook: verify the bearer token and set ``g.identity``."""

    token = extract_bearer_token(request.headers.get("Authorization"))
    claims = get_state().tokens.verify(token)
    g.identity = Identity(user_id=claims.user_id, email=claims.email)


def login_required(view: F) -> F:
    """Decorator form of :func:`require_auth` for individual views."""

    @wraps(view)
    def wrapped(*args, **kwargs):
        require_auth()
        return view(*args, **kwargs)

    return wrapped  # type: ignore[return-value]


def current_identity() -> Identity:
    identity = g.get("identity")
    if identity is None:
        raise AuthError()
    return identity
