"""Signed, time-limited bearer tokens."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

from ..errors import (
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    WrongTokenTypeError,
)

ACCESS_TOKEN_TYPE = "access"
DEFAULT_TTL = timedelta(hours=24)


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Decoded payload of an access token."""

    user_id: int
    email: str
    token_type: str
    issued_at: datetime
    expires_at: datetime


def _timestamp(value: datetime) -> int:
    return calendar.timegm(value.utctimetuple())


class TokenService:
    """Issues and verifies HS256 access tokens with a process-wide secret."""

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TTL,
    ) -> None:
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.ttl = ttl

    def issue(self, user_id: int, email: str, *, now: Optional[datetime] = None) -> str:
        """Return a signed access token for ``user_id`` valid for ``ttl``."""

        issued_at = now or datetime.now(timezone.utc)
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "user_id": user_id,
            "email": email,
            "token_type": ACCESS_TOKEN_TYPE,
            "iat": _timestamp(issued_at),
            "exp": _timestamp(issued_at + self.ttl),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode ``token`` and return its claims.

        Raises MalformedTokenError, InvalidSignatureError, TokenExpiredError
        or WrongTokenTypeError.
        """

        try:
            jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedTokenError() from exc

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except JWTError as exc:
            raise InvalidSignatureError() from exc

        if payload.get("token_type") != ACCESS_TOKEN_TYPE:
            raise WrongTokenTypeError()

        try:
            return TokenClaims(
                user_id=int(payload["user_id"]),
                email=str(payload["email"]),
                token_type=payload["token_type"],
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedTokenError() from exc
