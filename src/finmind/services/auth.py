"""Account registration, login, and profile services."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ..errors import EmailExistsError, InvalidCredentialsError, NotFoundError
from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models.common import utcnow
from ..models.user import User
from .tokens import TokenService

logger = get_logger("services.auth")

_hasher = PasswordHasher()
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2


@dataclass(frozen=True, slots=True)
class AuthResult:
    """A user together with a freshly issued access token."""

    user: User
    token: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_PATTERN.match(email))


def _live_users():
    return select(User).where(User.deleted_at.is_(None))  # type: ignore[union-attr]


def get_user_by_email(email: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by email (case-insensitive)."""
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == normalize_email(email))).first()
        if user:
            session.expunge(user)
        return user


def register(
    *,
    name: str,
    email: str,
    password: str,
    session_factory: SessionFactory,
    tokens: TokenService,
) -> AuthResult:
    """Create a new user with a hashed password and issue an access token."""

    email = normalize_email(email)
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.email == email)).first()
        if existing:
            raise EmailExistsError()
        user = User(name=name.strip(), email=email, password_hash=password_hash)
        session.add(user)
        try:
            session.flush()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration; the unique index decides.
            raise EmailExistsError() from exc
        session.refresh(user)
        session.expunge(user)

    logger.info("User registered", extra={"user_id": user.id})
    return AuthResult(user=user, token=tokens.issue(user.id, user.email))  # type: ignore[arg-type]


def authenticate(
    *,
    email: str,
    password: str,
    session_factory: SessionFactory,
    tokens: TokenService,
) -> AuthResult:
    """Validate credentials and issue a token; unknown email and bad password look alike."""

    email = normalize_email(email)
    with session_factory() as session:
        user = session.exec(_live_users().where(User.email == email)).first()
        if user is None:
            logger.info("Login rejected: unknown email")
            raise InvalidCredentialsError()
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError) as exc:
            logger.info("Login rejected: password mismatch", extra={"user_id": user.id})
            raise InvalidCredentialsError() from exc

        if _hasher.check_needs_rehash(user.password_hash):
            user.password_hash = _hasher.hash(password)
            session.add(user)
            session.flush()
        session.refresh(user)
        session.expunge(user)

    logger.info("User logged in", extra={"user_id": user.id})
    return AuthResult(user=user, token=tokens.issue(user.id, user.email))  # type: ignore[arg-type]


def get_profile(user_id: int, session_factory: SessionFactory) -> User:
    """Return the live user with ``user_id``."""
    with session_factory() as session:
        user = session.exec(_live_users().where(User.id == user_id)).first()
        if user is None:
            raise NotFoundError("User not found")
        session.expunge(user)
        return user


def update_profile(
    user_id: int,
    *,
    name: Optional[str] = None,
    avatar: Optional[str] = None,
    session_factory: SessionFactory,
) -> User:
    """Update the supplied profile fields; ``None`` leaves a field unchanged."""
    with session_factory() as session:
        user = session.exec(_live_users().where(User.id == user_id)).first()
        if user is None:
            raise NotFoundError("User not found")
        if name is not None:
            user.name = name.strip()
        if avatar is not None:
            user.avatar = avatar
        user.updated_at = utcnow()
        session.add(user)
        session.flush()
        session.refresh(user)
        session.expunge(user)
        return user


def refresh_token(user_id: int, *, session_factory: SessionFactory, tokens: TokenService) -> AuthResult:
    """Issue a fresh access token for a user presenting a valid one."""
    user = get_profile(user_id, session_factory)
    return AuthResult(user=user, token=tokens.issue(user.id, user.email))  # type: ignore[arg-type]
