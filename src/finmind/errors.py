"""Exception taxonomy mapped onto HTTP statuses."""

from __future__ import annotations

from typing import Any, Mapping


class FinmindError(Exception):
    """Base class for errors that terminate a request with a JSON reply."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(FinmindError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid request"

    def __init__(
        self,
        message: str | None = None,
        errors: Mapping[str, list[str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = dict(errors or {})

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        if self.errors:
            payload["details"] = self.errors
        return payload


class InvalidCategoryError(FinmindError):
    status_code = 400
    default_message = "Invalid category"


class AuthError(FinmindError):
    """Missing, invalid, or expired credentials."""

    status_code = 401
    default_message = "Unauthorized"


class MissingHeaderError(AuthError):
    default_message = "Authorization header required"


class MalformedHeaderError(AuthError):
    default_message = "Bearer token required"


class InvalidSignatureError(AuthError):
    default_message = "Invalid token"


class TokenExpiredError(AuthError):
    default_message = "Token has expired"


class MalformedTokenError(AuthError):
    default_message = "Malformed token"


class WrongTokenTypeError(AuthError):
    default_message = "Invalid token type"


class InvalidCredentialsError(AuthError):
    default_message = "Invalid credentials"


class ForbiddenError(FinmindError):
    status_code = 403
    default_message = "Permission denied"


class ImmutableCategoryError(ForbiddenError):
    default_message = "Cannot modify default category"


class NotFoundError(FinmindError):
    status_code = 404
    default_message = "Not found"


class ConflictError(FinmindError):
    status_code = 409
    default_message = "Conflict"


class EmailExistsError(ConflictError):
    default_message = "Email already exists"


class DuplicateCategoryError(ConflictError):
    default_message = "Category with this name already exists"


class CategoryInUseError(ConflictError):
    default_message = "Cannot delete category with existing bills"


__all__ = [
    "AuthError",
    "CategoryInUseError",
    "ConflictError",
    "DuplicateCategoryError",
    "EmailExistsError",
    "FinmindError",
    "ForbiddenError",
    "ImmutableCategoryError",
    "InvalidCategoryError",
    "InvalidCredentialsError",
    "InvalidSignatureError",
    "MalformedHeaderError",
    "MalformedTokenError",
    "MissingHeaderError",
    "NotFoundError",
    "TokenExpiredError",
    "ValidationError",
    "WrongTokenTypeError",
]
