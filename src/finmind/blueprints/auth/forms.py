"""Registration, login, and profile form validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...services.auth import MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH, is_valid_email
from ..forms import Form


@dataclass
class RegisterForm(Form):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._text("name", label="Name", required=True, min_length=MIN_NAME_LENGTH, max_length=128)
        self.email = self._text("email", label="Email", required=True, min_length=1, max_length=255)
        if self.email is not None and not is_valid_email(self.email):
            self._add_error("email", "Enter a valid email address.")
            self.email = None
        self.password = self._text(
            "password",
            label="Password",
            required=True,
            min_length=MIN_PASSWORD_LENGTH,
            max_length=128,
            strip=False,
        )
        return not self.errors


@dataclass
class LoginForm(Form):
    """Only presence is checked so every bad credential surfaces as 401."""

    email: Optional[str] = None
    password: Optional[str] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.email = self._text("email", label="Email", required=True, min_length=1)
        self.password = self._text("password", label="Password", required=True, min_length=1, strip=False)
        return not self.errors


@dataclass
class ProfileForm(Form):
    name: Optional[str] = None
    avatar: Optional[str] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.name = self._text("name", label="Name", min_length=MIN_NAME_LENGTH, max_length=128)
        self.avatar = self._text("avatar", label="Avatar", max_length=512)
        return not self.errors
