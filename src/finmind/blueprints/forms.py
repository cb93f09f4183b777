"""Shared input-validation helpers for JSON bodies and query strings."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, Optional

from flask import request

from ..errors import ValidationError
from ..models.common import ENTRY_TYPES, MAX_ID


def json_body() -> Mapping[str, Any]:
    """Return the request's JSON object or raise ``ValidationError``."""

    payload = request.get_json(silent=True)
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return payload


def parse_timestamp(value: str) -> datetime:
    """Parse ISO-8601 into a naive UTC datetime (aware inputs are converted)."""

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_day(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string."""

    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


@dataclass
class Form:
    """Base form: binds raw mapping data and accumulates per-field errors."""

    raw_data: Mapping[str, Any] = field(default_factory=dict, repr=False)
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)

    def validate(self) -> bool:  # pragma: no cover - overridden
        raise NotImplementedError

    def ensure_valid(self) -> None:
        """Validate and raise ``ValidationError`` carrying the field errors."""

        if not self.validate():
            raise ValidationError("Invalid request", self.errors)

    def _add_error(self, field_name: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field_name, []).append(message)

    # JSON body fields ------------------------------------------------------

    def _text(
        self,
        key: str,
        *,
        label: str,
        required: bool = False,
        min_length: int = 0,
        max_length: Optional[int] = None,
        strip: bool = True,
    ) -> Optional[str]:
        value = self.raw_data.get(key)
        if value is None:
            if required:
                self._add_error(key, f"{label} is required.")
            return None
        if not isinstance(value, str):
            self._add_error(key, f"{label} must be a string.")
            return None
        text = value.strip() if strip else value
        if len(text) < min_length:
            if min_length <= 1:
                self._add_error(key, f"{label} cannot be empty.")
            else:
                self._add_error(key, f"{label} must be at least {min_length} characters.")
            return None
        if max_length is not None and len(text) > max_length:
            self._add_error(key, f"{label} must be {max_length} characters or fewer.")
            return None
        return text

    def _entry_type(self, key: str = "type", *, required: bool = False) -> Optional[str]:
        value = self.raw_data.get(key)
        if value is None:
            if required:
                self._add_error(key, "Type is required.")
            return None
        if value not in ENTRY_TYPES:
            self._add_error(key, "Type must be 'income' or 'expense'.")
            return None
        return value

    def _identifier(self, key: str, *, label: str, required: bool = False) -> Optional[int]:
        value = self.raw_data.get(key)
        if value is None:
            if required:
                self._add_error(key, f"{label} is required.")
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            self._add_error(key, f"{label} must be a whole number.")
            return None
        if value <= 0:
            self._add_error(key, f"{label} must be greater than zero.")
            return None
        if value > MAX_ID:
            self._add_error(key, f"{label} is out of range.")
            return None
        return value

    def _amount(self, key: str = "amount", *, required: bool = False) -> Optional[float]:
        value = self.raw_data.get(key)
        if value is None:
            if required:
                self._add_error(key, "Amount is required.")
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            self._add_error(key, "Amount must be a number.")
            return None
        amount = float(value)
        if not math.isfinite(amount) or amount <= 0:
            self._add_error(key, "Amount must be greater than zero.")
            return None
        return amount

    def _timestamp(self, key: str, *, label: str) -> Optional[datetime]:
        value = self.raw_data.get(key)
        if value is None or value == "":
            return None
        if not isinstance(value, str):
            self._add_error(key, f"{label} must be an ISO-8601 string.")
            return None
        try:
            return parse_timestamp(value)
        except ValueError:
            self._add_error(key, f"{label} must be an ISO-8601 timestamp.")
            return None

    # Query-string fields ---------------------------------------------------

    def _query_int(
        self,
        key: str,
        *,
        label: str,
        default: Optional[int],
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
    ) -> Optional[int]:
        raw = self.raw_data.get(key)
        if raw is None or str(raw).strip() == "":
            return default
        try:
            value = int(str(raw).strip())
        except ValueError:
            self._add_error(key, f"{label} must be a whole number.")
            return default
        if minimum is not None and value < minimum:
            self._add_error(key, f"{label} must be at least {minimum}.")
            return default
        if maximum is not None and value > maximum:
            self._add_error(key, f"{label} must be at most {maximum}.")
            return default
        return value

    def _query_choice(self, key: str, *, label: str, choices: tuple[str, ...], default: Optional[str]) -> Optional[str]:
        raw = self.raw_data.get(key)
        if raw is None or str(raw).strip() == "":
            return default
        value = str(raw).strip().lower()
        if value not in choices:
            self._add_error(key, f"{label} must be one of: {', '.join(choices)}.")
            return default
        return value

    def _query_day(self, key: str, *, label: str) -> Optional[date]:
        raw = self.raw_data.get(key)
        if raw is None or str(raw).strip() == "":
            return None
        try:
            return parse_day(str(raw))
        except ValueError:
            self._add_error(key, f"{label} must be a date (YYYY-MM-DD).")
            return None
