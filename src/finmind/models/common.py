"""Shared column helpers and enumerations for table models."""

from __future__ import annotations

from datetime import datetime, timezone

INCOME = "income"
EXPENSE = "expense"
ENTRY_TYPES: tuple[str, ...] = (INCOME, EXPENSE)
ENTRY_TYPE_CHECK = "type IN ('income', 'expense')"
# Largest value an INTEGER primary key can hold.
MAX_ID = 2**63 - 1


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime (the storage convention)."""

    return datetime.now(timezone.utc).replace(tzinfo=None)
