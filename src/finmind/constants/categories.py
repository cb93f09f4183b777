"""
System default categories seeded into every fresh database.
These rows are ownerless and immutable through the API.
"""

from __future__ import annotations

from typing import NamedTuple

from ..models.common import EXPENSE, INCOME


class DefaultCategory(NamedTuple):
    name: str
    type: str
    icon: str
    color: str


INCOME_CATEGORIES = [
    DefaultCategory("Salary", INCOME, "briefcase", "#4CD964"),
    DefaultCategory("Bonus", INCOME, "award", "#5AC8FA"),
    DefaultCategory("Part-time", INCOME, "clock", "#007AFF"),
    DefaultCategory("Investment", INCOME, "trending-up", "#34C759"),
    DefaultCategory("Other Income", INCOME, "plus-circle", "#5856D6"),
]

EXPENSE_CATEGORIES = [
    DefaultCategory("Food", EXPENSE, "coffee", "#FF9500"),
    DefaultCategory("Shopping", EXPENSE, "shopping-bag", "#FF3B30"),
    DefaultCategory("Transport", EXPENSE, "map", "#FF2D55"),
    DefaultCategory("Entertainment", EXPENSE, "film", "#AF52DE"),
    DefaultCategory("Housing", EXPENSE, "home", "#FF9500"),
    DefaultCategory("Travel", EXPENSE, "map-pin", "#5856D6"),
    DefaultCategory("Healthcare", EXPENSE, "activity", "#FF2D55"),
    DefaultCategory("Education", EXPENSE, "book", "#5AC8FA"),
    DefaultCategory("Other Expense", EXPENSE, "more-horizontal", "#8E8E93"),
]

DEFAULT_CATEGORIES: list[DefaultCategory] = INCOME_CATEGORIES + EXPENSE_CATEGORIES
