"""SQLModel table exports."""

from .bill import Bill
from .category import Category, CategoryOwner, SystemOwner, UserOwner
from .common import ENTRY_TYPES, EXPENSE, INCOME
from .user import User

__all__ = [
    "Bill",
    "Category",
    "CategoryOwner",
    "ENTRY_TYPES",
    "EXPENSE",
    "INCOME",
    "SystemOwner",
    "User",
    "UserOwner",
]
