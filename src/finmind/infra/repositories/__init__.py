"""Concrete repository implementations using SQLModel."""

from .bill import SQLModelBillRepository
from .category import SQLModelCategoryRepository

__all__ = [
    "SQLModelBillRepository",
    "SQLModelCategoryRepository",
]
