"""Repository protocol definitions for domain layer."""

from .bill import BillRepository
from .category import CategoryRepository

__all__ = [
    "BillRepository",
    "CategoryRepository",
]
