"""Blueprint exports."""

from . import auth, bills, categories, health, user

__all__ = [
    "auth",
    "bills",
    "categories",
    "health",
    "user",
]
