"""Service module exports."""

from . import auth, bills, categories, tokens

__all__ = [
    "auth",
    "bills",
    "categories",
    "tokens",
]
