"""Category repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for managing category entities."""

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a live category regardless of owner."""
        ...

    def get_visible(self, category_id: int, *, user_id: int) -> Optional[Category]:
        """Retrieve a live category that is ownerless or owned by ``user_id``."""
        ...

    def find_by_name(self, name: str, category_type: str) -> Optional[Category]:
        """Retrieve a live category by its (name, type) pair."""
        ...

    def list_all(self, category_type: Optional[str] = None) -> list[Category]:
        """List live categories, defaults first then creation order."""
        ...

    def count(self) -> int:
        """Count live categories."""
        ...

    def create(self, category: Category) -> Category:
        """Create a new category."""
        ...

    def update(self, category_id: int, changes: dict[str, Any]) -> Category:
        """Apply ``changes`` to a category."""
        ...

    def delete_if_unused(self, category_id: int) -> None:
        """Soft-delete a category unless a live bill references it."""
        ...
