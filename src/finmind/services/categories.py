"""Category registry: shared defaults plus user-owned categories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..constants.categories import DEFAULT_CATEGORIES
from ..domain.repositories.category import CategoryRepository
from ..errors import DuplicateCategoryError, ForbiddenError, ImmutableCategoryError, NotFoundError
from ..logging_config import get_logger
from ..models.category import Category, UserOwner

logger = get_logger("services.categories")


@dataclass(frozen=True, slots=True)
class CategoryPatch:
    """Explicit partial update; ``None`` means "leave unchanged"."""

    name: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None

    def changes(self) -> dict[str, str]:
        values = {"name": self.name, "icon": self.icon, "color": self.color}
        return {key: value for key, value in values.items() if value is not None}


class CategoryRegistry:
    """Lists, creates, updates and deletes categories under ownership rules."""

    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    def list(self, category_type: Optional[str] = None) -> list[Category]:
        return self.repo.list_all(category_type)

    def create(
        self,
        user_id: int,
        *,
        name: str,
        category_type: str,
        icon: str,
        color: str,
    ) -> Category:
        if self.repo.find_by_name(name, category_type) is not None:
            raise DuplicateCategoryError()
        category = self.repo.create(
            Category(
                name=name,
                type=category_type,
                icon=icon,
                color=color,
                is_default=False,
                user_id=user_id,
            )
        )
        logger.info(
            "Category created",
            extra={"user_id": user_id, "category_id": category.id, "category_type": category_type},
        )
        return category

    def _owned_for_write(self, user_id: int, category_id: int, *, action: str) -> Category:
        category = self.repo.get_visible(category_id, user_id=user_id)
        if category is None:
            raise NotFoundError("Category not found")
        if category.is_default:
            raise ImmutableCategoryError(f"Cannot {action} default category")
        owner = category.owner
        if not isinstance(owner, UserOwner) or owner.user_id != user_id:
            raise ForbiddenError()
        return category

    def update(self, user_id: int, category_id: int, patch: CategoryPatch) -> Category:
        category = self._owned_for_write(user_id, category_id, action="modify")
        changes = patch.changes()
        if not changes:
            return category
        new_name = changes.get("name")
        if new_name is not None and new_name != category.name:
            clash = self.repo.find_by_name(new_name, category.type)
            if clash is not None and clash.id != category.id:
                raise DuplicateCategoryError()
        return self.repo.update(category_id, changes)

    def delete(self, user_id: int, category_id: int) -> None:
        self._owned_for_write(user_id, category_id, action="delete")
        self.repo.delete_if_unused(category_id)
        logger.info("Category deleted", extra={"user_id": user_id, "category_id": category_id})

    def seed_defaults(self) -> int:
        """Insert the system categories into an empty registry; return rows added."""
        if self.repo.count() > 0:
            logger.info("Categories already seeded")
            return 0
        rows = [
            Category(
                name=item.name,
                type=item.type,
                icon=item.icon,
                color=item.color,
                is_default=True,
                user_id=None,
            )
            for item in DEFAULT_CATEGORIES
        ]
        self.repo.create_many(rows)
        logger.info("Seeded default categories", extra={"count": len(rows)})
        return len(rows)
