"""SQLModel implementation of Category repository."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...errors import CategoryInUseError, DuplicateCategoryError, NotFoundError
from ...models.bill import Bill
from ...models.category import Category
from ...models.common import utcnow
from ..database import SessionFactory


def _live_categories():
    return select(Category).where(Category.deleted_at.is_(None))  # type: ignore[union-attr]


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, category_id: int) -> Optional[Category]:
        """Retrieve a live category regardless of owner."""
        with self.session_factory() as session:
            obj = session.exec(_live_categories().where(Category.id == category_id)).first()
            if obj:
                session.expunge(obj)
            return obj

    def get_visible(self, category_id: int, *, user_id: int) -> Optional[Category]:
        """Retrieve a live category that is ownerless or owned by ``user_id``."""
        with self.session_factory() as session:
            statement = (
                _live_categories()
                .where(Category.id == category_id)
                .where((Category.user_id == user_id) | (Category.user_id.is_(None)))  # type: ignore[union-attr]
            )
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj

    def find_by_name(self, name: str, category_type: str) -> Optional[Category]:
        """Retrieve a live category by its (name, type) pair."""
        with self.session_factory() as session:
            statement = (
                _live_categories()
                .where(Category.name == name)
                .where(Category.type == category_type)
            )
            obj = session.exec(statement).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, category_type: Optional[str] = None) -> list[Category]:
        """List live categories, defaults first then creation order."""
        with self.session_factory() as session:
            statement = _live_categories()
            if category_type:
                statement = statement.where(Category.type == category_type)
            statement = statement.order_by(
                Category.is_default.desc(),  # type: ignore[attr-defined]
                Category.created_at.asc(),  # type: ignore[attr-defined]
                Category.id.asc(),  # type: ignore[union-attr]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count(self) -> int:
        """Count live categories."""
        with self.session_factory() as session:
            total = session.exec(
                select(func.count())
                .select_from(Category)
                .where(Category.deleted_at.is_(None))  # type: ignore[union-attr]
            ).one()
            return int(total or 0)

    def create(self, category: Category) -> Category:
        """Create a new category; the live (name, type) index rejects duplicates."""
        with self.session_factory() as session:
            session.add(category)
            try:
                session.flush()
            except IntegrityError as exc:
                raise DuplicateCategoryError() from exc
            session.refresh(category)
            session.expunge(category)
            return category

    def create_many(self, categories: list[Category]) -> list[Category]:
        """Insert several categories in one transaction."""
        with self.session_factory() as session:
            session.add_all(categories)
            session.flush()
            for category in categories:
                session.refresh(category)
            session.expunge_all()
            return categories

    def update(self, category_id: int, changes: dict[str, Any]) -> Category:
        """Apply ``changes`` to a live category."""
        with self.session_factory() as session:
            category = session.exec(_live_categories().where(Category.id == category_id)).first()
            if category is None:
                raise NotFoundError("Category not found")
            for key, value in changes.items():
                setattr(category, key, value)
            category.updated_at = utcnow()
            session.add(category)
            try:
                session.flush()
            except IntegrityError as exc:
                raise DuplicateCategoryError() from exc
            session.refresh(category)
            session.expunge(category)
            return category

    def delete_if_unused(self, category_id: int) -> None:
        """Soft-delete a category unless a live bill references it.

        The usage count and the delete share one transaction; concurrent bill
        creation can still slip in between under weak isolation levels.
        """
        with self.session_factory() as session:
            category = session.exec(_live_categories().where(Category.id == category_id)).first()
            if category is None:
                raise NotFoundError("Category not found")
            in_use = session.exec(
                select(func.count())
                .select_from(Bill)
                .where(Bill.category_id == category_id)
                .where(Bill.deleted_at.is_(None))  # type: ignore[union-attr]
            ).one()
            if in_use:
                raise CategoryInUseError()
            now = utcnow()
            category.deleted_at = now
            category.updated_at = now
            session.add(category)
