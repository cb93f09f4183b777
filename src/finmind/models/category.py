"""Bill category definitions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional, Union

from sqlalchemy import CheckConstraint, DateTime, Index, text
from sqlmodel import Field, SQLModel

from .common import EXPENSE, ENTRY_TYPE_CHECK, utcnow


@dataclass(frozen=True, slots=True)
class SystemOwner:
    """Owner of the seeded default categories."""


@dataclass(frozen=True, slots=True)
class UserOwner:
    """A category created by (and only mutable by) ``user_id``."""

    user_id: int


CategoryOwner = Union[SystemOwner, UserOwner]


class Category(SQLModel, table=True):
    """Classification tag for bills, either system-default or user-created."""

    __tablename__: ClassVar[str] = "category"
    __table_args__ = (
        CheckConstraint(ENTRY_TYPE_CHECK, name="ck_category_type"),
        # (name, type) is unique among live rows only so a soft-deleted
        # category does not block re-creating the same name.
        Index(
            "uq_category_live_name_type",
            "name",
            "type",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=64)
    type: str = Field(default=EXPENSE, nullable=False, max_length=16, index=True)
    icon: str = Field(default="", nullable=False, max_length=64)
    color: str = Field(default="", nullable=False, max_length=16)
    is_default: bool = Field(default=False, nullable=False)
    user_id: Optional[int] = Field(default=None, foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=DateTime)
    deleted_at: Optional[datetime] = Field(default=None, index=True, sa_type=DateTime)

    @property
    def owner(self) -> CategoryOwner:
        if self.user_id is None:
            return SystemOwner()
        return UserOwner(self.user_id)
