"""SQLModel definitions for bills (income/expense transactions)."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import CheckConstraint, DateTime
from sqlmodel import Field, SQLModel

from .common import ENTRY_TYPE_CHECK, utcnow


class Bill(SQLModel, table=True):
    """A single income or expense record owned by one user."""

    __tablename__: ClassVar[str] = "bill"
    __table_args__ = (
        CheckConstraint(ENTRY_TYPE_CHECK, name="ck_bill_type"),
        CheckConstraint("amount > 0", name="ck_bill_amount_positive"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    category_id: int = Field(foreign_key="category.id", nullable=False, index=True)
    type: str = Field(nullable=False, max_length=16)
    amount: float = Field(nullable=False, description="Always positive; direction comes from type")
    merchant: str = Field(nullable=False, max_length=255)
    description: str = Field(default="", max_length=1024)
    bill_time: datetime = Field(nullable=False, index=True, sa_type=DateTime)
    created_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=DateTime)
    deleted_at: Optional[datetime] = Field(default=None, index=True, sa_type=DateTime)
