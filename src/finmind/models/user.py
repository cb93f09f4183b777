"""User model supporting authentication and profiles."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from .common import utcnow


class User(SQLModel, table=True):
    """Registered account; owns bills and user-created categories."""

    __tablename__: ClassVar[str] = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=128)
    email: str = Field(nullable=False, unique=True, index=True, max_length=255)
    password_hash: str = Field(nullable=False, max_length=255)
    avatar: str = Field(default="", max_length=512)
    created_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False, sa_type=DateTime)
    deleted_at: Optional[datetime] = Field(default=None, index=True, sa_type=DateTime)
