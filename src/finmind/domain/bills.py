"""Value objects for bill queries, results, and statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from math import ceil
from typing import Any, Optional, Sequence

SORT_FIELDS: tuple[str, ...] = ("bill_time", "amount", "merchant", "created_at")
SORT_ORDERS: tuple[str, ...] = ("asc", "desc")
PERIODS: tuple[str, ...] = ("month", "year")
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
MAX_PAGE = 2**63 // MAX_LIMIT


@dataclass(frozen=True, slots=True)
class BillFilters:
    """Conjunctive predicates applied to a bill listing."""

    type: Optional[str] = None
    category_id: Optional[int] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    search: Optional[str] = None


@dataclass(frozen=True, slots=True)
class BillQuery:
    """Filters plus paging and ordering for ``BillLedger.list``."""

    filters: BillFilters = field(default_factory=BillFilters)
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = "bill_time"
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True, slots=True)
class Pagination:
    """Pagination metadata for bill listings."""

    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.total == 0:
            return 0
        return ceil(self.total / self.limit)

    def to_dict(self) -> dict[str, int]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
        }


@dataclass(frozen=True, slots=True)
class BillView:
    """A bill joined with its category name."""

    id: int
    user_id: int
    category_id: int
    category_name: Optional[str]
    type: str
    amount: float
    merchant: str
    description: str
    bill_time: datetime
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class BillPage:
    bills: Sequence[BillView]
    pagination: Pagination


@dataclass(frozen=True, slots=True)
class BillDraft:
    """Validated input for creating a bill."""

    type: str
    amount: float
    category_id: int
    merchant: str
    description: str = ""
    bill_time: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class BillPatch:
    """Explicit partial update; ``None`` means "leave unchanged"."""

    type: Optional[str] = None
    amount: Optional[float] = None
    category_id: Optional[int] = None
    merchant: Optional[str] = None
    description: Optional[str] = None
    bill_time: Optional[datetime] = None

    def changes(self) -> dict[str, Any]:
        values = {
            "type": self.type,
            "amount": self.amount,
            "category_id": self.category_id,
            "merchant": self.merchant,
            "description": self.description,
            "bill_time": self.bill_time,
        }
        return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True, slots=True)
class StatisticsWindow:
    """Half-open ``[start, end)`` window covering a calendar month or year."""

    period: str
    year: int
    month: int
    start: datetime
    end: datetime

    @property
    def last_day(self) -> date:
        return (self.end - timedelta(days=1)).date()

    @classmethod
    def for_period(cls, period: str, year: int, month: int) -> StatisticsWindow:
        if period == "year":
            start = datetime(year, 1, 1)
            end = datetime(year + 1, 1, 1)
        else:
            start = datetime(year, month, 1)
            end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
        return cls(period=period, year=year, month=month, start=start, end=end)


@dataclass(frozen=True, slots=True)
class TypeTotal:
    type: str
    total: float
    count: int


@dataclass(frozen=True, slots=True)
class CategoryTotal:
    category_id: int
    category_name: Optional[str]
    type: str
    total: float
    count: int


@dataclass(frozen=True, slots=True)
class Statistics:
    window: StatisticsWindow
    summary: Sequence[TypeTotal]
    categories: Sequence[CategoryTotal]
