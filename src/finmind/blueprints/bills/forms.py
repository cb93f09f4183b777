"""Bill form validation helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...domain.bills import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    MAX_PAGE,
    PERIODS,
    SORT_FIELDS,
    SORT_ORDERS,
    BillDraft,
    BillFilters,
    BillPatch,
    BillQuery,
)
from ...models.common import ENTRY_TYPES, MAX_ID
from ..forms import Form, end_of_day, start_of_day


@dataclass
class BillForm(Form):
    """Body of ``POST /bills``; ``bill_time`` defaults to now when omitted."""

    type: Optional[str] = None
    amount: Optional[float] = None
    category_id: Optional[int] = None
    merchant: Optional[str] = None
    description: str = ""
    bill_time: Optional[datetime] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.type = self._entry_type(required=True)
        self.amount = self._amount(required=True)
        self.category_id = self._identifier("category_id", label="Category", required=True)
        self.merchant = self._text("merchant", label="Merchant", required=True, min_length=1, max_length=255)
        self.description = self._text("description", label="Description", max_length=1024) or ""
        self.bill_time = self._timestamp("bill_time", label="Bill time")
        return not self.errors

    def to_draft(self) -> BillDraft:
        return BillDraft(
            type=self.type,  # type: ignore[arg-type]
            amount=self.amount,  # type: ignore[arg-type]
            category_id=self.category_id,  # type: ignore[arg-type]
            merchant=self.merchant,  # type: ignore[arg-type]
            description=self.description,
            bill_time=self.bill_time,
        )


@dataclass
class BillUpdateForm(Form):
    """Body of ``PUT /bills/<id>``.

    Omitted (or null) fields stay unchanged. Supplied values are validated
    like on create, so ``amount: 0`` or ``merchant: ""`` is rejected rather
    than silently ignored; ``description: ""`` clears the description.
    """

    type: Optional[str] = None
    amount: Optional[float] = None
    category_id: Optional[int] = None
    merchant: Optional[str] = None
    description: Optional[str] = None
    bill_time: Optional[datetime] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.type = self._entry_type()
        self.amount = self._amount()
        self.category_id = self._identifier("category_id", label="Category")
        self.merchant = self._text("merchant", label="Merchant", min_length=1, max_length=255)
        self.description = self._text("description", label="Description", max_length=1024)
        self.bill_time = self._timestamp("bill_time", label="Bill time")
        return not self.errors

    def to_patch(self) -> BillPatch:
        return BillPatch(
            type=self.type,
            amount=self.amount,
            category_id=self.category_id,
            merchant=self.merchant,
            description=self.description,
            bill_time=self.bill_time,
        )


@dataclass
class BillListQuery(Form):
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    type: Optional[str] = None
    category_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search: Optional[str] = None
    sort_by: str = "bill_time"
    sort_order: str = "desc"

    def validate(self) -> bool:
        self.errors.clear()
        self.page = self._query_int(  # type: ignore[assignment]
            "page", label="Page", default=DEFAULT_PAGE, minimum=1, maximum=MAX_PAGE
        )
        self.limit = self._query_int(  # type: ignore[assignment]
            "limit", label="Limit", default=DEFAULT_LIMIT, minimum=1, maximum=MAX_LIMIT
        )
        self.type = self._query_choice("type", label="Type", choices=ENTRY_TYPES, default=None)
        self.category_id = self._query_int(
            "category_id", label="Category", default=None, minimum=1, maximum=MAX_ID
        )
        self.start_date = self._query_day("start_date", label="Start date")
        self.end_date = self._query_day("end_date", label="End date")
        if self.start_date and self.end_date and self.start_date > self.end_date:
            self._add_error("end_date", "End date must not be before start date.")
        search = self.raw_data.get("search")
        self.search = search.strip() if isinstance(search, str) and search.strip() else None
        self.sort_by = self._query_choice(  # type: ignore[assignment]
            "sort_by", label="Sort field", choices=SORT_FIELDS, default="bill_time"
        )
        self.sort_order = self._query_choice(  # type: ignore[assignment]
            "sort_order", label="Sort order", choices=SORT_ORDERS, default="desc"
        )
        return not self.errors

    def to_query(self) -> BillQuery:
        return BillQuery(
            filters=BillFilters(
                type=self.type,
                category_id=self.category_id,
                start=start_of_day(self.start_date) if self.start_date else None,
                end=end_of_day(self.end_date) if self.end_date else None,
                search=self.search,
            ),
            page=self.page,
            limit=self.limit,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
        )


@dataclass
class StatisticsQuery(Form):
    period: str = "month"
    year: Optional[int] = None
    month: Optional[int] = None

    def validate(self) -> bool:
        self.errors.clear()
        self.period = self._query_choice(  # type: ignore[assignment]
            "period", label="Period", choices=PERIODS, default="month"
        )
        self.year = self._query_int("year", label="Year", default=None, minimum=1, maximum=9998)
        self.month = self._query_int("month", label="Month", default=None, minimum=1, maximum=12)
        return not self.errors
