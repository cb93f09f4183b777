"""Bill ledger: owner-scoped CRUD, filtered listing, and statistics."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..domain.bills import (
    BillDraft,
    BillPage,
    BillPatch,
    BillQuery,
    BillView,
    Pagination,
    Statistics,
    StatisticsWindow,
)
from ..domain.repositories.bill import BillRepository
from ..domain.repositories.category import CategoryRepository
from ..errors import InvalidCategoryError, NotFoundError
from ..logging_config import get_logger
from ..models.bill import Bill
from ..models.common import utcnow

logger = get_logger("services.bills")


class BillLedger:
    """Per-user bill operations backed by bill and category repositories."""

    def __init__(self, bills: BillRepository, categories: CategoryRepository):
        self.bills = bills
        self.categories = categories

    def create(self, user_id: int, draft: BillDraft) -> BillView:
        """Record a bill; the category may belong to anyone but must exist."""
        if self.categories.get_by_id(draft.category_id) is None:
            raise InvalidCategoryError()
        bill = Bill(
            user_id=user_id,
            category_id=draft.category_id,
            type=draft.type,
            amount=draft.amount,
            merchant=draft.merchant,
            description=draft.description,
            bill_time=draft.bill_time or utcnow(),
        )
        view = self.bills.create(bill)
        logger.info("Bill created", extra={"user_id": user_id, "bill_id": view.id})
        return view

    def get(self, user_id: int, bill_id: int) -> BillView:
        view = self.bills.get_by_id(bill_id, user_id=user_id)
        if view is None:
            raise NotFoundError("Bill not found")
        return view

    def update(self, user_id: int, bill_id: int, patch: BillPatch) -> BillView:
        """Apply supplied fields; a new category must be ownerless or the caller's."""
        current = self.get(user_id, bill_id)
        changes = patch.changes()
        if not changes:
            return current
        if patch.category_id is not None:
            if self.categories.get_visible(patch.category_id, user_id=user_id) is None:
                raise InvalidCategoryError()
        view = self.bills.update(bill_id, changes, user_id=user_id)
        if view is None:
            raise NotFoundError("Bill not found")
        return view

    def delete(self, user_id: int, bill_id: int) -> None:
        if not self.bills.delete(bill_id, user_id=user_id):
            raise NotFoundError("Bill not found")
        logger.info("Bill deleted", extra={"user_id": user_id, "bill_id": bill_id})

    def list(self, user_id: int, query: BillQuery) -> BillPage:
        rows, total = self.bills.search(query, user_id=user_id)
        return BillPage(
            bills=rows,
            pagination=Pagination(page=query.page, limit=query.limit, total=total),
        )

    def statistics(
        self,
        user_id: int,
        *,
        period: str = "month",
        year: Optional[int] = None,
        month: Optional[int] = None,
        today: Optional[datetime] = None,
    ) -> Statistics:
        """Totals by type and by category over a calendar month or year."""
        today = today or utcnow()
        window = StatisticsWindow.for_period(
            period,
            year if year is not None else today.year,
            month if month is not None else today.month,
        )
        return Statistics(
            window=window,
            summary=self.bills.totals_by_type(window, user_id=user_id),
            categories=self.bills.totals_by_category(window, user_id=user_id),
        )
