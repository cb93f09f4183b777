"""SQLModel implementation of Bill repository."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from ...domain.bills import (
    BillFilters,
    BillQuery,
    BillView,
    CategoryTotal,
    StatisticsWindow,
    TypeTotal,
)
from ...errors import NotFoundError
from ...models.bill import Bill
from ...models.category import Category
from ...models.common import ENTRY_TYPES, utcnow
from ..database import SessionFactory

_SORT_COLUMNS = {
    "bill_time": Bill.bill_time,
    "amount": Bill.amount,
    "merchant": Bill.merchant,
    "created_at": Bill.created_at,
}


def _to_view(bill: Bill, category_name: Optional[str]) -> BillView:
    return BillView(
        id=bill.id,  # type: ignore[arg-type]
        user_id=bill.user_id,
        category_id=bill.category_id,
        category_name=category_name,
        type=bill.type,
        amount=float(bill.amount),
        merchant=bill.merchant,
        description=bill.description or "",
        bill_time=bill.bill_time,
        created_at=bill.created_at,
        updated_at=bill.updated_at,
    )


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _owned_live(user_id: int) -> list:
    return [Bill.user_id == user_id, Bill.deleted_at.is_(None)]  # type: ignore[union-attr]


def _filter_clauses(filters: BillFilters) -> list:
    clauses = []
    if filters.type:
        clauses.append(Bill.type == filters.type)
    if filters.category_id is not None:
        clauses.append(Bill.category_id == filters.category_id)
    if filters.start is not None:
        clauses.append(Bill.bill_time >= filters.start)
    if filters.end is not None:
        clauses.append(Bill.bill_time <= filters.end)
    search_term = (filters.search or "").strip()
    if search_term:
        pattern = _like_pattern(search_term)
        clauses.append(
            Bill.merchant.ilike(pattern, escape="\\")  # type: ignore[attr-defined]
            | Bill.description.ilike(pattern, escape="\\")  # type: ignore[attr-defined]
        )
    return clauses


def _window_clauses(window: StatisticsWindow) -> list:
    return [Bill.bill_time >= window.start, Bill.bill_time < window.end]


class SQLModelBillRepository:
    """SQLModel-based bill repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def _load_view(self, session: Session, bill_id: int, user_id: int) -> Optional[BillView]:
        statement = (
            select(Bill, Category.name)
            .join(Category, Category.id == Bill.category_id, isouter=True)
            .where(Bill.id == bill_id)
            .where(*_owned_live(user_id))
        )
        row = session.exec(statement).first()
        if row is None:
            return None
        bill, category_name = row
        return _to_view(bill, category_name)

    def get_by_id(self, bill_id: int, *, user_id: int) -> Optional[BillView]:
        """Retrieve a live bill owned by ``user_id``."""
        with self.session_factory() as session:
            return self._load_view(session, bill_id, user_id)

    def create(self, bill: Bill) -> BillView:
        """Create a new bill."""
        with self.session_factory() as session:
            session.add(bill)
            session.flush()
            session.refresh(bill)
            view = self._load_view(session, bill.id, bill.user_id)  # type: ignore[arg-type]
            if view is None:
                raise NotFoundError("Bill not found")
            return view

    def update(self, bill_id: int, changes: dict[str, Any], *, user_id: int) -> Optional[BillView]:
        """Apply ``changes`` to an owned bill; ``None`` when it does not exist."""
        with self.session_factory() as session:
            bill = session.exec(
                select(Bill).where(Bill.id == bill_id).where(*_owned_live(user_id))
            ).first()
            if bill is None:
                return None
            for key, value in changes.items():
                setattr(bill, key, value)
            bill.updated_at = utcnow()
            session.add(bill)
            session.flush()
            return self._load_view(session, bill_id, user_id)

    def delete(self, bill_id: int, *, user_id: int) -> bool:
        """Soft-delete an owned bill; return False when it does not exist."""
        with self.session_factory() as session:
            bill = session.exec(
                select(Bill).where(Bill.id == bill_id).where(*_owned_live(user_id))
            ).first()
            if bill is None:
                return False
            now = utcnow()
            bill.deleted_at = now
            bill.updated_at = now
            session.add(bill)
            return True

    def search(self, query: BillQuery, *, user_id: int) -> tuple[list[BillView], int]:
        """Return one page of matching bills and the total match count."""
        clauses = _owned_live(user_id) + _filter_clauses(query.filters)

        column = _SORT_COLUMNS[query.sort_by]
        if query.sort_order == "asc":
            ordering = (column.asc(), Bill.id.asc())  # type: ignore[union-attr]
        else:
            ordering = (column.desc(), Bill.id.desc())  # type: ignore[union-attr]

        with self.session_factory() as session:
            count_stmt = select(func.count()).select_from(Bill).where(*clauses)
            total = session.exec(count_stmt).one()

            data_stmt = (
                select(Bill, Category.name)
                .join(Category, Category.id == Bill.category_id, isouter=True)
                .where(*clauses)
                .order_by(*ordering)
                .offset(query.offset)
                .limit(query.limit)
            )
            rows = [_to_view(bill, name) for bill, name in session.exec(data_stmt).all()]
            return rows, int(total or 0)

    def totals_by_type(self, window: StatisticsWindow, *, user_id: int) -> list[TypeTotal]:
        """Sum and count bills in ``window`` grouped by type (income first)."""
        statement = (
            select(Bill.type, func.sum(Bill.amount), func.count(Bill.id))
            .where(*_owned_live(user_id))
            .where(*_window_clauses(window))
            .group_by(Bill.type)
        )
        with self.session_factory() as session:
            rows = session.exec(statement).all()
        totals = [
            TypeTotal(type=entry_type, total=float(total or 0.0), count=int(count))
            for entry_type, total, count in rows
        ]
        order = {entry_type: index for index, entry_type in enumerate(ENTRY_TYPES)}
        return sorted(totals, key=lambda item: order.get(item.type, len(order)))

    def totals_by_category(
        self, window: StatisticsWindow, *, user_id: int
    ) -> list[CategoryTotal]:
        """Sum and count bills in ``window`` grouped by (category, type), largest first."""
        total_column = func.sum(Bill.amount).label("total")
        statement = (
            select(Bill.category_id, Category.name, Bill.type, total_column, func.count(Bill.id))
            .join(Category, Category.id == Bill.category_id, isouter=True)
            .where(*_owned_live(user_id))
            .where(*_window_clauses(window))
            .group_by(Bill.category_id, Category.name, Bill.type)
            .order_by(total_column.desc(), Bill.category_id.asc())  # type: ignore[attr-defined]
        )
        with self.session_factory() as session:
            rows = session.exec(statement).all()
        return [
            CategoryTotal(
                category_id=category_id,
                category_name=name,
                type=entry_type,
                total=float(total or 0.0),
                count=int(count),
            )
            for category_id, name, entry_type, total, count in rows
        ]
