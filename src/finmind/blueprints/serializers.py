"""JSON shapes for API resources."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..domain.bills import BillPage, BillView, Statistics
from ..models.category import Category
from ..models.user import User


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def user_to_dict(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "avatar": user.avatar or "",
        "created_at": _iso(user.created_at),
        "updated_at": _iso(user.updated_at),
    }


def category_to_dict(category: Category) -> dict[str, Any]:
    return {
        "id": category.id,
        "name": category.name,
        "type": category.type,
        "icon": category.icon,
        "color": category.color,
        "is_default": category.is_default,
        "user_id": category.user_id,
        "created_at": _iso(category.created_at),
        "updated_at": _iso(category.updated_at),
    }


def bill_to_dict(bill: BillView) -> dict[str, Any]:
    return {
        "id": bill.id,
        "type": bill.type,
        "amount": bill.amount,
        "category_id": bill.category_id,
        "category": bill.category_name or "",
        "merchant": bill.merchant,
        "description": bill.description,
        "time": _iso(bill.bill_time),
        "synced": True,
        "created_at": _iso(bill.created_at),
        "updated_at": _iso(bill.updated_at),
    }


def bill_page_to_dict(page: BillPage) -> dict[str, Any]:
    return {
        "bills": [bill_to_dict(bill) for bill in page.bills],
        "pagination": page.pagination.to_dict(),
    }


def statistics_to_dict(stats: Statistics) -> dict[str, Any]:
    window = stats.window
    return {
        "period": window.period,
        "year": window.year,
        "month": window.month,
        "start_date": window.start.date().isoformat(),
        "end_date": window.last_day.isoformat(),
        "summary": [
            {"type": item.type, "total": item.total, "count": item.count}
            for item in stats.summary
        ],
        "categories": [
            {
                "category_id": item.category_id,
                "category_name": item.category_name,
                "type": item.type,
                "total": item.total,
                "count": item.count,
            }
            for item in stats.categories
        ],
    }
