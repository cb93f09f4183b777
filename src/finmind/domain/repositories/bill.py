"""Bill repository protocol."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from ...models.bill import Bill
from ..bills import BillQuery, BillView, CategoryTotal, StatisticsWindow, TypeTotal


class BillRepository(Protocol):
    """Repository for managing bill entities."""

    def get_by_id(self, bill_id: int, *, user_id: int) -> Optional[BillView]:
        """Retrieve a live bill owned by ``user_id``."""
        ...

    def create(self, bill: Bill) -> BillView:
        """Create a new bill."""
        ...

    def update(self, bill_id: int, changes: dict[str, Any], *, user_id: int) -> Optional[BillView]:
        """Apply ``changes`` to an owned bill; ``None`` when it does not exist."""
        ...

    def delete(self, bill_id: int, *, user_id: int) -> bool:
        """Soft-delete an owned bill; return False when it does not exist."""
        ...

    def search(self, query: BillQuery, *, user_id: int) -> tuple[list[BillView], int]:
        """Return one page of matching bills and the total match count."""
        ...

    def totals_by_type(self, window: StatisticsWindow, *, user_id: int) -> list[TypeTotal]:
        """Sum and count bills in ``window`` grouped by type."""
        ...

    def totals_by_category(
        self, window: StatisticsWindow, *, user_id: int
    ) -> list[CategoryTotal]:
        """Sum and count bills in ``window`` grouped by (category, type)."""
        ...
