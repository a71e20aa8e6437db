"""Admin dashboard state: order snapshot, query view and status changes."""

from __future__ import annotations

import logging
from datetime import date

from .queries import (
    ALL_STATUSES,
    SORT_TIMESTAMP,
    OrderSummary,
    apply_query,
    next_status,
    summarize,
)
from .sheets import OrderLog
from .sheets.models import OrderRecord

logger = logging.getLogger(__name__)


class AdminDashboard:
    """Holds the orders fetched on the last refresh.

    Status changes are applied to the local snapshot whether or not the
    remote update succeeded; a later refresh shows what the sheet holds.
    """

    def __init__(self, order_log: OrderLog) -> None:
        self._order_log = order_log
        self._orders: list[OrderRecord] = []

    @property
    def orders(self) -> list[OrderRecord]:
        return list(self._orders)

    async def refresh(self) -> list[OrderRecord]:
        """Replace the snapshot with a fresh fetch.

        Raises:
            OrderLogError: If the order log cannot be read. The previous
                snapshot is kept.
        """
        self._orders = await self._order_log.fetch_all()
        logger.info("Loaded %d orders", len(self._orders))
        return self.orders

    def view(
        self,
        status: str = ALL_STATUSES,
        query: str = "",
        sort_key: str = SORT_TIMESTAMP,
    ) -> list[OrderRecord]:
        return apply_query(self._orders, status=status, query=query, sort_key=sort_key)

    def summary(self, today: date | None = None) -> OrderSummary:
        return summarize(self._orders, today=today)

    def _find(self, order_id: str) -> OrderRecord:
        for order in self._orders:
            if order.order_id == order_id:
                return order
        raise KeyError(order_id)

    async def cycle_status(self, order_id: str) -> str:
        """Advance an order to its next status.

        Returns:
            The new status.

        Raises:
            KeyError: If the order is not in the snapshot.
        """
        order = self._find(order_id)
        new_status = next_status(order.status)
        ok = await self._order_log.update_status(order_id, new_status)
        if not ok:
            logger.warning(
                "Remote status update for %s failed; keeping local change", order_id
            )
        order.status = new_status
        return new_status
