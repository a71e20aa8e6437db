"""Filtering, searching, sorting and summarising logged orders.

Every function here is pure: inputs are never mutated and a new list is
returned.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date

from .sheets.models import OrderRecord, OrderStatus
from .sheets.rows import newest_first, parse_timestamp

logger = logging.getLogger(__name__)

ALL_STATUSES = "all"
SORT_DELIVERY_TIME = "deliveryTime"
SORT_TIMESTAMP = "timestamp"

_STATUS_CYCLE: dict[str, str] = {
    OrderStatus.PENDING.value: OrderStatus.DISPATCHED.value,
    OrderStatus.DISPATCHED.value: OrderStatus.DELIVERED.value,
    OrderStatus.DELIVERED.value: OrderStatus.PENDING.value,
}

_TIME_LABEL = re.compile(r"(\d+):(\d+)\s*(AM|PM)", re.IGNORECASE)
_AMOUNT = re.compile(r"\d+(?:\.\d+)?")


@dataclass(frozen=True)
class OrderSummary:
    total_orders: int
    today_orders: int
    today_revenue: float


def by_status(orders: list[OrderRecord], status: str) -> list[OrderRecord]:
    if status == ALL_STATUSES:
        return list(orders)
    return [order for order in orders if order.status == status]


def _searchable(order: OrderRecord) -> tuple[str, ...]:
    return (
        order.order_id,
        order.flat,
        order.apartment,
        order.items,
        order.delivery_date,
        order.delivery_time,
    )


def search(orders: list[OrderRecord], query: str) -> list[OrderRecord]:
    """Case-insensitive substring match over the visible order fields."""
    if not query or not query.strip():
        return list(orders)
    needle = query.lower()
    return [
        order
        for order in orders
        if any(needle in (field or "").lower() for field in _searchable(order))
    ]


def parse_delivery_minutes(label: str) -> int:
    """Minutes since midnight for a label like ``"7:30 PM"``; 0 if unparseable."""
    match = _TIME_LABEL.search(label or "")
    if not match:
        return 0
    hours = int(match.group(1))
    minutes = int(match.group(2))
    is_pm = match.group(3).upper() == "PM"
    if is_pm and hours != 12:
        hours += 12
    elif not is_pm and hours == 12:
        hours = 0
    return hours * 60 + minutes


def sort_orders(orders: list[OrderRecord], key: str) -> list[OrderRecord]:
    """Sort by delivery time (ascending) or else by timestamp (newest first)."""
    if key == SORT_DELIVERY_TIME:
        return sorted(orders, key=lambda o: parse_delivery_minutes(o.delivery_time))
    return newest_first(list(orders))


def apply_query(
    orders: list[OrderRecord],
    status: str = ALL_STATUSES,
    query: str = "",
    sort_key: str = SORT_TIMESTAMP,
) -> list[OrderRecord]:
    """Status filter AND text search, then sort."""
    return sort_orders(search(by_status(orders, status), query), sort_key)


def _amount(total: str) -> float:
    match = _AMOUNT.search((total or "").replace(",", ""))
    return float(match.group()) if match else 0.0


def summarize(orders: list[OrderRecord], today: date | None = None) -> OrderSummary:
    """Count all orders, today's orders and today's revenue.

    "Today" compares the local calendar date of each order's submission
    timestamp.
    """
    today = today or date.today()
    todays = []
    for order in orders:
        dt = parse_timestamp(order.timestamp)
        if dt is None:
            continue
        if dt.tzinfo is not None:
            dt = dt.astimezone()
        if dt.date() == today:
            todays.append(order)

    return OrderSummary(
        total_orders=len(orders),
        today_orders=len(todays),
        today_revenue=sum(_amount(order.total) for order in todays),
    )


def next_status(current: str) -> str:
    """Next status in the Pending → Dispatched → Delivered → Pending cycle.

    Unknown statuses restart the cycle at Pending.
    """
    nxt = _STATUS_CYCLE.get(current)
    if nxt is None:
        logger.warning("Unknown order status %r; resetting to Pending", current)
        return OrderStatus.PENDING.value
    return nxt
