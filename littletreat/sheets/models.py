"""Data models for the spreadsheet order log."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Sheet columns, in order
ORDER_COLUMNS: list[str] = [
    "Order ID",
    "Delivery Date",
    "Delivery Time",
    "Flat",
    "Apartment",
    "Items",
    "Total",
    "Status",
    "Ordered At",
]


class OrderStatus(str, Enum):
    PENDING = "Pending"
    DISPATCHED = "Dispatched"
    DELIVERED = "Delivered"


@dataclass(frozen=True)
class OrderPayload:
    """A new order as sent to the order log."""

    order_id: str
    date: str
    time: str
    flat_number: str
    apartment_name: str
    items: str
    total: str
    status: str = OrderStatus.PENDING.value
    timestamp: str = ""

    def to_json(self) -> dict:
        return {
            "orderId": self.order_id,
            "date": self.date,
            "time": self.time,
            "flatNumber": self.flat_number,
            "apartmentName": self.apartment_name,
            "items": self.items,
            "total": self.total,
            "status": self.status,
            "timestamp": self.timestamp,
        }

    def to_row(self) -> list[str]:
        """Values in ``ORDER_COLUMNS`` order."""
        return [
            self.order_id,
            self.date,
            self.time,
            self.flat_number,
            self.apartment_name,
            self.items,
            self.total,
            self.status,
            self.timestamp,
        ]


@dataclass(frozen=True)
class StatusUpdate:
    order_id: str
    status: str

    def to_json(self) -> dict:
        return {
            "action": "updateStatus",
            "orderId": self.order_id,
            "status": self.status,
        }


@dataclass
class OrderRecord:
    """One logged order as read back from the sheet.

    ``status`` is mutable: the admin dashboard updates it in place after a
    status change.
    """

    order_id: str
    delivery_date: str
    delivery_time: str
    flat: str
    apartment: str
    items: str
    total: str
    status: str
    timestamp: str
    row_index: int | None = None  # 1-based sheet row
