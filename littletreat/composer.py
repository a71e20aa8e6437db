"""Order composition: order id, sheet payload, WhatsApp message and link."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import quote

from .cart import LineItem
from .config import DeliveryDate, WhatsAppConfig
from .menu import unit_display
from .sheets.models import OrderPayload, OrderStatus

CURRENCY = "₹"
DEFAULT_EMOJI = "📦"

# Sheet "Items" column uses a shorter unit vocabulary than the message
_SHEET_UNITS: dict[str, str] = {
    "kg": "Kg",
    "piece": "pcs",
}


@dataclass
class OrderForm:
    """Address and time values entered at checkout."""

    flat_number: str = ""
    apartment_name: str = ""
    time_value: str = ""  # slot value, "HH:MM"
    time_label: str = ""  # slot label as shown in the picker

    def validate(self) -> dict[str, str]:
        """Return field errors keyed by ``"time"`` / ``"address"``."""
        errors: dict[str, str] = {}
        if not self.time_value.strip():
            errors["time"] = "Please select a delivery time."
        if not self.flat_number.strip() or not self.apartment_name.strip():
            errors["address"] = "Please enter your flat number and apartment name."
        return errors


@dataclass(frozen=True)
class ComposedOrder:
    payload: OrderPayload
    message: str
    link: str


def format_amount(amount: float) -> str:
    """Render a rupee amount without a trailing ``.0`` for whole numbers."""
    if float(amount).is_integer():
        return f"{CURRENCY}{int(amount)}"
    return f"{CURRENCY}{amount:.2f}"


def generate_order_id(
    now_ms: int | None = None, rng: random.Random | None = None
) -> str:
    """Generate an id like ``#LT123456789``.

    Six digits come from the millisecond clock, three are random.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    suffix = (rng or random).randrange(1000)
    return f"#LT{str(now_ms)[-6:]}{suffix:03d}"


def format_items(line_items: list[LineItem]) -> str:
    """Serialise line items for the sheet's Items column."""
    parts = []
    for line in line_items:
        unit = _SHEET_UNITS.get(line.item.unit, line.item.unit)
        parts.append(
            f"{line.item.name} x {line.quantity} {unit} "
            f"({format_amount(line.line_total)})"
        )
    return ", ".join(parts)


def build_payload(
    line_items: list[LineItem],
    total: float,
    form: OrderForm,
    delivery_date: DeliveryDate | None,
    now: datetime | None = None,
    order_id: str | None = None,
) -> OrderPayload:
    now = now or datetime.now(timezone.utc)
    return OrderPayload(
        order_id=order_id or generate_order_id(int(now.timestamp() * 1000)),
        date=delivery_date.date if delivery_date else "",
        time=form.time_label or form.time_value,
        flat_number=form.flat_number.strip(),
        apartment_name=form.apartment_name.strip(),
        items=format_items(line_items),
        total=format_amount(total),
        status=OrderStatus.PENDING.value,
        timestamp=now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )


def build_message(line_items: list[LineItem], total: float, form: OrderForm) -> str:
    """Build the WhatsApp order message."""
    item_lines = "".join(
        f"{line.item.emoji or DEFAULT_EMOJI} {line.item.name}: "
        f"{line.quantity} {unit_display(line.item.unit, line.quantity)}\n"
        for line in line_items
    )
    return (
        "🍽️ *Little Treat Order*\n"
        "\n"
        "📦 *Order Items:*\n"
        f"{item_lines}"
        "\n"
        f"📅 *Delivery Date & Time:* {form.time_label or form.time_value}\n"
        f"💰 *Total Amount:* {format_amount(total)}\n"
        "\n"
        "📍 *Delivery Address:*\n"
        f"Flat: {form.flat_number.strip()}\n"
        f"Apartment: {form.apartment_name.strip()}\n"
        "\n"
        "Please confirm my order. Thank you! 😊"
    )


def build_deep_link(message: str, whatsapp: WhatsAppConfig | None = None) -> str:
    whatsapp = whatsapp or WhatsAppConfig()
    return f"{whatsapp.base_url.rstrip('/')}/{whatsapp.number}?text={quote(message, safe='')}"


def compose_order(
    line_items: list[LineItem],
    total: float,
    form: OrderForm,
    delivery_date: DeliveryDate | None,
    whatsapp: WhatsAppConfig | None = None,
    now: datetime | None = None,
) -> ComposedOrder:
    """Compose everything needed to place an order.

    Pure: no network access happens here, so a later failure writing the
    payload to the order log cannot affect the message or link.
    """
    message = build_message(line_items, total, form)
    link = build_deep_link(message, whatsapp)
    payload = build_payload(line_items, total, form, delivery_date, now=now)
    return ComposedOrder(payload=payload, message=message, link=link)
