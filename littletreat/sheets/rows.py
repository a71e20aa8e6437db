"""Row schema for the order log and display normalisation of its cells."""

from __future__ import annotations

import re
from dataclasses import replace
from datetime import datetime

from ..errors import MalformedRecordError
from .models import ORDER_COLUMNS, OrderRecord, OrderStatus

# Keys of the objects returned by the Apps Script doGet, in column order
_JSON_KEYS: list[str] = [
    "orderId",
    "deliveryDate",
    "deliveryTime",
    "flat",
    "apartment",
    "items",
    "total",
    "status",
    "timestamp",
]

_ISO_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")
_HHMM = re.compile(r"^\d{2}:\d{2}$")
_LETTERS = re.compile(r"[a-zA-Z]")


def parse_timestamp(text: str) -> datetime | None:
    """Parse an ISO 8601 timestamp, accepting a trailing ``Z``."""
    if not text:
        return None
    cleaned = text.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        return None


def _to_local(dt: datetime) -> datetime:
    return dt.astimezone() if dt.tzinfo is not None else dt


def format_delivery_date(value: str) -> str:
    """Render a delivery date cell as ``"5 Jan 2025"``.

    Text that is already readable (has letters and is not an ISO
    timestamp) is kept; unparseable values are returned unchanged. ISO
    timestamps are always reformatted, even though their ``T`` and ``Z``
    are letters.
    """
    if not value:
        return "N/A"
    if _LETTERS.search(value) and not _ISO_PREFIX.match(value):
        return value

    dt = parse_timestamp(value)
    if dt is None:
        return value
    dt = _to_local(dt)
    return f"{dt.day} {dt.strftime('%b')} {dt.year}"


def format_delivery_time(value: str) -> str:
    """Render a delivery time cell as 24-hour ``HH:MM``.

    ``HH:MM`` values and slot labels such as ``"7:00 PM"`` are kept;
    anything else that is not an ISO timestamp becomes ``"N/A"``. ISO
    timestamps are reformatted despite the letters they contain.
    """
    if not value:
        return "N/A"
    if _HHMM.match(value):
        return value
    if _LETTERS.search(value) and not _ISO_PREFIX.match(value):
        return value

    dt = parse_timestamp(value)
    if dt is None:
        return "N/A"
    return _to_local(dt).strftime("%H:%M")


def _status_or_pending(value: str) -> str:
    return value or OrderStatus.PENDING.value


def record_from_row(row: list, row_index: int | None = None) -> OrderRecord:
    """Map a positional sheet row onto an ``OrderRecord``.

    Raises:
        MalformedRecordError: If the row does not have one cell per column.
    """
    if len(row) != len(ORDER_COLUMNS):
        raise MalformedRecordError(
            f"Row {row_index}: expected {len(ORDER_COLUMNS)} columns "
            f"({', '.join(ORDER_COLUMNS)}), got {len(row)}"
        )
    cells = ["" if cell is None else str(cell) for cell in row]
    return OrderRecord(
        order_id=cells[0],
        delivery_date=cells[1],
        delivery_time=cells[2],
        flat=cells[3],
        apartment=cells[4],
        items=cells[5],
        total=cells[6],
        status=_status_or_pending(cells[7]),
        timestamp=cells[8],
        row_index=row_index,
    )


def record_from_json(obj: dict) -> OrderRecord:
    """Map an Apps Script order object onto an ``OrderRecord``.

    Raises:
        MalformedRecordError: If the object is not a dict or lacks a column.
    """
    if not isinstance(obj, dict):
        raise MalformedRecordError(f"Expected an order object, got {obj!r}")
    missing = [key for key in _JSON_KEYS if key not in obj]
    if missing:
        raise MalformedRecordError(
            f"Order {obj.get('orderId', '?')}: missing {', '.join(missing)}"
        )

    row_index = obj.get("rowIndex")
    record = record_from_row(
        [obj[key] for key in _JSON_KEYS],
        row_index=int(row_index) if row_index is not None else None,
    )
    return record


def normalize_record(record: OrderRecord) -> OrderRecord:
    """Return a copy with display-ready delivery date and time."""
    return replace(
        record,
        delivery_date=format_delivery_date(record.delivery_date),
        delivery_time=format_delivery_time(record.delivery_time),
    )


def newest_first(records: list[OrderRecord]) -> list[OrderRecord]:
    """Sort by submission timestamp, newest first; unparseable last."""
    dated = []
    undated = []
    for record in records:
        dt = parse_timestamp(record.timestamp)
        if dt is None:
            undated.append(record)
        else:
            dated.append((_comparable(dt), record))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return [record for _, record in dated] + undated


def _comparable(dt: datetime) -> float:
    # Naive timestamps are treated as local time
    return dt.timestamp()
