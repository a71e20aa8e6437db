"""Delivery time slot generation."""

from __future__ import annotations

from dataclasses import dataclass

from .config import DeliveryTimeRule


@dataclass(frozen=True)
class TimeSlot:
    value: str  # "HH:MM", 24-hour
    label: str  # "h:MM AM/PM"


def _parse_hhmm(text: str) -> int:
    """Convert "HH:MM" into minutes since midnight."""
    hours, minutes = text.strip().split(":")
    return int(hours) * 60 + int(minutes)


def format_12h(minutes: int) -> str:
    """Format minutes since midnight as "h:MM AM/PM"."""
    hours, mins = divmod(minutes, 60)
    display_hours = hours % 12 or 12
    ampm = "PM" if hours >= 12 else "AM"
    return f"{display_hours}:{mins:02d} {ampm}"


def generate_time_slots(rule: DeliveryTimeRule | None) -> list[TimeSlot]:
    """Generate delivery slots from ``start_time`` to ``end_time`` inclusive.

    Slots never wrap past midnight: a start later than the end yields no
    slots. A missing rule also yields no slots.

    Raises:
        ValueError: If the interval is not positive or a time is malformed.
    """
    if rule is None:
        return []
    if rule.interval_minutes <= 0:
        raise ValueError(
            f"interval_minutes must be positive, got {rule.interval_minutes}"
        )

    start = _parse_hhmm(rule.start_time)
    end = _parse_hhmm(rule.end_time)

    slots: list[TimeSlot] = []
    current = start
    while current <= end and current < 24 * 60:
        hours, mins = divmod(current, 60)
        slots.append(
            TimeSlot(value=f"{hours:02d}:{mins:02d}", label=format_12h(current))
        )
        current += rule.interval_minutes
    return slots
