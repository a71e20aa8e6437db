"""Menu catalog: item model, loader and unit display."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .config import read_document
from .errors import InitializationError


class UnitKind(str, Enum):
    PIECE = "piece"
    KG = "kg"
    PLATE = "plate"
    DOZEN = "dozen"


@dataclass(frozen=True)
class MenuItem:
    """A sellable item as listed in ``menu.json``."""

    id: str
    name: str
    price: float
    unit: str = UnitKind.PIECE.value
    description: str = ""
    display: bool = True
    emoji: str = ""
    image: str = ""
    original_price: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> MenuItem:
        try:
            item_id = str(data["id"])
            name = str(data["name"])
            price = float(data["price"])
        except (KeyError, TypeError, ValueError) as e:
            raise InitializationError(f"Invalid menu item {data!r}: {e}") from e
        if price < 0:
            raise InitializationError(f"Menu item {item_id!r} has a negative price")

        original = data.get("originalPrice", data.get("original_price"))
        return cls(
            id=item_id,
            name=name,
            price=price,
            unit=str(data.get("unit", UnitKind.PIECE.value)),
            description=str(data.get("description", "")),
            # menu.json marks visible items with display = 1
            display=data.get("display", 1) in (1, True),
            emoji=str(data.get("emoji", "")),
            image=str(data.get("image", "")),
            original_price=float(original) if original is not None else None,
        )


def load_menu(path: str | Path) -> list[MenuItem]:
    """Load menu items from a ``{"menuItems": [...]}`` document.

    Raises:
        InitializationError: If the document is missing, unreadable, has no
            ``menuItems`` list, or repeats an item id.
    """
    raw = read_document(path)
    entries = raw.get("menuItems", raw.get("menu_items"))
    if not isinstance(entries, list):
        raise InitializationError(f"No menuItems list in {path}")

    items = [MenuItem.from_dict(entry) for entry in entries]
    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            raise InitializationError(f"Duplicate menu item id: {item.id!r}")
        seen.add(item.id)
    return items


def visible_items(items: list[MenuItem]) -> list[MenuItem]:
    """Return the items flagged for display, in catalog order."""
    return [item for item in items if item.display]


_SINGULAR_PLURAL: dict[str, tuple[str, str]] = {
    UnitKind.PIECE.value: ("pc", "pcs"),
    UnitKind.KG.value: ("Kg", "Kg"),
    UnitKind.PLATE.value: ("plate", "plates"),
    UnitKind.DOZEN.value: ("dozen", "dozen"),
}


def unit_display(unit: str, quantity: int = 1) -> str:
    """Human unit label for a quantity; unknown units pass through."""
    forms = _SINGULAR_PLURAL.get(unit.lower())
    if forms is None:
        return unit
    return forms[1] if quantity > 1 else forms[0]
