"""Session cart: quantities per menu item and derived totals."""

from __future__ import annotations

from dataclasses import dataclass

from .menu import MenuItem


@dataclass(frozen=True)
class LineItem:
    """A menu item plus the quantity of it currently in the cart."""

    item: MenuItem
    quantity: int

    @property
    def line_total(self) -> float:
        return self.item.price * self.quantity


class CartStore:
    """Quantities keyed by menu item id.

    Every catalog item starts at 0. Totals are recomputed from the
    quantities on every call; nothing is cached.
    """

    def __init__(self, items: list[MenuItem]) -> None:
        self._items: dict[str, MenuItem] = {item.id: item for item in items}
        self._quantities: dict[str, int] = {item.id: 0 for item in items}

    def set_quantity(self, item_id: str, quantity: int) -> None:
        """Set the quantity for a known item, clamped to zero."""
        if item_id not in self._quantities:
            return
        self._quantities[item_id] = max(0, int(quantity))

    def get_quantity(self, item_id: str) -> int:
        return self._quantities.get(item_id, 0)

    def change_quantity(self, item_id: str, delta: int) -> int:
        """Step a quantity up or down; steps below zero are ignored.

        Returns:
            The quantity after the change.
        """
        new_quantity = self.get_quantity(item_id) + delta
        if new_quantity >= 0:
            self.set_quantity(item_id, new_quantity)
        return self.get_quantity(item_id)

    def line_items(self) -> list[LineItem]:
        """Return items with a positive quantity, in catalog order."""
        return [
            LineItem(item=self._items[item_id], quantity=qty)
            for item_id, qty in self._quantities.items()
            if qty > 0
        ]

    def total(self) -> float:
        return sum(line.line_total for line in self.line_items())

    def is_empty(self) -> bool:
        return self.total() == 0

    def clear(self) -> None:
        for item_id in self._quantities:
            self._quantities[item_id] = 0
