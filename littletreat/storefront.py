"""Customer-facing session: menu, cart, checkout and order booking."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from .cart import CartStore, LineItem
from .composer import ComposedOrder, OrderForm, compose_order
from .config import StoreConfig, load_config
from .errors import ValidationError
from .menu import MenuItem, load_menu, visible_items
from .slots import TimeSlot, generate_time_slots

if TYPE_CHECKING:
    from .dispatcher import OrderDispatcher
    from .sheets import OrderLog

logger = logging.getLogger(__name__)


@dataclass
class StorefrontSession:
    """State for one browsing session, created at start and thrown away at end."""

    menu: list[MenuItem]
    config: StoreConfig
    cart: CartStore = field(init=False)

    def __post_init__(self) -> None:
        self.cart = CartStore(self.menu)

    @classmethod
    def load(
        cls, menu_path: str | Path, config_path: str | Path | None = None
    ) -> StorefrontSession:
        """Load menu and config documents and start a session.

        Raises:
            InitializationError: If either document cannot be loaded.
        """
        config = load_config(config_path)
        menu = load_menu(menu_path)
        logger.info("Menu loaded: %d items", len(menu))
        return cls(menu=menu, config=config)

    def visible_menu(self) -> list[MenuItem]:
        return visible_items(self.menu)

    def time_slots(self) -> list[TimeSlot]:
        return generate_time_slots(self.config.delivery_time)

    def slot_for(self, value: str) -> TimeSlot | None:
        for slot in self.time_slots():
            if slot.value == value:
                return slot
        return None

    def change_quantity(self, item_id: str, delta: int) -> int:
        return self.cart.change_quantity(item_id, delta)

    def proceed(self) -> list[LineItem]:
        """Move from the menu to checkout.

        Raises:
            ValidationError: If the cart is empty.
        """
        if self.cart.is_empty():
            raise ValidationError(
                {"cart": "Please select at least one item to proceed!"}
            )
        return self.cart.line_items()

    def book_order(
        self,
        form: OrderForm,
        order_log: OrderLog | None = None,
        dispatcher: OrderDispatcher | None = None,
    ) -> ComposedOrder:
        """Validate the checkout form and compose the order.

        The WhatsApp link is ready before any network call is made. When an
        order log is given and Google Sheets is enabled, the write is queued
        on ``dispatcher`` and never awaited here.

        Raises:
            ValidationError: On an empty cart or missing time/address. No
                state changes and no request is made in that case.
        """
        errors = form.validate()
        if self.cart.is_empty():
            errors["cart"] = "Please select at least one item to proceed!"
        if errors:
            raise ValidationError(errors)

        if not form.time_label:
            slot = self.slot_for(form.time_value)
            if slot is not None:
                form = OrderForm(
                    flat_number=form.flat_number,
                    apartment_name=form.apartment_name,
                    time_value=form.time_value,
                    time_label=slot.label,
                )

        order = compose_order(
            self.cart.line_items(),
            self.cart.total(),
            form,
            self.config.delivery_date,
            whatsapp=self.config.whatsapp,
        )

        if (
            order_log is not None
            and dispatcher is not None
            and self.config.google_sheets.enabled
        ):
            dispatcher.dispatch(
                order_log.submit,
                order.payload,
                name=f"log order {order.payload.order_id}",
            )
        return order
