"""CLI entry point: storefront and admin views in the terminal."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict

from dotenv import load_dotenv

from .admin import AdminDashboard
from .composer import OrderForm, format_amount
from .config import load_config
from .errors import InitializationError, OrderLogError, ValidationError
from .menu import unit_display
from .queries import ALL_STATUSES, SORT_DELIVERY_TIME, SORT_TIMESTAMP
from .sheets import create_order_log
from .storefront import StorefrontSession


def main(argv: list[str] | None = None) -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="littletreat",
        description="Little Treat ordering: browse the menu, place orders, manage the order log",
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="Store config file (JSON or TOML)",
    )
    parser.add_argument(
        "--menu", "-m", type=str, default="menu.json",
        help="Menu file (default: menu.json)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Debug logging",
    )

    sub = parser.add_subparsers(dest="command")

    # menu
    sub.add_parser("menu", help="List visible menu items")

    # slots
    sub.add_parser("slots", help="Show the delivery date and time slots")

    # order
    order_parser = sub.add_parser("order", help="Build an order and its WhatsApp link")
    order_parser.add_argument(
        "--item", "-i", action="append", default=[], metavar="ID=QTY",
        help="Item id and quantity (repeatable)",
    )
    order_parser.add_argument("--flat", type=str, default="", help="Flat number")
    order_parser.add_argument("--apartment", type=str, default="", help="Apartment name")
    order_parser.add_argument("--time", type=str, default="", help="Slot value (HH:MM)")
    order_parser.add_argument("--json", action="store_true", help="Output JSON")

    # orders
    orders_parser = sub.add_parser("orders", help="List logged orders")
    orders_parser.add_argument(
        "--status", type=str, default=ALL_STATUSES,
        help="Pending / Dispatched / Delivered / all",
    )
    orders_parser.add_argument("--search", type=str, default="", help="Search text")
    orders_parser.add_argument(
        "--sort", type=str, default=SORT_TIMESTAMP,
        choices=[SORT_TIMESTAMP, SORT_DELIVERY_TIME],
    )
    orders_parser.add_argument("--json", action="store_true", help="Output JSON")

    # summary
    sub.add_parser("summary", help="Order counts and today's revenue")

    # cycle
    cycle_parser = sub.add_parser("cycle", help="Advance an order's status")
    cycle_parser.add_argument("order_id", type=str)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        match args.command:
            case "menu":
                _cmd_menu(args)
            case "slots":
                _cmd_slots(args)
            case "order":
                asyncio.run(_cmd_order(args))
            case "orders":
                asyncio.run(_cmd_orders(args))
            case "summary":
                asyncio.run(_cmd_summary(args))
            case "cycle":
                asyncio.run(_cmd_cycle(args))
    except InitializationError as e:
        print(f"Failed to load: {e}", file=sys.stderr)
        sys.exit(1)
    except OrderLogError as e:
        print(f"Failed to load orders: {e}", file=sys.stderr)
        sys.exit(1)


def _cmd_menu(args) -> None:
    session = StorefrontSession.load(args.menu, args.config)
    items = session.visible_menu()
    if not items:
        print("No items on the menu.")
        return
    for item in items:
        unit = unit_display(item.unit, 1)
        price = f"{format_amount(item.price)} / {unit}"
        if item.original_price is not None:
            price += f"  (was {format_amount(item.original_price)})"
        print(f"  {item.emoji or ' '} {item.id:<12} {item.name:<24} {price}")


def _cmd_slots(args) -> None:
    config = load_config(args.config)
    if config.delivery_date:
        dd = config.delivery_date
        print(f"📅 Delivery Date - {dd.date} ({dd.day_name})")
    session = StorefrontSession(menu=[], config=config)
    slots = session.time_slots()
    if not slots:
        print("No delivery slots configured.")
        return
    for slot in slots:
        print(f"  {slot.value}  {slot.label}")


async def _cmd_order(args) -> None:
    session = StorefrontSession.load(args.menu, args.config)
    for entry in args.item:
        item_id, _, qty = entry.partition("=")
        try:
            session.cart.set_quantity(item_id, int(qty or 1))
        except ValueError:
            print(f"Invalid quantity: {entry}", file=sys.stderr)
            sys.exit(2)

    form = OrderForm(
        flat_number=args.flat,
        apartment_name=args.apartment,
        time_value=args.time,
    )

    sheets_enabled = session.config.google_sheets.enabled
    dispatcher = None
    if sheets_enabled:
        from .dispatcher import OrderDispatcher

        dispatcher = OrderDispatcher()
        dispatcher.start()

    async with create_order_log(session.config) as order_log:
        try:
            order = session.book_order(form, order_log=order_log, dispatcher=dispatcher)
        except ValidationError as e:
            for message in e.fields.values():
                print(message, file=sys.stderr)
            if dispatcher is not None:
                dispatcher.stop()
            sys.exit(2)

        if args.json:
            print(json.dumps(
                {
                    "payload": order.payload.to_json(),
                    "message": order.message,
                    "link": order.link,
                },
                ensure_ascii=False,
                indent=2,
            ))
        else:
            print(order.message)
            print()
            print(order.link)

        if dispatcher is not None:
            # Let the background write finish before the loop closes
            await dispatcher.join()
            dispatcher.stop()


async def _cmd_orders(args) -> None:
    config = load_config(args.config)
    async with create_order_log(config) as order_log:
        dashboard = AdminDashboard(order_log)
        await dashboard.refresh()
        orders = dashboard.view(status=args.status, query=args.search, sort_key=args.sort)

    if args.json:
        print(json.dumps([asdict(o) for o in orders], ensure_ascii=False, indent=2))
        return
    if not orders:
        print("No orders found.")
        return
    print(f"{len(orders)} orders")
    for o in orders:
        print(
            f"  {o.order_id:<14} {o.delivery_date:<12} {o.delivery_time:<9} "
            f"{o.flat + ', ' + o.apartment:<24} {o.total:<8} {o.status}"
        )
        print(f"      {o.items}")


async def _cmd_summary(args) -> None:
    config = load_config(args.config)
    async with create_order_log(config) as order_log:
        dashboard = AdminDashboard(order_log)
        await dashboard.refresh()
    s = dashboard.summary()
    print(f"Total orders:    {s.total_orders}")
    print(f"Today's orders:  {s.today_orders}")
    print(f"Today's revenue: {format_amount(s.today_revenue)}")


async def _cmd_cycle(args) -> None:
    config = load_config(args.config)
    async with create_order_log(config) as order_log:
        dashboard = AdminDashboard(order_log)
        await dashboard.refresh()
        try:
            new_status = await dashboard.cycle_status(args.order_id)
        except KeyError:
            print(f"Order not found: {args.order_id}", file=sys.stderr)
            sys.exit(1)
    print(f"{args.order_id} → {new_status}")
