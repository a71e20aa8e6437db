"""Little Treat storefront ordering and order-log administration."""

from .admin import AdminDashboard
from .cart import CartStore, LineItem
from .composer import ComposedOrder, OrderForm, compose_order, generate_order_id
from .config import (
    DeliveryDate,
    DeliveryTimeRule,
    GoogleSheetsConfig,
    HttpConfig,
    StoreConfig,
    WhatsAppConfig,
    load_config,
)
from .errors import (
    InitializationError,
    MalformedRecordError,
    OrderLogError,
    ValidationError,
)
from .menu import MenuItem, UnitKind, load_menu, unit_display, visible_items
from .queries import (
    OrderSummary,
    apply_query,
    by_status,
    next_status,
    search,
    sort_orders,
    summarize,
)
from .sheets import OrderLog, OrderRecord, OrderStatus, create_order_log
from .slots import TimeSlot, generate_time_slots
from .storefront import StorefrontSession

__all__ = [
    "MenuItem",
    "UnitKind",
    "load_menu",
    "visible_items",
    "unit_display",
    "CartStore",
    "LineItem",
    "TimeSlot",
    "generate_time_slots",
    "OrderForm",
    "ComposedOrder",
    "compose_order",
    "generate_order_id",
    "OrderLog",
    "OrderRecord",
    "OrderStatus",
    "create_order_log",
    "OrderSummary",
    "by_status",
    "search",
    "sort_orders",
    "apply_query",
    "summarize",
    "next_status",
    "StorefrontSession",
    "AdminDashboard",
    "StoreConfig",
    "DeliveryDate",
    "DeliveryTimeRule",
    "GoogleSheetsConfig",
    "WhatsAppConfig",
    "HttpConfig",
    "load_config",
    "InitializationError",
    "ValidationError",
    "OrderLogError",
    "MalformedRecordError",
]
