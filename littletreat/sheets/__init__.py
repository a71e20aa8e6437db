"""Order log backends (Google Sheets), base class and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from .models import ORDER_COLUMNS, OrderPayload, OrderRecord, OrderStatus, StatusUpdate

if TYPE_CHECKING:
    from ..config import StoreConfig


class OrderLog(ABC):
    """Abstract base for the spreadsheet-backed order log.

    Writes are best-effort: ``submit`` and ``update_status`` report success
    as a bool and log failures instead of raising. ``fetch_all`` raises
    ``OrderLogError`` when the log cannot be read.
    """

    @abstractmethod
    async def submit(self, payload: OrderPayload) -> bool:
        """Append a new order."""
        ...

    @abstractmethod
    async def update_status(self, order_id: str, status: str) -> bool:
        """Set the status of an existing order."""
        ...

    @abstractmethod
    async def fetch_all(self) -> list[OrderRecord]:
        """Return every logged order, newest submission first."""
        ...

    async def aclose(self) -> None:
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()


def create_order_log(config: StoreConfig) -> OrderLog:
    """Create an order log backend based on configuration."""
    sheets = config.google_sheets

    match sheets.method:
        case "appsScript":
            from .apps_script import AppsScriptOrderLog

            return AppsScriptOrderLog(
                web_app_url=sheets.web_app_url,
                enabled=sheets.enabled,
                timeout=config.http.timeout,
            )
        case "apiKey":
            from .api_key import SheetsApiOrderLog

            return SheetsApiOrderLog(
                api_key=sheets.api_key,
                sheet_id=sheets.sheet_id,
                sheet_name=sheets.sheet_name,
                enabled=sheets.enabled,
            )
        case _:
            raise ValueError(
                f"Unknown Google Sheets method: {sheets.method!r}  "
                f"(choose appsScript or apiKey)"
            )


__all__ = [
    "ORDER_COLUMNS",
    "OrderLog",
    "OrderPayload",
    "OrderRecord",
    "OrderStatus",
    "StatusUpdate",
    "create_order_log",
]
