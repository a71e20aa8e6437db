"""Order log read through the Google Sheets v4 API with an API key."""

from __future__ import annotations

import asyncio
import logging

from ..errors import OrderLogError
from . import OrderLog
from .models import ORDER_COLUMNS, OrderPayload, OrderRecord
from .rows import newest_first, normalize_record, record_from_row

logger = logging.getLogger(__name__)

_LAST_COLUMN = chr(ord("A") + len(ORDER_COLUMNS) - 1)  # "I"
_STATUS_COLUMN = chr(ord("A") + ORDER_COLUMNS.index("Status"))  # "H"


def _pad(row: list) -> list:
    """Restore the trailing blank cells the API leaves off a row."""
    missing = len(ORDER_COLUMNS) - len(row)
    return row + [""] * missing if missing > 0 else row


class SheetsApiOrderLog(OrderLog):
    """Read (and attempt to write) the order sheet via the Sheets API.

    API keys only grant read access to publicly shared sheets; writes are
    attempted anyway and their failure is logged like any other
    best-effort write.
    """

    def __init__(
        self,
        api_key: str,
        sheet_id: str,
        sheet_name: str = "Orders",
        enabled: bool = True,
        service=None,
    ) -> None:
        self._api_key = api_key
        self._sheet_id = sheet_id
        self._sheet_name = sheet_name
        self._enabled = enabled
        self._service = service

    def _get_service(self):
        """Build and return the Sheets API service."""
        if self._service is not None:
            return self._service

        try:
            from googleapiclient.discovery import build
        except ImportError:
            raise ImportError(
                "Google Sheets API access needs google-api-python-client:\n"
                "  pip install 'littletreat[sheets]'"
            )

        if not self._api_key or not self._sheet_id:
            raise ValueError(
                "Google Sheets API key and sheet id must both be configured"
            )
        self._service = build(
            "sheets", "v4", developerKey=self._api_key, cache_discovery=False
        )
        return self._service

    def _range(self, cells: str) -> str:
        return f"{self._sheet_name}!{cells}"

    async def submit(self, payload: OrderPayload) -> bool:
        if not self._enabled:
            logger.info(
                "Google Sheets integration is disabled; order %s not logged",
                payload.order_id,
            )
            return False

        logger.warning(
            "The API key method can usually only read sheets; "
            "use the appsScript method to record orders"
        )
        try:
            values = self._get_service().spreadsheets().values()
            request = values.append(
                spreadsheetId=self._sheet_id,
                range=self._range(f"A:{_LAST_COLUMN}"),
                valueInputOption="RAW",
                body={"values": [payload.to_row()]},
            )
            result = await asyncio.to_thread(request.execute)
        except Exception:
            logger.exception("Sheets API append failed for %s", payload.order_id)
            return False

        logger.info("Order %s appended: %s", payload.order_id, result.get("updates"))
        return True

    async def update_status(self, order_id: str, status: str) -> bool:
        if not self._enabled:
            logger.info("Google Sheets integration is disabled; status not updated")
            return False

        try:
            values = self._get_service().spreadsheets().values()
            ids = await asyncio.to_thread(
                values.get(
                    spreadsheetId=self._sheet_id, range=self._range("A:A")
                ).execute
            )
            column = [row[0] if row else "" for row in ids.get("values", [])]
            # Row 1 is the header
            try:
                row_number = column.index(order_id, 1) + 1
            except ValueError:
                logger.warning("Order %s not found in sheet", order_id)
                return False

            await asyncio.to_thread(
                values.update(
                    spreadsheetId=self._sheet_id,
                    range=self._range(f"{_STATUS_COLUMN}{row_number}"),
                    valueInputOption="RAW",
                    body={"values": [[status]]},
                ).execute
            )
        except Exception:
            logger.exception("Sheets API status update failed for %s", order_id)
            return False

        logger.info("Status updated: %s -> %s", order_id, status)
        return True

    async def fetch_all(self) -> list[OrderRecord]:
        """Read every order row.

        Raises:
            OrderLogError: If the service cannot be built or the API call fails.
            MalformedRecordError: If a row has more than nine columns.
        """
        try:
            values = self._get_service().spreadsheets().values()
            result = await asyncio.to_thread(
                values.get(
                    spreadsheetId=self._sheet_id,
                    range=self._range(f"A:{_LAST_COLUMN}"),
                ).execute
            )
        except Exception as e:
            raise OrderLogError(f"Failed to fetch orders: {e}") from e

        rows = result.get("values", [])
        records = [
            normalize_record(record_from_row(_pad(row), row_index=i + 1))
            for i, row in enumerate(rows)
            if i > 0  # header
        ]
        return newest_first(records)
