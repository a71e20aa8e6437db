"""Order log backed by a deployed Google Apps Script web app."""

from __future__ import annotations

import logging

import httpx

from ..errors import OrderLogError
from . import OrderLog
from .models import OrderPayload, OrderRecord, StatusUpdate
from .rows import newest_first, normalize_record, record_from_json

logger = logging.getLogger(__name__)


class AppsScriptOrderLog(OrderLog):
    """Talk to the Apps Script ``doPost`` / ``doGet`` endpoint over HTTP.

    The script answers POSTs through a redirect whose body is not worth
    reading, so a write counts as successful unless the request itself
    fails.
    """

    def __init__(
        self,
        web_app_url: str,
        enabled: bool = True,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._web_app_url = web_app_url
        self._enabled = enabled
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=True
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, body: dict, what: str) -> bool:
        if not self._enabled:
            logger.info("Google Sheets integration is disabled; %s skipped", what)
            return False
        if not self._web_app_url:
            logger.error("Web App URL is not configured; %s skipped", what)
            return False

        try:
            await self._client.post(self._web_app_url, json=body)
        except (httpx.HTTPError, httpx.InvalidURL):
            logger.exception("Apps Script request failed: %s", what)
            return False
        return True

    async def submit(self, payload: OrderPayload) -> bool:
        ok = await self._post(payload.to_json(), f"order {payload.order_id}")
        if ok:
            logger.info("Order %s sent to Google Apps Script", payload.order_id)
        return ok

    async def update_status(self, order_id: str, status: str) -> bool:
        update = StatusUpdate(order_id=order_id, status=status)
        ok = await self._post(update.to_json(), f"status update {order_id}")
        if ok:
            logger.info("Status updated: %s -> %s", order_id, status)
        return ok

    async def fetch_all(self) -> list[OrderRecord]:
        """Fetch every order from ``doGet``.

        Raises:
            OrderLogError: On transport failure, an HTTP error status, a
                non-JSON body or a response whose ``status`` is not
                ``"success"``.
            MalformedRecordError: If an order object lacks a column.
        """
        if not self._web_app_url:
            raise OrderLogError("Web App URL is not configured")

        try:
            response = await self._client.get(
                self._web_app_url, headers={"Accept": "application/json"}
            )
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise OrderLogError(f"Failed to fetch orders: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise OrderLogError(f"Order log returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or data.get("status") != "success":
            message = data.get("message") if isinstance(data, dict) else None
            raise OrderLogError(message or "Unknown error")

        records = [
            normalize_record(record_from_json(obj))
            for obj in data.get("orders") or []
        ]
        logger.debug("Fetched %d orders", len(records))
        return newest_first(records)
