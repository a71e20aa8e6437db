"""Store configuration loader (JSON or TOML)."""

from __future__ import annotations

import json
import os
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path

from .errors import InitializationError

SHEETS_METHODS = ("apiKey", "appsScript")

_CLOCK = re.compile(r"^(\d{1,2}):(\d{2})$")

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]


@dataclass(frozen=True)
class DeliveryDate:
    date: str  # display string, e.g. "25 Oct 2025"
    day_name: str = ""


@dataclass(frozen=True)
class DeliveryTimeRule:
    start_time: str = "18:00"
    end_time: str = "20:00"
    interval_minutes: int = 30


@dataclass
class GoogleSheetsConfig:
    enabled: bool = False
    method: str = "apiKey"  # "apiKey" | "appsScript"
    web_app_url: str = ""
    api_key: str = ""
    sheet_id: str = ""
    sheet_name: str = "Orders"


@dataclass
class WhatsAppConfig:
    number: str = "917710963036"
    base_url: str = "https://wa.me"


@dataclass
class HttpConfig:
    timeout: float = 5.0


@dataclass
class StoreConfig:
    delivery_date: DeliveryDate | None = None
    delivery_time: DeliveryTimeRule | None = None
    google_sheets: GoogleSheetsConfig = field(default_factory=GoogleSheetsConfig)
    whatsapp: WhatsAppConfig = field(default_factory=WhatsAppConfig)
    http: HttpConfig = field(default_factory=HttpConfig)


def read_document(path: str | Path) -> dict:
    """Read a JSON or TOML document into a dict.

    The format is chosen by file suffix; anything other than ``.toml`` is
    parsed as JSON.

    Raises:
        InitializationError: If the file is missing or cannot be parsed.
    """
    p = Path(path)
    if not p.exists():
        raise InitializationError(f"File not found: {p}")

    try:
        if p.suffix == ".toml":
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)
        else:
            with open(p, encoding="utf-8") as f:
                raw = json.load(f)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError and tomllib.TOMLDecodeError are ValueErrors
        raise InitializationError(f"Could not read {p}: {e}") from e

    if not isinstance(raw, dict):
        raise InitializationError(f"Expected an object at the top of {p}")
    return raw


def _section(raw: dict, snake: str, camel: str) -> dict | None:
    value = raw.get(snake, raw.get(camel))
    if value is None:
        return None
    if not isinstance(value, dict):
        raise InitializationError(f"Config section {camel!r} must be an object")
    return value


def _get(section: dict, snake: str, camel: str, default=None):
    if snake in section:
        return section[snake]
    return section.get(camel, default)


def _clock_time(section: dict, snake: str, camel: str, default: str) -> str:
    """Read a 24-hour "HH:MM" value, rejecting anything else."""
    value = str(_get(section, snake, camel, default)).strip()
    match = _CLOCK.match(value)
    if not match or int(match.group(1)) > 23 or int(match.group(2)) > 59:
        raise InitializationError(
            f"Invalid {camel} {value!r}: expected 24-hour HH:MM"
        )
    return value


def load_config(path: str | Path | None = None) -> StoreConfig:
    """Load the store configuration.

    With no path, every section uses its default (no delivery window, Google
    Sheets disabled). Keys are accepted in either the snake_case used by TOML
    files or the camelCase of the storefront's ``config.json``.
    Secrets can be overridden via environment variables.

    Raises:
        InitializationError: If ``path`` is given but missing or invalid.
    """
    raw: dict = {}
    if path is not None:
        raw = read_document(path)

    dd = _section(raw, "delivery_date", "deliveryDate")
    dt = _section(raw, "delivery_time", "deliveryTime")
    gs = _section(raw, "google_sheets", "googleSheets") or {}
    wa = _section(raw, "whatsapp", "whatsApp") or {}
    http = _section(raw, "http", "http") or {}

    delivery_date = None
    if dd is not None:
        delivery_date = DeliveryDate(
            date=str(_get(dd, "date", "date", "")),
            day_name=str(_get(dd, "day_name", "dayName", "")),
        )

    delivery_time = None
    if dt is not None:
        try:
            interval = int(_get(dt, "interval_minutes", "intervalMinutes", 30))
        except (TypeError, ValueError) as e:
            raise InitializationError(f"Invalid intervalMinutes: {e}") from e
        if interval <= 0:
            raise InitializationError(
                f"intervalMinutes must be positive, got {interval}"
            )
        delivery_time = DeliveryTimeRule(
            start_time=_clock_time(dt, "start_time", "startTime", "18:00"),
            end_time=_clock_time(dt, "end_time", "endTime", "20:00"),
            interval_minutes=interval,
        )

    method = _get(gs, "method", "method", "apiKey")
    if method not in SHEETS_METHODS:
        raise InitializationError(
            f"Unknown googleSheets.method {method!r} "
            f"(choose {' or '.join(SHEETS_METHODS)})"
        )

    # Resolve secrets: config file → environment variable
    web_app_url = _get(gs, "web_app_url", "webAppUrl", "") or os.environ.get(
        "LITTLETREAT_WEBAPP_URL", ""
    )
    api_key = _get(gs, "api_key", "apiKey", "") or os.environ.get(
        "LITTLETREAT_SHEETS_API_KEY", ""
    )
    number = _get(wa, "number", "number", "") or os.environ.get(
        "LITTLETREAT_WHATSAPP_NUMBER", ""
    )

    return StoreConfig(
        delivery_date=delivery_date,
        delivery_time=delivery_time,
        google_sheets=GoogleSheetsConfig(
            enabled=bool(_get(gs, "enabled", "enabled", False)),
            method=method,
            web_app_url=web_app_url,
            api_key=api_key,
            sheet_id=_get(gs, "sheet_id", "sheetId", ""),
            sheet_name=_get(gs, "sheet_name", "sheetName", "Orders"),
        ),
        whatsapp=WhatsAppConfig(
            number=number or WhatsAppConfig.number,
            base_url=_get(wa, "base_url", "baseUrl", "https://wa.me"),
        ),
        http=HttpConfig(
            timeout=float(_get(http, "timeout", "timeout", 5.0)),
        ),
    )
