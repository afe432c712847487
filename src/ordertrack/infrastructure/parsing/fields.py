"""Field extraction for loosely structured order documents.

Outside systems name the same thing differently (``qty``, ``count``,
``quantity``...).  Each logical field is described by an ordered list of
tag names; the first tag with non-blank text wins.  The value parsers
below never raise: bad text falls back to a documented default.
"""

from __future__ import annotations

import logging
import re
import time
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from ordertrack.domain.model.order import UNKNOWN_ITEM_NAME, UNKNOWN_ORDER_TYPE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    """An ordered list of candidate tag names plus the value used when none match."""

    name: str
    tags: tuple[str, ...]
    default: str | None = None

    def extract(self, element: ET.Element) -> str | None:
        for tag in self.tags:
            text = find_text(element, tag)
            if text is not None:
                return text
        return self.default


ORDER_TYPE = FieldSpec(
    "type", ("type", "order_type", "restaurant_type", "category"), UNKNOWN_ORDER_TYPE
)
ORDER_SOURCE = FieldSpec(
    "source",
    ("source", "restaurant", "restaurant_name", "provider", "vendor"),
    "Unknown",
)
ORDER_DATE = FieldSpec("order_date", ("order_date", "date", "timestamp", "created_at"))
ITEM_NAME = FieldSpec(
    "name", ("name", "item_name", "product_name", "description"), UNKNOWN_ITEM_NAME
)
ITEM_QUANTITY = FieldSpec("quantity", ("quantity", "qty", "count"))
ITEM_PRICE = FieldSpec("price", ("price", "unit_price", "cost"))

ITEMS_CONTAINER_TAGS = ("items", "order_items", "products", "menu_items")
ITEM_TAGS = ("item", "order_item", "product", "menu_item")


def find_text(element: ET.Element, tag: str) -> str | None:
    """Trimmed text of the first descendant named *tag*, or None if missing/blank."""
    found = element.find(f".//{tag}")
    if found is None:
        return None
    text = "".join(found.itertext()).strip()
    return text or None


def find_container(element: ET.Element) -> ET.Element:
    """The element holding the order's items; the order itself if no container tag matches."""
    for tag in ITEMS_CONTAINER_TAGS:
        container = element.find(f".//{tag}")
        if container is not None:
            return container
    return element


# ---------------------------------------------------------------------------
# Value parsers
# ---------------------------------------------------------------------------

# Upper bound for numeric timestamps: 2100-01-01T00:00:00Z in milliseconds.
MAX_TIMESTAMP_MS = 4_102_444_800_000

DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%d/%m/%Y %H:%M",
    "%Y-%m-%d",
)

_PRICE_NOISE = re.compile(r"[^\d.\-]")
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


def now_ms() -> int:
    return int(time.time() * 1000)


def parse_date(text: str | None) -> int:
    """Epoch milliseconds for *text*; the current time if nothing matches."""
    if text is None or not text.strip():
        return now_ms()
    value = text.strip()

    timestamp = _parse_timestamp(value)
    if timestamp > 0:
        return timestamp

    for parser in _DATE_PARSERS:
        timestamp = parser(value)
        if timestamp > 0:
            return timestamp

    logger.warning("Unrecognised order date %r, using current time", value)
    return now_ms()


def parse_quantity(text: str | None) -> int:
    """Integer quantity, at least 1; non-numeric text counts as 1."""
    if text is None:
        return 1
    cleaned = text.strip()
    if not _INTEGER.fullmatch(cleaned):
        logger.warning("Invalid quantity %r, using default 1", text)
        return 1
    return max(int(cleaned), 1)


def parse_price(text: str | None) -> Decimal:
    """Decimal price with currency symbols and separators stripped; at least 0."""
    if text is None:
        return Decimal("0")
    cleaned = _PRICE_NOISE.sub("", text)
    try:
        price = Decimal(cleaned)
    except InvalidOperation:
        logger.warning("Invalid price %r, using default 0.00", text)
        return Decimal("0")
    return price if price > 0 else Decimal("0")


def _parse_timestamp(value: str) -> int:
    try:
        timestamp = int(value)
    except ValueError:
        return 0
    return timestamp if 0 < timestamp < MAX_TIMESTAMP_MS else 0


def _with_format(fmt: str):
    def parse(value: str) -> int:
        try:
            return _to_ms(datetime.strptime(value, fmt))
        except ValueError:
            return 0

    return parse


def _iso_datetime(value: str) -> int:
    try:
        return _to_ms(datetime.fromisoformat(value))
    except ValueError:
        return 0


def _iso_date(value: str) -> int:
    try:
        parsed = date.fromisoformat(value)
    except ValueError:
        return 0
    return _to_ms(datetime(parsed.year, parsed.month, parsed.day))


def _to_ms(moment: datetime) -> int:
    """Naive datetimes are local time."""
    try:
        return int(moment.timestamp() * 1000)
    except (OverflowError, OSError, ValueError):
        return 0


_DATE_PARSERS = (*(_with_format(fmt) for fmt in DATE_FORMATS), _iso_datetime, _iso_date)
