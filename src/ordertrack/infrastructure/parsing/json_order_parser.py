"""Reader for single-order JSON uploads.

Expected shape::

    {"order": {"type": "...", "order_date": 1700000000000, "source": "...",
               "items": [{"name": "...", "quantity": 2, "price": 5.0}],
               "status": "PENDING"}}

Unknown fields are ignored and missing or null values fall back to the
type default.  The resulting order must still be valid (positive date,
at least one item), otherwise the file is rejected.
"""

from __future__ import annotations

import json
import logging
import math
from decimal import Decimal
from pathlib import Path

from ordertrack.domain.exceptions import OrderParseError
from ordertrack.domain.model.order import Item, Order, OrderStatus

logger = logging.getLogger(__name__)


class JsonOrderParser:

    def parse_one(self, path: Path) -> Order:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise OrderParseError(f"Cannot read {path.name}: {exc}") from exc
        except ValueError as exc:  # JSONDecodeError and UnicodeDecodeError
            raise OrderParseError(f"Malformed JSON in {path.name}: {exc}") from exc
        except RecursionError as exc:
            raise OrderParseError(f"JSON in {path.name} is nested too deeply") from exc

        order = self.to_order(raw, path.name)
        order.source_file = path.name
        return order

    def to_order(self, raw: object, label: str = "<json>") -> Order:
        """Build an order from an already decoded ``{"order": {...}}`` document."""
        body = raw.get("order") if isinstance(raw, dict) else None
        if not isinstance(body, dict):
            raise OrderParseError(f"No order object in {label}")

        raw_items = body.get("items")
        if raw_items is not None and not isinstance(raw_items, list):
            raise OrderParseError(f"'items' must be a list in {label}")

        order = Order(
            order_type=_optional_str(body.get("type")),
            source=_optional_str(body.get("source")),
            order_date=_as_int(body.get("order_date"), "order_date", label),
            items=[self._to_item(i, label) for i in raw_items]
            if raw_items is not None
            else None,
            status=_as_status(body.get("status"), label),
        )

        if not order.is_valid:
            raise OrderParseError(
                f"Invalid order data in {label}: "
                f"order_date={order.order_date}, items={len(order.items_or_empty)}"
            )
        return order

    @staticmethod
    def _to_item(raw: object, label: str) -> Item:
        if not isinstance(raw, dict):
            raise OrderParseError(f"Item entries must be objects in {label}")
        return Item(
            name=_optional_str(raw.get("name")),
            quantity=_as_int(raw.get("quantity"), "quantity", label),
            price=_as_decimal(raw.get("price"), "price", label),
        )


# --- Coercion helpers ---------------------------------------------------------


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _as_int(value: object, field: str, label: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise OrderParseError(f"'{field}' must be a number in {label}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise OrderParseError(f"'{field}' must be a number in {label}, got {value!r}")


def _as_decimal(value: object, field: str, label: str) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        raise OrderParseError(f"'{field}' must be a number in {label}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float) and math.isfinite(value):
        return Decimal(str(value))
    if isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except ArithmeticError:
            amount = None
        if amount is not None and amount.is_finite():
            return amount
    raise OrderParseError(f"'{field}' must be a number in {label}, got {value!r}")


def _as_status(value: object, label: str) -> OrderStatus:
    """Case-insensitive status; anything unrecognised is PENDING."""
    if value is None:
        return OrderStatus.PENDING
    if isinstance(value, str):
        try:
            return OrderStatus(value.strip().upper())
        except ValueError:
            pass
    logger.warning("Unknown order status %r in %s, using PENDING", value, label)
    return OrderStatus.PENDING
