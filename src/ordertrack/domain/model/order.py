"""Order and Item — the value model every other layer works with.

Orders arrive from files written by outside systems, so the model is
lenient: setters normalise instead of rejecting, and validity is a
separate check (``Order.is_valid``) that the parsers apply before an
order enters the pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

UNKNOWN_ITEM_NAME = "Unknown Item"
UNKNOWN_ORDER_TYPE = "Unknown"

_ZERO = Decimal("0")


class OrderStatus(Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


def to_decimal(value: str | float | int | Decimal) -> Decimal:
    """Coerce a number to Decimal without binary float noise (5.5 -> 5.5)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class Item:
    """A single order line.

    ``quantity`` and ``price`` are clamped to zero on every assignment,
    not only at construction, so no code path can store a negative value.
    """

    __hash__ = None  # mutable, compared by value

    def __init__(
        self,
        name: str | None = None,
        quantity: int = 0,
        price: str | float | int | Decimal = 0,
    ) -> None:
        self.name = name
        self.quantity = quantity
        self.price = price

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str | None) -> None:
        cleaned = value.strip() if value is not None else ""
        self._name = cleaned or UNKNOWN_ITEM_NAME

    @property
    def quantity(self) -> int:
        return self._quantity

    @quantity.setter
    def quantity(self, value: int) -> None:
        self._quantity = max(int(value), 0)

    @property
    def price(self) -> Decimal:
        return self._price

    @price.setter
    def price(self, value: str | float | int | Decimal) -> None:
        amount = to_decimal(value)
        self._price = amount if amount.is_finite() and amount > _ZERO else _ZERO

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return (
            self.name == other.name
            and self.quantity == other.quantity
            and self.price == other.price
        )

    def __repr__(self) -> str:
        return f"Item(name={self.name!r}, quantity={self.quantity}, price=${self.price:.2f})"


@dataclass(eq=False)
class Order:
    """An order as read from an upload file or restored from a snapshot.

    ``order_type`` is kept exactly as read; use ``type_or_default`` for
    display.  ``source_file`` records which upload produced the order and
    takes no part in equality.
    """

    order_type: str | None = None
    source: str | None = None
    order_date: int = 0  # epoch milliseconds, 0 = unset
    items: list[Item] | None = None
    status: OrderStatus = OrderStatus.PENDING
    source_file: str | None = field(default=None, repr=False)

    __hash__ = None

    # --- Lenient readers ------------------------------------------------------

    @property
    def type_or_default(self) -> str:
        if self.order_type is None or not self.order_type.strip():
            return UNKNOWN_ORDER_TYPE
        return self.order_type.strip()

    @property
    def items_or_empty(self) -> list[Item]:
        return self.items if self.items is not None else []

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.items_or_empty), _ZERO)

    @property
    def is_valid(self) -> bool:
        return self.order_date > 0 and len(self.items_or_empty) > 0

    # --- Equality -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return (
            self.order_type == other.order_type
            and self.source == other.source
            and self.order_date == other.order_date
            and self.status == other.status
            and self.items_or_empty == other.items_or_empty
        )
