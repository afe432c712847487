"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry display-ready data from the application layer to the CLI
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ordertrack.domain.model.order import Order


@dataclass(frozen=True)
class ItemDTO:
    name: str
    quantity: int
    price: str  # formatted, e.g. "$5.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    position: int  # 1-based position within its status list
    status: str
    order_type: str
    source: str
    order_date: str
    total: str
    items: list[ItemDTO]


@dataclass(frozen=True)
class BatchResult:
    """Outcome of applying one action to several orders."""

    success_count: int
    failure_count: int
    failures: list[str]


@dataclass(frozen=True)
class DeletionResult:
    success: bool
    file_deleted: bool
    message: str


@dataclass(frozen=True)
class BatchDeletionResult:
    success_count: int
    files_deleted_count: int
    failures: list[str]


# --- Formatting ---------------------------------------------------------------


def format_date(timestamp_ms: int) -> str:
    """Local ``YYYY-MM-DD HH:MM`` for an epoch-millisecond timestamp."""
    try:
        return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M")
    except (OverflowError, OSError, ValueError):
        return "Invalid Date"


def format_currency(amount: Decimal) -> str:
    return f"${amount:.2f}"


def to_dto(order: Order, position: int) -> OrderDTO:
    return OrderDTO(
        position=position,
        status=order.status.value,
        order_type=order.type_or_default,
        source=order.source or "Unknown",
        order_date=format_date(order.order_date),
        total=format_currency(order.total),
        items=[
            ItemDTO(
                name=item.name,
                quantity=item.quantity,
                price=format_currency(item.price),
                line_total=format_currency(item.line_total),
            )
            for item in order.items_or_empty
        ],
    )
