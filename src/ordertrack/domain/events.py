"""Messages passed from the ingestion side to the thread that owns the board.

The watcher never calls listeners itself.  It posts one of these messages
and the owner thread delivers it to every ``OrderListener``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ordertrack.domain.model.order import Order


@dataclass(frozen=True)
class OrdersDiscovered:
    """Incremental: new orders read from one upload file."""

    orders: tuple[Order, ...]
    source_file: str | None = None


@dataclass(frozen=True)
class OrdersReloaded:
    """Full resync: listeners should treat *orders* as the complete set."""

    orders: tuple[Order, ...]


OrderEvent = OrdersDiscovered | OrdersReloaded


class OrderListener(ABC):

    @abstractmethod
    def on_orders_discovered(self, orders: list[Order]) -> None:
        """Called on the owner thread with a batch of newly read orders."""

    @abstractmethod
    def on_orders_reloaded(self, orders: list[Order]) -> None:
        """Called on the owner thread when a full reload was requested."""
