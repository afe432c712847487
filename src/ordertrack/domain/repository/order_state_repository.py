"""Abstract store for the board snapshot and the canceled-orders log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ordertrack.domain.model.order import Order
from ordertrack.domain.model.order_board import OrderSnapshot


class OrderStateRepository(ABC):

    @abstractmethod
    def save_snapshot(
        self,
        pending: list[Order],
        in_progress: list[Order],
        completed: list[Order],
    ) -> bool:
        """Persist the three status collections. Return False on failure."""

    @abstractmethod
    def load_snapshot(self) -> OrderSnapshot | None:
        """Return the saved snapshot, or None if there is none (or it is unreadable)."""

    @abstractmethod
    def has_snapshot(self) -> bool:
        """True if a snapshot has been saved."""

    @abstractmethod
    def clear_snapshot(self) -> None:
        """Forget the saved snapshot."""

    @abstractmethod
    def append_canceled(self, order: Order) -> bool:
        """Append *order* to the canceled-orders log. Return False on failure."""

    @abstractmethod
    def load_canceled(self) -> list[Order]:
        """Return every order in the canceled-orders log."""
