"""The live order board: pending, in-progress and completed collections.

The board is owned by a single thread.  Background code never touches it
directly; discovered orders are handed to the owner thread first (see
``ordertrack.infrastructure.ingestion.mailbox``).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ordertrack.domain.exceptions import EntityNotFoundError, ValidationError
from ordertrack.domain.model.order import Order, OrderStatus


@dataclass
class OrderSnapshot:
    """Full dump of the three status collections."""

    pending: list[Order] = field(default_factory=list)
    in_progress: list[Order] = field(default_factory=list)
    completed: list[Order] = field(default_factory=list)

    def all_orders(self) -> list[Order]:
        return [*self.pending, *self.in_progress, *self.completed]


class OrderBoard:

    def __init__(self) -> None:
        self._collections: dict[OrderStatus, list[Order]] = {
            status: [] for status in OrderStatus
        }

    # --- Queries --------------------------------------------------------------

    @property
    def pending(self) -> list[Order]:
        return self._collections[OrderStatus.PENDING]

    @property
    def in_progress(self) -> list[Order]:
        return self._collections[OrderStatus.IN_PROGRESS]

    @property
    def completed(self) -> list[Order]:
        return self._collections[OrderStatus.COMPLETED]

    def collection(self, status: OrderStatus) -> list[Order]:
        return self._collections[status]

    def contains(self, order: Order) -> bool:
        return any(order in orders for orders in self._collections.values())

    def all_orders(self) -> list[Order]:
        return [*self.pending, *self.in_progress, *self.completed]

    def snapshot(self) -> OrderSnapshot:
        return OrderSnapshot(
            pending=list(self.pending),
            in_progress=list(self.in_progress),
            completed=list(self.completed),
        )

    # --- Mutations ------------------------------------------------------------

    def restore(self, snapshot: OrderSnapshot) -> None:
        """Replace the board contents with *snapshot*.

        Orders are filed by the collection they were saved in; their status
        is aligned with that collection.
        """
        for status, orders in (
            (OrderStatus.PENDING, snapshot.pending),
            (OrderStatus.IN_PROGRESS, snapshot.in_progress),
            (OrderStatus.COMPLETED, snapshot.completed),
        ):
            for order in orders:
                order.status = status
            self._collections[status][:] = orders

    def add_pending(self, order: Order) -> None:
        order.status = OrderStatus.PENDING
        self.pending.append(order)

    def start(self, order: Order) -> None:
        """PENDING -> IN_PROGRESS."""
        self._move(order, OrderStatus.PENDING, OrderStatus.IN_PROGRESS)

    def complete(self, order: Order) -> None:
        """IN_PROGRESS -> COMPLETED."""
        self._move(order, OrderStatus.IN_PROGRESS, OrderStatus.COMPLETED)

    def undo_start(self, order: Order) -> None:
        """IN_PROGRESS -> PENDING."""
        self._move(order, OrderStatus.IN_PROGRESS, OrderStatus.PENDING)

    def undo_complete(self, order: Order) -> None:
        """COMPLETED -> IN_PROGRESS."""
        self._move(order, OrderStatus.COMPLETED, OrderStatus.IN_PROGRESS)

    def remove(self, order: Order) -> OrderStatus:
        """Remove *order* from whichever collection holds it.

        Returns the status of the collection it was removed from.
        """
        for status, orders in self._collections.items():
            if _take(orders, order) is not None:
                return status
        raise EntityNotFoundError("Order not found in any list")

    # --- Internal helpers -----------------------------------------------------

    def _move(self, order: Order, source: OrderStatus, target: OrderStatus) -> None:
        moved = _take(self._collections[source], order)
        if moved is None:
            raise ValidationError(f"Order not found in {_LABELS[source]} list")
        moved.status = target
        self._collections[target].append(moved)


def _take(orders: list[Order], order: Order) -> Order | None:
    """Pop *order* from *orders*, preferring the identical object over an equal one."""
    for i, candidate in enumerate(orders):
        if candidate is order:
            return orders.pop(i)
    for i, candidate in enumerate(orders):
        if candidate == order:
            return orders.pop(i)
    return None


_LABELS = {
    OrderStatus.PENDING: "pending",
    OrderStatus.IN_PROGRESS: "in-progress",
    OrderStatus.COMPLETED: "completed",
}
