"""Application service: move orders between the status lists.

Single-order calls raise ``ValidationError`` when the order is not in the
expected list; batch calls collect those failures into a ``BatchResult``
instead.  Every successful move is persisted straight away.
"""

from __future__ import annotations

from typing import Callable

from ordertrack.application.board_state import save_board
from ordertrack.application.dto import BatchResult
from ordertrack.domain.exceptions import DomainException
from ordertrack.domain.model.order import Order
from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.domain.repository.order_state_repository import OrderStateRepository


class TransitionOrdersHandler:

    def __init__(self, board: OrderBoard, state_repo: OrderStateRepository) -> None:
        self._board = board
        self._state_repo = state_repo

    # --- Single orders --------------------------------------------------------

    def start(self, order: Order) -> None:
        self._apply(self._board.start, order)

    def complete(self, order: Order) -> None:
        self._apply(self._board.complete, order)

    def undo_start(self, order: Order) -> None:
        self._apply(self._board.undo_start, order)

    def undo_complete(self, order: Order) -> None:
        self._apply(self._board.undo_complete, order)

    # --- Batches --------------------------------------------------------------

    def start_all(self, orders: list[Order]) -> BatchResult:
        return self._batch(self.start, orders)

    def complete_all(self, orders: list[Order]) -> BatchResult:
        return self._batch(self.complete, orders)

    def undo_start_all(self, orders: list[Order]) -> BatchResult:
        return self._batch(self.undo_start, orders)

    def undo_complete_all(self, orders: list[Order]) -> BatchResult:
        return self._batch(self.undo_complete, orders)

    # --- Internal helpers -----------------------------------------------------

    def _apply(self, move: Callable[[Order], None], order: Order) -> None:
        move(order)
        save_board(self._board, self._state_repo)

    @staticmethod
    def _batch(action: Callable[[Order], None], orders: list[Order]) -> BatchResult:
        failures: list[str] = []
        for order in orders:
            try:
                action(order)
            except DomainException as exc:
                failures.append(f"Failed: {order.source} - {exc}")
        return BatchResult(
            success_count=len(orders) - len(failures),
            failure_count=len(failures),
            failures=failures,
        )
