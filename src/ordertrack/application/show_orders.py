"""Application service: list and look up orders on the board.

Orders have no identifier of their own, so the CLI refers to them by
status list and 1-based position.
"""

from __future__ import annotations

from ordertrack.application.dto import OrderDTO, to_dto
from ordertrack.domain.exceptions import EntityNotFoundError
from ordertrack.domain.model.order import Order, OrderStatus
from ordertrack.domain.model.order_board import OrderBoard


class ShowOrdersHandler:

    def __init__(self, board: OrderBoard) -> None:
        self._board = board

    def list_orders(self, status: OrderStatus | None = None) -> list[OrderDTO]:
        statuses = [status] if status is not None else list(OrderStatus)
        return [
            to_dto(order, position)
            for s in statuses
            for position, order in enumerate(self._board.collection(s), start=1)
        ]

    def get(self, status: OrderStatus, position: int) -> Order:
        orders = self._board.collection(status)
        if not 1 <= position <= len(orders):
            raise EntityNotFoundError(
                f"No {status.value} order at position {position} "
                f"({len(orders)} order(s) in that list)"
            )
        return orders[position - 1]

    def show(self, status: OrderStatus, position: int) -> OrderDTO:
        return to_dto(self.get(status, position), position)
