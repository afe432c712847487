"""Application service: replace the items of an order on the board."""

from __future__ import annotations

from ordertrack.application.board_state import save_board
from ordertrack.domain.exceptions import EntityNotFoundError
from ordertrack.domain.model.order import Item, Order
from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.domain.repository.order_state_repository import OrderStateRepository


class UpdateOrderItemsHandler:

    def __init__(self, board: OrderBoard, state_repo: OrderStateRepository) -> None:
        self._board = board
        self._state_repo = state_repo

    def handle(self, order: Order, items: list[Item]) -> Order:
        if not self._board.contains(order):
            raise EntityNotFoundError("Order not found in any list")
        order.items = list(items)
        save_board(self._board, self._state_repo)
        return order
