"""Application service: Delete Orders use case.

Deleting takes the order off the board, appends it to the canceled-orders
log and removes its upload file so it is not picked up again.
"""

from __future__ import annotations

import logging

from ordertrack.application.board_state import save_board
from ordertrack.application.dto import BatchDeletionResult, DeletionResult
from ordertrack.domain.exceptions import EntityNotFoundError
from ordertrack.domain.model.order import Order
from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.domain.repository.order_state_repository import OrderStateRepository
from ordertrack.domain.repository.source_file_repository import SourceFileRepository

logger = logging.getLogger(__name__)


class DeleteOrdersHandler:

    def __init__(
        self,
        board: OrderBoard,
        state_repo: OrderStateRepository,
        source_files: SourceFileRepository,
    ) -> None:
        self._board = board
        self._state_repo = state_repo
        self._source_files = source_files

    def handle(self, order: Order) -> DeletionResult:
        if not self._board.contains(order):
            return DeletionResult(
                success=False, file_deleted=False, message="Order not found in any list"
            )

        self._state_repo.append_canceled(order)
        path = self._source_files.find(order)
        file_deleted = path is not None and self._source_files.delete(path)

        try:
            self._board.remove(order)
        except EntityNotFoundError as exc:
            return DeletionResult(success=False, file_deleted=file_deleted, message=str(exc))
        save_board(self._board, self._state_repo)

        return DeletionResult(
            success=True,
            file_deleted=file_deleted,
            message=(
                "Order deleted and source file removed"
                if file_deleted
                else "Order deleted (source file not found)"
            ),
        )

    def handle_all(self, orders: list[Order]) -> BatchDeletionResult:
        success_count = 0
        files_deleted = 0
        failures: list[str] = []
        for order in orders:
            result = self.handle(order)
            if result.success:
                success_count += 1
                files_deleted += int(result.file_deleted)
            else:
                failures.append(f"{order.source}: {result.message}")
        return BatchDeletionResult(
            success_count=success_count,
            files_deleted_count=files_deleted,
            failures=failures,
        )
