"""Application service: Load Orders use case.

At startup the board is restored from the saved snapshot when there is
one, and the upload files of restored orders are reported through
``remember_file`` so they are not read again.  The uploads directory is
then scanned and whatever is new gets admitted.  A manual refresh runs
the scan step alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ordertrack.application.admit_orders import AdmitOrdersHandler
from ordertrack.domain.model.order import Order
from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.domain.repository.order_state_repository import OrderStateRepository


@dataclass(frozen=True)
class LoadResult:
    restored: int  # orders taken from the snapshot
    admitted: int  # orders newly admitted from upload files


class LoadOrdersHandler:

    def __init__(
        self,
        board: OrderBoard,
        state_repo: OrderStateRepository,
        scan_orders: Callable[[], list[Order]],
        admit: AdmitOrdersHandler | None = None,
        remember_file: Callable[[str], object] | None = None,
    ) -> None:
        self._board = board
        self._state_repo = state_repo
        self._scan_orders = scan_orders
        self._admit = admit or AdmitOrdersHandler(board, state_repo)
        self._remember_file = remember_file

    def handle_startup(self) -> LoadResult:
        restored = 0
        snapshot = self._state_repo.load_snapshot()
        if snapshot is not None:
            self._board.restore(snapshot)
            restored = len(snapshot.all_orders())
            if self._remember_file is not None:
                for order in snapshot.all_orders():
                    if order.source_file:
                        self._remember_file(order.source_file)
        return LoadResult(restored=restored, admitted=len(self.handle_refresh()))

    def handle_refresh(self) -> list[Order]:
        """Scan for upload files and admit the new orders."""
        return self._admit.handle(self._scan_orders())
