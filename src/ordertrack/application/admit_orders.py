"""Application service: Admit Orders use case.

Admission is the point where freshly parsed orders join the board.  The
duplicate policy runs here, not at parse time, and every admitted order
starts out PENDING whatever status its file claimed.
"""

from __future__ import annotations

import logging

from ordertrack.application.board_state import save_board
from ordertrack.domain.model.order import Order, OrderStatus
from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.domain.repository.order_state_repository import OrderStateRepository
from ordertrack.domain.service.duplicate_order_policy import DuplicateOrderPolicy

logger = logging.getLogger(__name__)


class AdmitOrdersHandler:

    def __init__(
        self,
        board: OrderBoard,
        state_repo: OrderStateRepository,
        policy: DuplicateOrderPolicy | None = None,
    ) -> None:
        self._board = board
        self._state_repo = state_repo
        self._policy = policy or DuplicateOrderPolicy()

    def handle(self, candidates: list[Order]) -> list[Order]:
        """Add the non-duplicate candidates to the pending list.

        Returns the orders actually admitted.  The snapshot is saved only
        when something changed.
        """
        # Candidates are compared in the status they are admitted with.
        for order in candidates:
            order.status = OrderStatus.PENDING
        admitted = self._policy.filter_new(candidates, self._board)
        for order in admitted:
            self._board.add_pending(order)

        if admitted:
            save_board(self._board, self._state_repo)
            logger.info(
                "Admitted %d of %d order(s)", len(admitted), len(candidates)
            )
        return admitted
