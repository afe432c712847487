"""Shared helper: persist the whole board after a change."""

from __future__ import annotations

from ordertrack.domain.model.order_board import OrderBoard
from ordertrack.domain.repository.order_state_repository import OrderStateRepository


def save_board(board: OrderBoard, state_repo: OrderStateRepository) -> bool:
    snapshot = board.snapshot()
    return state_repo.save_snapshot(
        snapshot.pending, snapshot.in_progress, snapshot.completed
    )
