"""Unit tests for the OrderBoard status collections."""

import pytest

from ordertrack.domain.exceptions import EntityNotFoundError, ValidationError
from ordertrack.domain.model.order import Item, Order, OrderStatus
from ordertrack.domain.model.order_board import OrderBoard, OrderSnapshot


def _make_order(source: str = "Taco Stand", date: int = 1_700_000_000_000) -> Order:
    return Order(order_type="Pickup", source=source, order_date=date, items=[Item("Taco", 3, "2.00")])


class TestAddPending:

    def test_added_order_is_pending(self):
        board = OrderBoard()
        order = _make_order()
        order.status = OrderStatus.COMPLETED
        board.add_pending(order)
        assert board.pending == [order]
        assert order.status == OrderStatus.PENDING


class TestTransitions:

    def test_full_lifecycle(self):
        board = OrderBoard()
        order = _make_order()
        board.add_pending(order)

        board.start(order)
        assert board.pending == []
        assert board.in_progress == [order]
        assert order.status == OrderStatus.IN_PROGRESS

        board.complete(order)
        assert board.in_progress == []
        assert board.completed == [order]
        assert order.status == OrderStatus.COMPLETED

    def test_undo_complete_then_undo_start(self):
        board = OrderBoard()
        order = _make_order()
        board.add_pending(order)
        board.start(order)
        board.complete(order)

        board.undo_complete(order)
        assert board.in_progress == [order]
        assert order.status == OrderStatus.IN_PROGRESS

        board.undo_start(order)
        assert board.pending == [order]
        assert order.status == OrderStatus.PENDING

    def test_complete_from_pending_rejected(self):
        board = OrderBoard()
        order = _make_order()
        board.add_pending(order)
        with pytest.raises(ValidationError, match="in-progress"):
            board.complete(order)
        assert board.pending == [order]

    def test_start_unknown_order_rejected(self):
        with pytest.raises(ValidationError, match="pending"):
            OrderBoard().start(_make_order())

    def test_moves_the_identical_object_first(self):
        board = OrderBoard()
        first = _make_order()
        twin = _make_order()
        board.pending.extend([first, twin])
        board.start(twin)
        assert board.pending[0] is first
        assert board.in_progress[0] is twin

    def test_order_is_in_exactly_one_collection(self):
        board = OrderBoard()
        order = _make_order()
        board.add_pending(order)
        board.start(order)
        holders = [s for s in OrderStatus if order in board.collection(s)]
        assert holders == [OrderStatus.IN_PROGRESS]


class TestRemove:

    def test_remove_returns_status(self):
        board = OrderBoard()
        order = _make_order()
        board.add_pending(order)
        board.start(order)
        assert board.remove(order) == OrderStatus.IN_PROGRESS
        assert board.all_orders() == []

    def test_remove_missing_raises(self):
        with pytest.raises(EntityNotFoundError):
            OrderBoard().remove(_make_order())


class TestSnapshot:

    def test_snapshot_is_a_copy(self):
        board = OrderBoard()
        board.add_pending(_make_order())
        snapshot = board.snapshot()
        board.pending.clear()
        assert len(snapshot.pending) == 1

    def test_restore_aligns_status_with_collection(self):
        order = _make_order()  # PENDING, but saved under completed
        board = OrderBoard()
        board.restore(OrderSnapshot(completed=[order]))
        assert board.completed == [order]
        assert order.status == OrderStatus.COMPLETED

    def test_restore_replaces_contents(self):
        board = OrderBoard()
        board.add_pending(_make_order("Old"))
        board.restore(OrderSnapshot(pending=[_make_order("New")]))
        assert [o.source for o in board.all_orders()] == ["New"]

    def test_contains_checks_every_collection(self):
        board = OrderBoard()
        order = _make_order()
        board.add_pending(order)
        board.start(order)
        board.complete(order)
        copy = _make_order()
        copy.status = OrderStatus.COMPLETED
        assert board.contains(copy)
