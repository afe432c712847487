"""Tests for the LoadOrders use case (startup and refresh)."""

from ordertrack.application.load_orders import LoadOrdersHandler
from ordertrack.domain.model.order import Item, Order, OrderStatus
from ordertrack.domain.model.order_board import OrderBoard, OrderSnapshot
from tests.fakes import FakeOrderStateRepository


def _make_order(source: str, source_file: str | None = None) -> Order:
    return Order(
        order_type="Delivery",
        source=source,
        order_date=1_700_000_000_000,
        items=[Item("Curry", 1, "11.00")],
        source_file=source_file,
    )


class TestStartup:

    def test_restores_snapshot_and_scans(self):
        saved = _make_order("Saved", "saved.json")
        state_repo = FakeOrderStateRepository(OrderSnapshot(in_progress=[saved]))
        board = OrderBoard()
        remembered: list[str] = []
        handler = LoadOrdersHandler(
            board,
            state_repo,
            scan_orders=lambda: [_make_order("Fresh")],
            remember_file=remembered.append,
        )

        result = handler.handle_startup()

        assert result.restored == 1
        assert result.admitted == 1
        assert board.in_progress == [saved]
        assert saved.status == OrderStatus.IN_PROGRESS
        assert [o.source for o in board.pending] == ["Fresh"]
        assert remembered == ["saved.json"]

    def test_without_snapshot_only_scans(self):
        board = OrderBoard()
        handler = LoadOrdersHandler(
            board, FakeOrderStateRepository(), scan_orders=lambda: [_make_order("A")]
        )
        result = handler.handle_startup()
        assert result.restored == 0
        assert result.admitted == 1

    def test_scanned_copy_of_restored_order_is_deduplicated(self):
        saved = _make_order("Same")
        board = OrderBoard()
        handler = LoadOrdersHandler(
            board,
            FakeOrderStateRepository(OrderSnapshot(pending=[saved])),
            scan_orders=lambda: [_make_order("Same")],
        )
        result = handler.handle_startup()
        assert result.admitted == 0
        assert len(board.pending) == 1


class TestRefresh:

    def test_refresh_admits_new_orders(self):
        batches = [[_make_order("A")], [_make_order("A"), _make_order("B")]]
        board = OrderBoard()
        handler = LoadOrdersHandler(
            board, FakeOrderStateRepository(), scan_orders=lambda: batches.pop(0)
        )
        assert len(handler.handle_refresh()) == 1
        assert [o.source for o in handler.handle_refresh()] == ["B"]
        assert len(board.pending) == 2
