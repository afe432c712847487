"""Tests for the AutoAdmitListener."""

from ordertrack.application.admit_orders import AdmitOrdersHandler
from ordertrack.application.auto_admit import AutoAdmitListener
from ordertrack.domain.model.order import Item, Order
from ordertrack.domain.model.order_board import OrderBoard
from tests.fakes import FakeOrderStateRepository


def _make_order(source: str = "Pizza Place") -> Order:
    return Order(order_type="Pickup", source=source, order_date=1_700_000_000_000, items=[Item("Pizza", 1, 12)])


def _setup(**kwargs) -> tuple[AutoAdmitListener, OrderBoard]:
    board = OrderBoard()
    admit = AdmitOrdersHandler(board, FakeOrderStateRepository())
    return AutoAdmitListener(admit, **kwargs), board


class TestAutoAdmitListener:

    def test_discovered_orders_are_admitted(self):
        listener, board = _setup()
        listener.on_orders_discovered([_make_order()])
        assert len(board.pending) == 1

    def test_on_admitted_receives_only_new_orders(self):
        seen = []
        listener, _ = _setup(on_admitted=seen.append)
        listener.on_orders_discovered([_make_order()])
        listener.on_orders_discovered([_make_order()])
        assert len(seen) == 1

    def test_disabled_listener_ignores_orders(self):
        listener, board = _setup(enabled=False)
        listener.on_orders_discovered([_make_order()])
        assert board.pending == []

    def test_toggle(self):
        listener, board = _setup()
        assert listener.toggle() is False
        listener.on_orders_discovered([_make_order("A")])
        assert listener.toggle() is True
        listener.on_orders_discovered([_make_order("B")])
        assert [o.source for o in board.pending] == ["B"]

    def test_reload_forwarded(self):
        reloads = []
        listener, _ = _setup(on_reload=reloads.append)
        listener.on_orders_reloaded([_make_order()])
        assert len(reloads) == 1
