"""Tests for listing and looking up orders."""

import pytest

from ordertrack.application.show_orders import ShowOrdersHandler
from ordertrack.domain.exceptions import EntityNotFoundError
from ordertrack.domain.model.order import Item, Order, OrderStatus
from ordertrack.domain.model.order_board import OrderBoard


def _board() -> OrderBoard:
    board = OrderBoard()
    for source in ("A", "B", "C"):
        board.add_pending(
            Order(order_type="Delivery", source=source, order_date=1_700_000_000_000,
                  items=[Item("Salad", 2, "4.25")])
        )
    board.start(board.pending[1])
    return board


class TestListOrders:

    def test_lists_every_status(self):
        dtos = ShowOrdersHandler(_board()).list_orders()
        assert [(d.status, d.position, d.source) for d in dtos] == [
            ("PENDING", 1, "A"),
            ("PENDING", 2, "C"),
            ("IN_PROGRESS", 1, "B"),
        ]

    def test_filter_by_status(self):
        dtos = ShowOrdersHandler(_board()).list_orders(OrderStatus.IN_PROGRESS)
        assert [d.source for d in dtos] == ["B"]

    def test_dto_formatting(self):
        dto = ShowOrdersHandler(_board()).list_orders()[0]
        assert dto.total == "$8.50"
        assert dto.items[0].price == "$4.25"
        assert dto.order_type == "Delivery"


class TestGetOrder:

    def test_position_is_one_based(self):
        order = ShowOrdersHandler(_board()).get(OrderStatus.PENDING, 2)
        assert order.source == "C"

    def test_out_of_range(self):
        with pytest.raises(EntityNotFoundError, match="position 3"):
            ShowOrdersHandler(_board()).get(OrderStatus.PENDING, 3)
