"""Tests for the JSON upload parser."""

import json
from decimal import Decimal

import pytest

from ordertrack.domain.exceptions import OrderParseError
from ordertrack.domain.model.order import OrderStatus
from ordertrack.infrastructure.parsing.json_order_parser import JsonOrderParser


def _write(tmp_path, body, name: str = "order.json"):
    path = tmp_path / name
    path.write_text(json.dumps(body) if not isinstance(body, str) else body, encoding="utf-8")
    return path


def _valid_body(**overrides) -> dict:
    order = {
        "type": "Delivery",
        "source": "Burger Barn",
        "order_date": 1_700_000_000_000,
        "items": [
            {"name": "Burger", "quantity": 2, "price": 5.0},
            {"name": "Fries", "quantity": 1, "price": 2.5},
        ],
    }
    order.update(overrides)
    return {"order": order}


class TestParseValidJson:

    def test_reads_order(self, tmp_path):
        order = JsonOrderParser().parse_one(_write(tmp_path, _valid_body()))
        assert order.order_type == "Delivery"
        assert order.source == "Burger Barn"
        assert order.order_date == 1_700_000_000_000
        assert len(order.items) == 2
        assert order.total == Decimal("12.5")
        assert order.status == OrderStatus.PENDING

    def test_records_source_file(self, tmp_path):
        order = JsonOrderParser().parse_one(_write(tmp_path, _valid_body(), "up_1.json"))
        assert order.source_file == "up_1.json"

    def test_unknown_fields_ignored(self, tmp_path):
        body = _valid_body(extra="ignored")
        body["meta"] = {"v": 2}
        assert JsonOrderParser().parse_one(_write(tmp_path, body)).source == "Burger Barn"

    def test_explicit_status(self, tmp_path):
        order = JsonOrderParser().parse_one(_write(tmp_path, _valid_body(status="COMPLETED")))
        assert order.status == OrderStatus.COMPLETED

    def test_item_defaults(self, tmp_path):
        body = _valid_body(items=[{"quantity": 1}])
        item = JsonOrderParser().parse_one(_write(tmp_path, body)).items[0]
        assert item.name == "Unknown Item"
        assert item.price == Decimal("0")

    def test_status_is_case_insensitive(self, tmp_path):
        order = JsonOrderParser().parse_one(_write(tmp_path, _valid_body(status="in_progress")))
        assert order.status == OrderStatus.IN_PROGRESS

    @pytest.mark.parametrize("status", ["LOST", "", 3])
    def test_unknown_status_reads_as_pending(self, tmp_path, status):
        order = JsonOrderParser().parse_one(_write(tmp_path, _valid_body(status=status)))
        assert order.status == OrderStatus.PENDING

    def test_numeric_strings_accepted(self, tmp_path):
        body = _valid_body(order_date="1700000000000", items=[{"name": "Tea", "quantity": "2", "price": "1.25"}])
        order = JsonOrderParser().parse_one(_write(tmp_path, body))
        assert order.order_date == 1_700_000_000_000
        assert order.total == Decimal("2.50")


class TestParseInvalidJson:

    def test_malformed_json(self, tmp_path):
        with pytest.raises(OrderParseError, match="Malformed JSON"):
            JsonOrderParser().parse_one(_write(tmp_path, "{not json"))

    def test_missing_order_object(self, tmp_path):
        with pytest.raises(OrderParseError, match="No order object"):
            JsonOrderParser().parse_one(_write(tmp_path, {"orders": []}))

    def test_missing_date_is_invalid(self, tmp_path):
        body = _valid_body()
        del body["order"]["order_date"]
        with pytest.raises(OrderParseError, match="Invalid order data"):
            JsonOrderParser().parse_one(_write(tmp_path, body))

    def test_empty_items_is_invalid(self, tmp_path):
        with pytest.raises(OrderParseError, match="Invalid order data"):
            JsonOrderParser().parse_one(_write(tmp_path, _valid_body(items=[])))

    def test_items_must_be_list(self, tmp_path):
        with pytest.raises(OrderParseError, match="must be a list"):
            JsonOrderParser().parse_one(_write(tmp_path, _valid_body(items={"name": "x"})))

    def test_boolean_quantity_rejected(self, tmp_path):
        body = _valid_body(items=[{"name": "Tea", "quantity": True, "price": 1}])
        with pytest.raises(OrderParseError, match="quantity"):
            JsonOrderParser().parse_one(_write(tmp_path, body))

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(OrderParseError, match="Cannot read"):
            JsonOrderParser().parse_one(tmp_path / "missing.json")

    def test_deeply_nested_json(self, tmp_path):
        depth = 200_000
        text = '{"order": ' + "[" * depth + "]" * depth + "}"
        with pytest.raises(OrderParseError, match="nested too deeply"):
            JsonOrderParser().parse_one(_write(tmp_path, text))
