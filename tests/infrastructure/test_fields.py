"""Tests for field extraction and the lenient value parsers."""

import time
import xml.etree.ElementTree as ET
from datetime import datetime
from decimal import Decimal

from ordertrack.infrastructure.parsing import fields


class TestFieldSpec:

    def test_first_matching_tag_wins(self):
        element = ET.fromstring("<item><qty>3</qty><count>9</count></item>")
        assert fields.ITEM_QUANTITY.extract(element) == "3"

    def test_blank_tags_are_skipped(self):
        element = ET.fromstring("<item><name>  </name><item_name>Soup</item_name></item>")
        assert fields.ITEM_NAME.extract(element) == "Soup"

    def test_default_when_nothing_matches(self):
        element = ET.fromstring("<order/>")
        assert fields.ORDER_TYPE.extract(element) == "Unknown"
        assert fields.ORDER_SOURCE.extract(element) == "Unknown"
        assert fields.ORDER_DATE.extract(element) is None

    def test_alternative_source_tags(self):
        element = ET.fromstring("<order><restaurant_name>Pho King</restaurant_name></order>")
        assert fields.ORDER_SOURCE.extract(element) == "Pho King"

    def test_container_falls_back_to_element(self):
        element = ET.fromstring("<order><item/></order>")
        assert fields.find_container(element) is element

    def test_alternative_container_tag(self):
        element = ET.fromstring("<order><menu_items><menu_item/></menu_items></order>")
        assert fields.find_container(element).tag == "menu_items"


class TestParseDate:

    def test_epoch_millis(self):
        assert fields.parse_date("1700000000000") == 1_700_000_000_000

    def test_timestamp_beyond_2100_is_not_taken_as_millis(self):
        before = fields.now_ms()
        assert fields.parse_date("99999999999999") >= before

    def test_local_datetime_formats(self):
        expected = int(datetime(2024, 3, 15, 12, 30).timestamp() * 1000)
        assert fields.parse_date("2024-03-15 12:30:00") == expected
        assert fields.parse_date("2024-03-15T12:30:00") == expected
        assert fields.parse_date("03/15/2024 12:30") == expected

    def test_day_first_format(self):
        expected = int(datetime(2024, 3, 25, 9, 0).timestamp() * 1000)
        assert fields.parse_date("25/03/2024 09:00") == expected

    def test_date_only(self):
        expected = int(datetime(2024, 3, 15).timestamp() * 1000)
        assert fields.parse_date("2024-03-15") == expected

    def test_iso_with_offset(self):
        assert fields.parse_date("2024-03-15T12:30:00+00:00") == 1_710_505_800_000

    def test_garbage_falls_back_to_now(self):
        before = int(time.time() * 1000)
        parsed = fields.parse_date("not-a-date")
        after = int(time.time() * 1000)
        assert before <= parsed <= after

    def test_missing_falls_back_to_now(self):
        assert fields.parse_date(None) > 0
        assert fields.parse_date("   ") > 0


class TestParseQuantity:

    def test_number(self):
        assert fields.parse_quantity(" 4 ") == 4

    def test_non_numeric_is_one(self):
        assert fields.parse_quantity("abc") == 1

    def test_at_least_one(self):
        assert fields.parse_quantity("0") == 1
        assert fields.parse_quantity("-2") == 1

    def test_missing_is_one(self):
        assert fields.parse_quantity(None) == 1

    def test_explicit_sign(self):
        assert fields.parse_quantity("+3") == 3

    def test_only_plain_ascii_digits(self):
        assert fields.parse_quantity("1_000") == 1
        assert fields.parse_quantity("٣") == 1
        assert fields.parse_quantity("５") == 1


class TestParsePrice:

    def test_currency_symbols_stripped(self):
        assert fields.parse_price("$12.50") == Decimal("12.50")
        assert fields.parse_price("EUR 3.00") == Decimal("3.00")

    def test_invalid_is_zero(self):
        assert fields.parse_price("free") == Decimal("0")
        assert fields.parse_price("1.2.3") == Decimal("0")

    def test_negative_is_zero(self):
        assert fields.parse_price("-4.00") == Decimal("0")

    def test_missing_is_zero(self):
        assert fields.parse_price(None) == Decimal("0")
