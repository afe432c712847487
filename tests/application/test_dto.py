"""Tests for display formatting helpers."""

from decimal import Decimal

from ordertrack.application.dto import format_currency, format_date


class TestFormatting:

    def test_currency(self):
        assert format_currency(Decimal("12.5")) == "$12.50"
        assert format_currency(Decimal("0")) == "$0.00"

    def test_date_shape(self):
        text = format_date(1_700_000_000_000)
        assert len(text) == len("2023-11-14 22:13")
        assert text.startswith("2023-11-1")

    def test_invalid_date(self):
        assert format_date(10**20) == "Invalid Date"
