"""Tests for stock_analyser/models/record.py: StockRecord validation and keys."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from stock_analyser.models.record import StockRecord


def _kwargs(**overrides):
    base = dict(
        symbol="AAPL",
        observed_on=date(2024, 1, 2),
        open=185.0,
        high=188.4,
        low=183.9,
        close=185.6,
        adjusted_close=185.1,
        volume=82_488_700,
    )
    base.update(overrides)
    return base


class TestStockRecord:
    def test_valid_record(self):
        record = StockRecord(**_kwargs())
        assert record.symbol == "AAPL"
        assert record.volume == 82_488_700

    def test_price_is_close(self):
        assert StockRecord(**_kwargs()).price == 185.6

    def test_key(self):
        assert StockRecord(**_kwargs()).key == ("AAPL", date(2024, 1, 2))

    def test_symbol_stripped(self):
        assert StockRecord(**_kwargs(symbol="  MSFT ")).symbol == "MSFT"

    def test_empty_symbol_rejected(self):
        with pytest.raises(ValidationError):
            StockRecord(**_kwargs(symbol="   "))

    def test_negative_volume_rejected(self):
        with pytest.raises(ValidationError):
            StockRecord(**_kwargs(volume=-1))

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_price_rejected(self, value):
        with pytest.raises(ValidationError):
            StockRecord(**_kwargs(open=value))

    def test_frozen(self):
        record = StockRecord(**_kwargs())
        with pytest.raises(ValidationError):
            record.volume = 5

    def test_equal_records_hash_equal(self):
        assert hash(StockRecord(**_kwargs())) == hash(StockRecord(**_kwargs()))
