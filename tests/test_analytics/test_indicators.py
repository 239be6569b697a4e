"""
Tests for stock_analyser/analytics/indicators.py.

All tests build small synthetic stores: closes and volumes are chosen so
expected values can be computed by hand.
"""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from stock_analyser.analytics.indicators import (
    SymbolStats,
    TrendDirection,
    average_volume,
    price_trend,
    records_for_date,
    simple_moving_average,
    symbol_stats,
)
from stock_analyser.store.ordered_store import OrderedStore

_START = date(2024, 1, 1)


@pytest.fixture
def series_store(make_record) -> OrderedStore:
    """AAPL closes 1..30 on consecutive days, plus a few MSFT rows."""
    store = OrderedStore()
    for i in range(30):
        store.insert(
            make_record("AAPL", _START + timedelta(days=i), open=float(i + 1),
                        volume=(i + 1) * 100)
        )
    for i in range(3):
        store.insert(
            make_record("MSFT", _START + timedelta(days=i), open=300.0 - i * 10,
                        volume=1_000)
        )
    return store


class TestRecordsForDate:
    def test_returns_all_symbols_on_day(self, series_store):
        rows = records_for_date(series_store, _START)
        assert [r.symbol for r in rows] == ["AAPL", "MSFT"]

    def test_no_rows(self, series_store):
        assert records_for_date(series_store, date(1999, 1, 1)) == []


class TestSimpleMovingAverage:
    def test_last_five_closes(self, series_store):
        # Closes on days 26..30 are 26..30 -> mean 28.
        day = _START + timedelta(days=29)
        assert simple_moving_average(series_store, "AAPL", day, 5) == pytest.approx(28.0)

    def test_respects_end_date(self, series_store):
        # Up to day 10: closes 6..10 -> mean 8.
        day = _START + timedelta(days=9)
        assert simple_moving_average(series_store, "AAPL", day, 5) == pytest.approx(8.0)

    def test_insufficient_data_returns_zero(self, series_store):
        day = _START + timedelta(days=2)
        assert simple_moving_average(series_store, "AAPL", day, 5) == 0.0

    def test_unknown_symbol_returns_zero(self, series_store):
        assert simple_moving_average(series_store, "NOPE", _START, 1) == 0.0

    def test_invalid_period(self, series_store):
        with pytest.raises(ValueError):
            simple_moving_average(series_store, "AAPL", _START, 0)


class TestPriceTrend:
    def test_rising_closes_upward(self, series_store):
        day = _START + timedelta(days=29)
        assert price_trend(series_store, "AAPL", day) is TrendDirection.UPWARD

    def test_falling_closes_downward(self, make_record):
        store = OrderedStore()
        for i in range(25):
            store.insert(make_record("IBM", _START + timedelta(days=i), open=100.0 - i))
        day = _START + timedelta(days=24)
        assert price_trend(store, "IBM", day) is TrendDirection.DOWNWARD

    def test_flat_closes_downward(self, make_record):
        store = OrderedStore()
        for i in range(25):
            store.insert(make_record("IBM", _START + timedelta(days=i), open=50.0))
        day = _START + timedelta(days=24)
        assert price_trend(store, "IBM", day) is TrendDirection.DOWNWARD

    def test_insufficient_for_long_window(self, series_store):
        day = _START + timedelta(days=10)
        assert price_trend(series_store, "AAPL", day) is TrendDirection.INSUFFICIENT_DATA

    def test_custom_windows(self, series_store):
        day = _START + timedelta(days=4)
        trend = price_trend(series_store, "AAPL", day, short_window=2, long_window=4)
        assert trend is TrendDirection.UPWARD

    def test_display_value(self):
        assert TrendDirection.UPWARD.value == "Upward Trend"


class TestAverageVolume:
    def test_inclusive_range(self, series_store):
        # Days 1..3 -> volumes 100, 200, 300.
        avg = average_volume(series_store, "AAPL", _START, _START + timedelta(days=2))
        assert avg == pytest.approx(200.0)

    def test_single_day(self, series_store):
        assert average_volume(series_store, "MSFT", _START, _START) == pytest.approx(1_000.0)

    def test_empty_range_returns_zero(self, series_store):
        assert average_volume(series_store, "AAPL", date(2000, 1, 1), date(2000, 2, 1)) == 0.0

    def test_reversed_range_raises(self, series_store):
        with pytest.raises(ValueError):
            average_volume(series_store, "AAPL", _START + timedelta(days=1), _START)


class TestSymbolStats:
    def test_stats(self, series_store):
        stats = symbol_stats(series_store, "MSFT")
        assert isinstance(stats, SymbolStats)
        assert stats.min_price == pytest.approx(280.0)
        assert stats.max_price == pytest.approx(301.0)   # high = open + 1 for day 0
        assert stats.count == 3
        assert stats.average_volume == 1_000

    def test_average_volume_rounds_down(self, make_record):
        store = OrderedStore()
        store.insert(make_record("X", date(2024, 1, 1), volume=1))
        store.insert(make_record("X", date(2024, 1, 2), volume=2))
        assert symbol_stats(store, "X").average_volume == 1

    def test_unknown_symbol(self, series_store):
        assert symbol_stats(series_store, "GOOG") is None
