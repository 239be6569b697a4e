"""Tests for stock_analyser/ranking/comparators.py."""

from __future__ import annotations

import pytest

from stock_analyser.ranking.comparators import (
    by_field,
    by_open_price,
    by_volume,
    reverse,
)


class TestStandardComparators:
    def test_by_volume_higher_ranks_first(self, make_record):
        big, small = make_record(volume=10), make_record(volume=5)
        assert by_volume(big, small) > 0
        assert by_volume(small, big) < 0
        assert by_volume(big, big) == 0

    def test_by_open_price_higher_ranks_first(self, make_record):
        high, low = make_record(open=20.5), make_record(open=20.25)
        assert by_open_price(high, low) > 0
        assert by_open_price(low, high) < 0
        assert by_open_price(low, low) == 0


class TestByField:
    def test_close(self, make_record):
        cmp = by_field("close")
        assert cmp(make_record(close=3.0), make_record(close=2.0)) == 1
        assert cmp.__name__ == "by_close"

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="Cannot rank by"):
            by_field("symbol")


class TestReverse:
    def test_inverts(self, make_record):
        big, small = make_record(volume=10), make_record(volume=5)
        assert reverse(by_volume)(big, small) < 0
        assert reverse(by_volume)(small, big) > 0

    def test_name(self):
        assert reverse(by_volume).__name__ == "reverse_by_volume"
