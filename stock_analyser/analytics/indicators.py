"""
Per-symbol analytics computed from the ordered store.

Every function is a single linear scan over ``store.all_records()``. Because
the store is ordered by (symbol, date), the records of one symbol come out
contiguous and date-ascending, so "the last N records on or before a date"
is simply the tail of the filtered scan.

Sentinel conventions
--------------------
- ``simple_moving_average`` returns ``0.0`` when fewer than ``period``
  records exist; ``price_trend`` treats that as insufficient data.
- ``average_volume`` returns ``0.0`` for an empty range.
- ``symbol_stats`` returns ``None`` for an unknown symbol.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from stock_analyser.models.record import StockRecord
from stock_analyser.store.ordered_store import OrderedStore


class TrendDirection(str, Enum):
    UPWARD = "Upward Trend"
    DOWNWARD = "Downward Trend"
    INSUFFICIENT_DATA = "Insufficient data"


@dataclass
class SymbolStats:
    """Summary statistics for one symbol across the whole store.

    Attributes:
        symbol:          Ticker symbol.
        min_price:       Lowest opening price.
        max_price:       Highest intraday high.
        count:           Number of trading days on record.
        average_volume:  Mean volume, rounded down to a whole share count.
    """

    symbol:         str
    min_price:      float
    max_price:      float
    count:          int
    average_volume: int


def _symbol_records(store: OrderedStore, symbol: str) -> list[StockRecord]:
    return [r for r in store.all_records() if r.symbol == symbol]


def records_for_date(store: OrderedStore, day: date) -> list[StockRecord]:
    """All records observed on ``day``, in symbol order."""
    return [r for r in store.all_records() if r.observed_on == day]


def simple_moving_average(
    store: OrderedStore,
    symbol: str,
    day: date,
    period: int,
) -> float:
    """Mean close of the last ``period`` records for ``symbol`` up to ``day``.

    Returns:
        The SMA, or ``0.0`` when fewer than ``period`` records exist.

    Raises:
        ValueError: If ``period < 1``.
    """
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}.")

    window = [
        r.close for r in _symbol_records(store, symbol) if r.observed_on <= day
    ]
    if len(window) < period:
        return 0.0
    return sum(window[-period:]) / period


def price_trend(
    store: OrderedStore,
    symbol: str,
    day: date,
    short_window: int = 5,
    long_window: int = 20,
) -> TrendDirection:
    """Classify the trend by comparing a short and a long SMA.

    Upward when the short SMA is strictly above the long SMA, downward
    otherwise; insufficient data when either SMA could not be computed.
    """
    short_sma = simple_moving_average(store, symbol, day, short_window)
    long_sma = simple_moving_average(store, symbol, day, long_window)

    if short_sma == 0 or long_sma == 0:
        return TrendDirection.INSUFFICIENT_DATA
    if short_sma > long_sma:
        return TrendDirection.UPWARD
    return TrendDirection.DOWNWARD


def average_volume(
    store: OrderedStore,
    symbol: str,
    start: date,
    end: date,
) -> float:
    """Mean volume for ``symbol`` between ``start`` and ``end`` inclusive.

    Raises:
        ValueError: If ``end`` is before ``start``.
    """
    if end < start:
        raise ValueError(f"end ({end}) must be >= start ({start}).")

    volumes = [
        r.volume for r in _symbol_records(store, symbol)
        if start <= r.observed_on <= end
    ]
    if not volumes:
        return 0.0
    return sum(volumes) / len(volumes)


def symbol_stats(store: OrderedStore, symbol: str) -> Optional[SymbolStats]:
    """Min open, max high and average volume for ``symbol``, or ``None``."""
    records = _symbol_records(store, symbol)
    if not records:
        return None

    return SymbolStats(
        symbol=symbol,
        min_price=min(r.open for r in records),
        max_price=max(r.high for r in records),
        count=len(records),
        average_volume=sum(r.volume for r in records) // len(records),
    )
