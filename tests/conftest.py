"""
Shared pytest fixtures for the Stock Analyser test suite.

Provides:
  - ``make_record``: factory for ``StockRecord`` with sensible defaults.
  - ``example_records`` / ``example_store``: the three-record AAPL/MSFT
    scenario used across store, ranking and CLI tests.
  - ``write_csv``: writes CSV text to ``tmp_path`` and returns the path.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable

import pytest

from stock_analyser.models.record import StockRecord
from stock_analyser.store.ordered_store import OrderedStore


def build_record(
    symbol: str = "AAPL",
    observed_on: date = date(2024, 1, 2),
    open: float = 100.0,
    high: float | None = None,
    low: float | None = None,
    close: float | None = None,
    volume: int = 1_000,
) -> StockRecord:
    close = open if close is None else close
    return StockRecord(
        symbol=symbol,
        observed_on=observed_on,
        open=open,
        high=max(open, close) + 1.0 if high is None else high,
        low=min(open, close) - 1.0 if low is None else low,
        close=close,
        adjusted_close=close,
        volume=volume,
    )


@pytest.fixture
def make_record() -> Callable[..., StockRecord]:
    """Factory fixture wrapping ``build_record``."""
    return build_record


@pytest.fixture
def example_records() -> list[StockRecord]:
    """AAPL/01-02 (1000), MSFT/01-02 (5000), AAPL/01-03 (2000), in insert order."""
    return [
        build_record("AAPL", date(2024, 1, 2), open=185.0, volume=1_000),
        build_record("MSFT", date(2024, 1, 2), open=370.0, volume=5_000),
        build_record("AAPL", date(2024, 1, 3), open=184.0, volume=2_000),
    ]


@pytest.fixture
def example_store(example_records) -> OrderedStore:
    store = OrderedStore()
    for record in example_records:
        store.insert(record)
    return store


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str], Path]:
    """Write CSV content to a temp file and return the path."""

    def _write(content: str, name: str = "stocks.csv") -> Path:
        p = tmp_path / name
        p.write_text(content, encoding="utf-8")
        return p

    return _write
