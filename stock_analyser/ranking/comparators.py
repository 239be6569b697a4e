"""
Ranking comparators over ``StockRecord``.

A ``Comparator`` answers "does ``a`` rank ahead of ``b``?":

  - positive  → ``a`` ranks ahead of ``b``
  - zero      → tie
  - negative  → ``b`` ranks ahead of ``a``

Every sort in ``ranking.algorithms`` puts higher-ranking records first, so
``by_volume`` yields a volume-descending ranking and ``reverse(by_volume)``
an ascending one.
"""

from __future__ import annotations

from typing import Callable

from stock_analyser.models.record import StockRecord

Comparator = Callable[[StockRecord, StockRecord], int]

NUMERIC_FIELDS = frozenset({
    "open", "high", "low", "close", "adjusted_close", "volume",
})


def _sign(a: float, b: float) -> int:
    return (a > b) - (a < b)


def by_volume(a: StockRecord, b: StockRecord) -> int:
    """Higher traded volume ranks first."""
    return _sign(a.volume, b.volume)


def by_open_price(a: StockRecord, b: StockRecord) -> int:
    """Higher opening price ranks first."""
    return _sign(a.open, b.open)


def by_field(name: str) -> Comparator:
    """Build a comparator ranking higher values of a numeric field first.

    Raises:
        ValueError: If ``name`` is not a numeric ``StockRecord`` field.
    """
    if name not in NUMERIC_FIELDS:
        raise ValueError(
            f"Cannot rank by '{name}'. Valid fields: {sorted(NUMERIC_FIELDS)}"
        )

    def compare(a: StockRecord, b: StockRecord) -> int:
        return _sign(getattr(a, name), getattr(b, name))

    compare.__name__ = f"by_{name}"
    return compare


def reverse(comparator: Comparator) -> Comparator:
    """Invert a ranking (lowest first)."""

    def compare(a: StockRecord, b: StockRecord) -> int:
        return comparator(b, a)

    compare.__name__ = f"reverse_{getattr(comparator, '__name__', 'comparator')}"
    return compare
