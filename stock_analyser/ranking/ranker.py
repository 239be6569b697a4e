"""
Top-N ranking queries over a snapshot of stored records.

Usage flow
----------
1. records = store.all_records()            (or any filtered snapshot)
2. rank_records(records, by_volume, "merge")
   -> RankingResult  (full ordering + algorithm + elapsed ms)
3. top_n(records, by_volume, n=5)
   -> list[StockRecord]  (first n of the ranking)

The input snapshot is never mutated; each query sorts its own copy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from stock_analyser.models.record import StockRecord
from stock_analyser.ranking.algorithms import SORT_ALGORITHMS, get_sort_algorithm
from stock_analyser.ranking.comparators import Comparator


@dataclass
class RankingResult:
    """Outcome of one ranking query.

    Attributes:
        records:     Records in ranked order (highest-ranking first).
        algorithm:   Name of the sort used (key of ``SORT_ALGORITHMS``).
        elapsed_ms:  Wall-clock sort duration in milliseconds.
    """

    records:    list[StockRecord]
    algorithm:  str
    elapsed_ms: float

    def top(self, n: int) -> list[StockRecord]:
        return self.records[:max(n, 0)]


def rank_records(
    records:    Sequence[StockRecord],
    comparator: Comparator,
    algorithm:  str = "quick",
) -> RankingResult:
    """Sort a copy of ``records`` with the named algorithm.

    Raises:
        ValueError: If ``algorithm`` is unknown.
    """
    sort = get_sort_algorithm(algorithm)
    ranked = list(records)
    elapsed_ms = sort(ranked, comparator)
    return RankingResult(
        records=ranked,
        algorithm=algorithm.strip().lower(),
        elapsed_ms=elapsed_ms,
    )


def top_n(
    records:    Sequence[StockRecord],
    comparator: Comparator,
    n:          int = 5,
    algorithm:  str = "quick",
) -> list[StockRecord]:
    """Return the ``n`` highest-ranking records (fewer if the input is short)."""
    return rank_records(records, comparator, algorithm).top(n)


def compare_algorithms(
    records:    Sequence[StockRecord],
    comparator: Comparator,
) -> list[RankingResult]:
    """Rank the same snapshot with every algorithm, in registry order."""
    return [rank_records(records, comparator, name) for name in SORT_ALGORITHMS]
