"""
In-place comparison sorts used to answer top-N ranking queries.

All four entry points share one contract:

  - ``sort(records, comparator) -> float``
  - Reorders ``records`` in place so that ``comparator(records[i],
    records[i + 1]) >= 0`` for every adjacent pair (higher-ranking first).
  - Empty and single-element sequences are valid no-ops.
  - Returns the wall-clock duration in milliseconds and logs it at INFO.
    The timing is informational only.

None of the algorithms is stable; records that tie under the comparator
may come out in any relative order.

============  ==================================  =======================
Algorithm     Strategy                            Complexity
============  ==================================  =======================
bubble        adjacent swaps, early exit          O(n²)
selection     swap best remaining into place      O(n²)
merge         top-down split, left-first merge    O(n log n)
quick         Lomuto partition, last-elem pivot   O(n log n) avg, O(n²)
============  ==================================  =======================
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Callable, MutableSequence

from stock_analyser.models.record import StockRecord
from stock_analyser.ranking.comparators import Comparator

logger = logging.getLogger(__name__)

SortFn = Callable[[MutableSequence[StockRecord], Comparator], float]


def _timed(label: str) -> Callable[[Callable[..., None]], SortFn]:
    """Wrap an in-place sort so it reports its own duration."""

    def decorator(fn: Callable[..., None]) -> SortFn:
        @functools.wraps(fn)
        def wrapper(records: MutableSequence[StockRecord], comparator: Comparator) -> float:
            start = time.perf_counter()
            fn(records, comparator)
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            logger.info(
                "%s took %.3f milliseconds (%d records)",
                label, elapsed_ms, len(records),
            )
            return elapsed_ms

        return wrapper

    return decorator


# ── Bubble ────────────────────────────────────────────────────────────────────

@_timed("Bubble Sort")
def bubble_sort(records: MutableSequence[StockRecord], comparator: Comparator) -> None:
    n = len(records)
    for i in range(n - 1):
        swapped = False
        for j in range(n - i - 1):
            if comparator(records[j], records[j + 1]) < 0:
                records[j], records[j + 1] = records[j + 1], records[j]
                swapped = True
        if not swapped:
            break


# ── Selection ─────────────────────────────────────────────────────────────────

@_timed("Selection Sort")
def selection_sort(records: MutableSequence[StockRecord], comparator: Comparator) -> None:
    n = len(records)
    for i in range(n - 1):
        best = i
        for j in range(i + 1, n):
            if comparator(records[j], records[best]) > 0:
                best = j
        if best != i:
            records[i], records[best] = records[best], records[i]


# ── Merge ─────────────────────────────────────────────────────────────────────

@_timed("Merge Sort")
def merge_sort(records: MutableSequence[StockRecord], comparator: Comparator) -> None:
    _merge_sort(records, 0, len(records) - 1, comparator)


def _merge_sort(
    records: MutableSequence[StockRecord],
    left: int,
    right: int,
    comparator: Comparator,
) -> None:
    if left >= right:
        return
    mid = (left + right) // 2
    _merge_sort(records, left, mid, comparator)
    _merge_sort(records, mid + 1, right, comparator)
    _merge(records, left, mid, right, comparator)


def _merge(
    records: MutableSequence[StockRecord],
    left: int,
    mid: int,
    right: int,
    comparator: Comparator,
) -> None:
    merged: list[StockRecord] = []
    i, j = left, mid + 1
    while i <= mid and j <= right:
        # Ties take from the left half.
        if comparator(records[i], records[j]) >= 0:
            merged.append(records[i])
            i += 1
        else:
            merged.append(records[j])
            j += 1
    merged.extend(records[i:mid + 1])
    merged.extend(records[j:right + 1])
    records[left:right + 1] = merged


# ── Quick ─────────────────────────────────────────────────────────────────────

@_timed("Quick Sort")
def quick_sort(records: MutableSequence[StockRecord], comparator: Comparator) -> None:
    _quick_sort(records, 0, len(records) - 1, comparator)


def _quick_sort(
    records: MutableSequence[StockRecord],
    low: int,
    high: int,
    comparator: Comparator,
) -> None:
    # Recurse into the smaller side and loop on the larger one so the stack
    # stays O(log n) even on degenerate (e.g. all-equal) input.
    while low < high:
        p = _partition(records, low, high, comparator)
        if p - low < high - p:
            _quick_sort(records, low, p - 1, comparator)
            low = p + 1
        else:
            _quick_sort(records, p + 1, high, comparator)
            high = p - 1


def _partition(
    records: MutableSequence[StockRecord],
    low: int,
    high: int,
    comparator: Comparator,
) -> int:
    pivot = records[high]
    i = low - 1
    for j in range(low, high):
        if comparator(records[j], pivot) >= 0:
            i += 1
            records[i], records[j] = records[j], records[i]
    records[i + 1], records[high] = records[high], records[i + 1]
    return i + 1


# ── Registry ──────────────────────────────────────────────────────────────────

SORT_ALGORITHMS: dict[str, SortFn] = {
    "bubble": bubble_sort,
    "selection": selection_sort,
    "merge": merge_sort,
    "quick": quick_sort,
}


def get_sort_algorithm(name: str) -> SortFn:
    """Look up a sort entry point by name (case-insensitive).

    Raises:
        ValueError: If ``name`` is not one of ``SORT_ALGORITHMS``.
    """
    key = name.strip().lower()
    try:
        return SORT_ALGORITHMS[key]
    except KeyError:
        raise ValueError(
            f"Unknown sort algorithm '{name}'. Valid values: {sorted(SORT_ALGORITHMS)}"
        ) from None
