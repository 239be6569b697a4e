"""
Ordered in-memory store for daily stock records.

The store is a left-leaning red-black tree keyed by the composite key
``(symbol, observed_on)``. Each node exclusively owns its two subtrees and
carries a ``Color`` tag that exists only for balancing.

Invariants held whenever ``insert()`` returns
---------------------------------------------
1. BST order over the composite key (left < node < right).
2. Red links lean left, and no node has two red links attached at rest.
3. Every root-to-empty path crosses the same number of black links.
4. The root is black.

Height is therefore bounded by ``2 * log2(n + 1)``, which keeps insert,
search and the recursive traversal well inside Python's recursion limit.

Duplicate keys
--------------
Inserting a record whose ``(symbol, observed_on)`` already exists leaves the
stored record in place: the first write wins. Callers that need upsert
semantics must build it on top of ``search()``.

Concurrency
-----------
Single writer. ``insert()`` may rewrite the whole root-to-leaf path, so
readers must only run between writer calls (e.g. a query phase after
ingestion).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterator, Optional

from stock_analyser.models.record import CompositeKey, StockRecord

logger = logging.getLogger(__name__)


class Color(Enum):
    RED = "red"
    BLACK = "black"


@dataclass
class _Node:
    record: StockRecord
    color: Color = Color.RED
    left: Optional["_Node"] = None
    right: Optional["_Node"] = None

    @property
    def key(self) -> CompositeKey:
        return self.record.key


def _is_red(node: Optional[_Node]) -> bool:
    return node is not None and node.color is Color.RED


def _compare(a: CompositeKey, b: CompositeKey) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


class OrderedStore:
    """Left-leaning red-black tree of ``StockRecord`` keyed by (symbol, date).

    Usage::

        store = OrderedStore()
        store.insert(record)
        store.search("AAPL", date(2024, 1, 2))   # -> StockRecord | None
        store.all_records()                        # ascending by key
    """

    def __init__(self) -> None:
        self._root: Optional[_Node] = None
        self._size = 0

    # ── Writes ────────────────────────────────────────────────────────────────

    def insert(self, record: StockRecord) -> None:
        """Insert ``record`` under its composite key.

        Never fails. A duplicate key keeps the record already stored.
        """
        self._root = self._insert(self._root, record)
        self._root.color = Color.BLACK

    def _insert(self, h: Optional[_Node], record: StockRecord) -> _Node:
        if h is None:
            self._size += 1
            return _Node(record)

        cmp = _compare(record.key, h.key)
        if cmp < 0:
            h.left = self._insert(h.left, record)
        elif cmp > 0:
            h.right = self._insert(h.right, record)
        else:
            logger.debug(
                "Duplicate key %s %s ignored; keeping first record.",
                record.symbol, record.observed_on,
            )

        if _is_red(h.right) and not _is_red(h.left):
            h = self._rotate_left(h)
        if _is_red(h.left) and _is_red(h.left.left):
            h = self._rotate_right(h)
        if _is_red(h.left) and _is_red(h.right):
            self._flip_colors(h)

        return h

    @staticmethod
    def _rotate_left(h: _Node) -> _Node:
        x = h.right
        h.right = x.left
        x.left = h
        x.color = h.color
        h.color = Color.RED
        return x

    @staticmethod
    def _rotate_right(h: _Node) -> _Node:
        x = h.left
        h.left = x.right
        x.right = h
        x.color = h.color
        h.color = Color.RED
        return x

    @staticmethod
    def _flip_colors(h: _Node) -> None:
        # Splits a temporary 4-node; only called when both children exist.
        h.color = Color.RED
        h.left.color = Color.BLACK
        h.right.color = Color.BLACK

    # ── Reads ─────────────────────────────────────────────────────────────────

    def search(self, symbol: str, observed_on: date) -> Optional[StockRecord]:
        """Return the record stored under ``(symbol, observed_on)``, or ``None``.

        ``None`` is a normal outcome, not an error.
        """
        key: CompositeKey = (symbol, observed_on)
        x = self._root
        while x is not None:
            cmp = _compare(key, x.key)
            if cmp < 0:
                x = x.left
            elif cmp > 0:
                x = x.right
            else:
                return x.record
        return None

    def all_records(self) -> list[StockRecord]:
        """Return every stored record, ascending by (symbol, date).

        A fresh list on every call; the tree is not modified.
        """
        records: list[StockRecord] = []
        self._inorder(self._root, records)
        return records

    def _inorder(self, x: Optional[_Node], out: list[StockRecord]) -> None:
        if x is None:
            return
        self._inorder(x.left, out)
        out.append(x.record)
        self._inorder(x.right, out)

    def __iter__(self) -> Iterator[StockRecord]:
        """Lazy in-order iteration. Do not insert while iterating."""
        stack: list[_Node] = []
        x = self._root
        while stack or x is not None:
            while x is not None:
                stack.append(x)
                x = x.left
            x = stack.pop()
            yield x.record
            x = x.right

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        symbol, observed_on = key
        return self.search(symbol, observed_on) is not None

    def is_empty(self) -> bool:
        return self._root is None

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        return self._height(self._root)

    def _height(self, x: Optional[_Node]) -> int:
        if x is None:
            return 0
        return 1 + max(self._height(x.left), self._height(x.right))

    def symbols(self) -> list[str]:
        """Distinct symbols in ascending order."""
        seen: list[str] = []
        for record in self:
            if not seen or seen[-1] != record.symbol:
                seen.append(record.symbol)
        return seen
