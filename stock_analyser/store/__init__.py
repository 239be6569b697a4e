"""
Ordered record store.

Modules
-------
ordered_store : OrderedStore (left-leaning red-black tree on (symbol, date))
                + Color tag.
"""

from stock_analyser.store.ordered_store import Color, OrderedStore

__all__ = ["Color", "OrderedStore"]
