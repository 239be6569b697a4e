"""
Stock Analyser: an in-memory ordered store and ranking engine for daily
stock records.

Packages
--------
models     : StockRecord, the immutable (symbol, date) observation.
store      : OrderedStore, a left-leaning red-black tree on (symbol, date).
ranking    : bubble / selection / merge / quick sorts + top-N queries.
ingestion  : CSV parsing into validated records.
analytics  : SMA, trend, average volume and per-symbol statistics.
reporting  : ASCII formatters for the CLI.
"""

__version__ = "0.1.0"
