"""
Ingestion layer: CSV parsing into validated records.

Submodules:
  stock_csv  : parse_stock_csv() / load_store() for daily OHLCV CSV files
"""
