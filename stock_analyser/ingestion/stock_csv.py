"""
CSV parser for daily stock records.

Format: comma delimited, with a header row. Header names are matched
case-insensitively (``Name`` and ``name`` are the same column).

Required columns:
  date, open, high, low, close, volume, name

Optional columns:
  adj_close   (defaults to ``close`` when absent or empty)

Example::

  date,open,high,low,close,volume,Name
  2013-02-08,15.07,15.12,14.63,14.75,8407500,AAL

Malformed rows
--------------
Rows with an empty, non-numeric or non-finite (nan, inf) price, a bad
date, a negative or non-integer volume, or an empty symbol are skipped.
Each skip is recorded in ``IngestResult.skipped`` and logged; a bad row
never reaches the store.
A missing file or a bad header fails the whole import.
"""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from stock_analyser.models.record import StockRecord
from stock_analyser.store.ordered_store import OrderedStore
from stock_analyser.utils.dates import DEFAULT_DATE_FORMAT, parse_date

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = frozenset({
    "date", "open", "high", "low", "close", "volume", "name",
})

_MAX_SKIPS_LOGGED = 10


@dataclass
class IngestResult:
    """Parsed records plus the rows that were rejected.

    Attributes:
        records:  Validated records, in file order.
        skipped:  ``(line_no, reason)`` for every rejected row (1-based,
                  counting the header as line 1).
    """

    records: list[StockRecord] = field(default_factory=list)
    skipped: list[tuple[int, str]] = field(default_factory=list)


def parse_stock_csv(path: Path, date_format: str = DEFAULT_DATE_FORMAT) -> IngestResult:
    """Parse a stock CSV file into validated :class:`StockRecord` objects.

    Args:
        path:        Path to the CSV file.
        date_format: ``strptime`` format of the ``date`` column.

    Returns:
        :class:`IngestResult` with accepted records and skipped rows.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the header row is missing or lacks required columns.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stock CSV file not found: {path}")

    result = IngestResult()

    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if not header:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        columns = [h.strip().lower() for h in header]
        missing = REQUIRED_CSV_COLUMNS - set(columns)
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(columns)}"
            )

        for line_no, values in enumerate(reader, start=2):
            if not values or all(not v.strip() for v in values):
                continue
            row = dict(zip(columns, values))
            try:
                result.records.append(_row_to_record(row, date_format))
            except (ValueError, ValidationError) as exc:
                result.skipped.append((line_no, _describe(exc)))

    if result.skipped:
        for line_no, reason in result.skipped[:_MAX_SKIPS_LOGGED]:
            logger.debug("Skipped row %d: %s", line_no, reason)
        logger.warning(
            "Skipped %d malformed row(s) in %s", len(result.skipped), path.name
        )

    logger.info("Parsed %d records from %s", len(result.records), path.name)
    return result


def load_store(path: Path, date_format: str = DEFAULT_DATE_FORMAT) -> OrderedStore:
    """Parse ``path`` and insert every accepted record into a new store.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the header row is missing or lacks required columns.
    """
    parsed = parse_stock_csv(path, date_format)
    store = OrderedStore()
    for record in parsed.records:
        store.insert(record)

    duplicates = len(parsed.records) - len(store)
    if duplicates:
        logger.warning(
            "%d duplicate (symbol, date) row(s) ignored; first occurrence kept.",
            duplicates,
        )
    logger.info(
        "Loaded %d records (%d symbols) into the store",
        len(store), len(store.symbols()),
    )
    return store


# ── Private helpers ────────────────────────────────────────────────────────────

def _row_to_record(row: dict[str, str], date_format: str) -> StockRecord:
    """Convert a CSV row dict to a validated :class:`StockRecord`.

    Raises:
        ValueError: On empty fields, bad numbers or a bad date.
        pydantic.ValidationError: On model-level validation failure.
    """
    close = _parse_float(row, "close")
    adj_raw = row.get("adj_close", "").strip()

    return StockRecord(
        symbol=_req(row, "name"),
        observed_on=parse_date(_req(row, "date"), date_format),
        open=_parse_float(row, "open"),
        high=_parse_float(row, "high"),
        low=_parse_float(row, "low"),
        close=close,
        adjusted_close=float(adj_raw) if adj_raw else close,
        volume=_parse_int(row, "volume"),
    )


def _req(row: dict[str, str], key: str) -> str:
    """Return a required string field, stripped; raise if empty."""
    v = (row.get(key) or "").strip()
    if not v:
        raise ValueError(f"Required field '{key}' is empty.")
    return v


def _parse_float(row: dict[str, str], key: str) -> float:
    v = _req(row, key)
    try:
        value = float(v)
    except ValueError:
        raise ValueError(f"Invalid number for '{key}': '{v}'.")
    if not math.isfinite(value):
        raise ValueError(f"Invalid number for '{key}': '{v}'.")
    return value


def _parse_int(row: dict[str, str], key: str) -> int:
    v = _req(row, key)
    try:
        return int(v)
    except ValueError:
        raise ValueError(f"Invalid integer for '{key}': '{v}'.")


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(err["msg"] for err in exc.errors())
    return str(exc)
