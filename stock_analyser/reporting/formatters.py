"""
ASCII terminal formatters for CLI commands.

All formatters accept records or result objects and return plain multi-line
strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Ranking tables list rank, symbol, date and the ranked metric, followed by
the algorithm that produced the ordering and how long the sort took::

  === Top 5 by Volume (Quick Sort) ===
    Rank  Symbol  Date              Volume
    --------------------------------------
       1  MSFT    2024-01-02         5,000
  Sorted 3 records in 0.012 ms
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from stock_analyser.analytics.indicators import SymbolStats, TrendDirection
from stock_analyser.models.record import StockRecord
from stock_analyser.ranking.ranker import RankingResult

_ALGORITHM_LABELS: dict[str, str] = {
    "bubble": "Bubble Sort",
    "selection": "Selection Sort",
    "merge": "Merge Sort",
    "quick": "Quick Sort",
}

METRIC_LABELS: dict[str, str] = {
    "volume": "Volume",
    "open": "Open",
}


def algorithm_label(name: str) -> str:
    return _ALGORITHM_LABELS.get(name, name)


def _format_metric(record: StockRecord, metric: str) -> str:
    if metric == "volume":
        return f"{record.volume:,}"
    return f"${getattr(record, metric):,.2f}"


# ── Single record ─────────────────────────────────────────────────────────────


def format_record(record: Optional[StockRecord], symbol: str, day: date) -> str:
    """Format a search hit, or a not-found line for ``(symbol, day)``."""
    if record is None:
        return f"Stock not found: {symbol} on {day.isoformat()}"
    return (
        "Stock found:\n"
        f"  Name: {record.symbol}, Date: {record.observed_on.isoformat()}, "
        f"Open: {record.open:.2f}, High: {record.high:.2f}, "
        f"Low: {record.low:.2f}, Close: {record.close:.2f}, "
        f"Volume: {record.volume:,}"
    )


# ── Rankings ──────────────────────────────────────────────────────────────────


def format_ranking(
    result: RankingResult,
    n:      int,
    metric: str = "volume",
    day:    Optional[date] = None,
) -> str:
    """Format the top ``n`` of a ranking as a table.

    Args:
        result: Output of ``rank_records()``.
        n:      Rows to show.
        metric: ``"volume"`` or a price field name (shown as dollars).
        day:    Optional date the snapshot was filtered to (header only).

    Returns:
        Multi-line string.
    """
    label = METRIC_LABELS.get(metric, metric.replace("_", " ").title())
    title = f"=== Top {n} by {label} ({algorithm_label(result.algorithm)})"
    if day is not None:
        title += f" for {day.isoformat()}"
    title += " ==="

    lines: list[str] = ["", title]
    shown = result.top(n)
    if not shown:
        suffix = f" for {day.isoformat()}" if day is not None else ""
        lines.append(f"  (no stocks found{suffix})")
        return "\n".join(lines)

    header = f"  {'Rank':>4}  {'Symbol':<6}  {'Date':<10}  {label:>14}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for rank, record in enumerate(shown, start=1):
        lines.append(
            f"  {rank:>4}  {record.symbol:<6}  {record.observed_on.isoformat():<10}  "
            f"{_format_metric(record, metric):>14}"
        )
    lines.append(
        f"Sorted {len(result.records):,} records in {result.elapsed_ms:.3f} ms"
    )
    return "\n".join(lines)


def format_algorithm_comparison(results: list[RankingResult]) -> str:
    """Format the timings of the same ranking across several algorithms."""
    lines: list[str] = ["", "=== Sort Algorithm Timings ==="]
    if not results:
        lines.append("  (no algorithms run)")
        return "\n".join(lines)

    header = f"  {'Algorithm':<16}  {'Records':>9}  {'Elapsed (ms)':>13}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for result in sorted(results, key=lambda r: r.elapsed_ms):
        lines.append(
            f"  {algorithm_label(result.algorithm):<16}  "
            f"{len(result.records):>9,}  {result.elapsed_ms:>13.3f}"
        )
    return "\n".join(lines)


# ── Analytics ─────────────────────────────────────────────────────────────────


def format_symbol_stats(stats: Optional[SymbolStats], symbol: str) -> str:
    if stats is None:
        return f"No data found for symbol: {symbol}"
    return (
        f"Statistics for {stats.symbol}: "
        f"Minimum Price: ${stats.min_price:.2f}, "
        f"Maximum Price: ${stats.max_price:.2f}, "
        f"Average Volume: {stats.average_volume:,} "
        f"({stats.count} trading days)"
    )


def format_moving_averages(
    symbol: str,
    day: date,
    averages: dict[int, float],
) -> str:
    """One line per period; a zero average is shown as unavailable."""
    lines = [f"Simple moving averages for {symbol} as of {day.isoformat()}:"]
    for period in sorted(averages):
        value = averages[period]
        shown = f"{value:.2f}" if value else "n/a (insufficient data)"
        lines.append(f"  {period}-day SMA: {shown}")
    return "\n".join(lines)


def format_trend(symbol: str, day: date, trend: TrendDirection) -> str:
    return f"Price Trend for {symbol} as of {day.isoformat()}: {trend.value}"


def format_average_volume(symbol: str, start: date, end: date, value: float) -> str:
    return (
        f"Average Volume for {symbol} "
        f"({start.isoformat()} to {end.isoformat()}): {value:,.2f}"
    )
