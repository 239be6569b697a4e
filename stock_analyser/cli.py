"""
Stock Analyser: CLI entry point.

All data commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs (dates, algorithm names).
  4. Load the CSV into an ``OrderedStore``.
  5. Query the store / ranking engine and report the result to stdout.

Install and run::

    pip install -e .
    stock-analyser --help
    stock-analyser validate-config
    stock-analyser search AAPL 2016-01-04 --csv data/all_stocks_5yr.csv
    stock-analyser top-volume --algorithm merge -n 5
    stock-analyser top-open --date 2016-01-04
    stock-analyser compare-sorts --metric volume
    stock-analyser menu
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="stock-analyser",
    help="Stock Analyser: red-black tree store and ranking engine for daily stock data.",
    add_completion=False,
)

_METRICS = ("volume", "open")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from stock_analyser.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from stock_analyser.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_store_or_exit(config, csv_path: Optional[str]):
    """Load the CSV into an OrderedStore, exiting on a missing or bad file."""
    from stock_analyser.ingestion.stock_csv import load_store

    path = Path(csv_path) if csv_path else Path(config.data.csv_path)
    try:
        return load_store(path, config.data.date_format)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except ValueError as exc:
        typer.echo(f"[ERROR] CSV parse failed:\n{exc}", err=True)
        raise typer.Exit(code=1)


def _parse_date_or_exit(value: str, config) -> date:
    from stock_analyser.utils.dates import parse_date

    try:
        return parse_date(value, config.data.date_format)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)


def _resolve_algorithm_or_exit(algorithm: Optional[str], config) -> str:
    from stock_analyser.ranking.algorithms import SORT_ALGORITHMS

    name = (algorithm or config.ranking.default_algorithm).strip().lower()
    if name not in SORT_ALGORITHMS:
        typer.echo(
            f"[ERROR] Unknown algorithm '{name}'. "
            f"Choose from: {', '.join(SORT_ALGORITHMS)}",
            err=True,
        )
        raise typer.Exit(code=1)
    return name


def _comparator_for(metric: str):
    from stock_analyser.ranking.comparators import by_open_price, by_volume

    return by_volume if metric == "volume" else by_open_price


def _setup(config_path: Optional[str], csv_path: Optional[str]):
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    return config, _load_store_or_exit(config, csv_path)


# ── Query runners (shared by commands and the interactive menu) ───────────────

def _run_search(store, symbol: str, day: date) -> str:
    from stock_analyser.reporting.formatters import format_record

    return format_record(store.search(symbol, day), symbol, day)


def _run_ranking(
    store,
    metric: str,
    algorithm: str,
    n: int,
    day: Optional[date] = None,
) -> str:
    from stock_analyser.analytics.indicators import records_for_date
    from stock_analyser.ranking.ranker import rank_records
    from stock_analyser.reporting.formatters import format_ranking

    snapshot = records_for_date(store, day) if day is not None else store.all_records()
    result = rank_records(snapshot, _comparator_for(metric), algorithm)
    return format_ranking(result, n, metric=metric, day=day)


def _run_stats(store, symbol: str) -> str:
    from stock_analyser.analytics.indicators import symbol_stats
    from stock_analyser.reporting.formatters import format_symbol_stats

    return format_symbol_stats(symbol_stats(store, symbol), symbol)


def _run_sma(store, config, symbol: str, day: date) -> str:
    from stock_analyser.analytics.indicators import simple_moving_average
    from stock_analyser.reporting.formatters import format_moving_averages

    periods = (config.analytics.short_window, config.analytics.long_window)
    averages = {p: simple_moving_average(store, symbol, day, p) for p in periods}
    return format_moving_averages(symbol, day, averages)


def _run_trend(store, config, symbol: str, day: date) -> str:
    from stock_analyser.analytics.indicators import price_trend
    from stock_analyser.reporting.formatters import format_trend

    trend = price_trend(
        store, symbol, day,
        short_window=config.analytics.short_window,
        long_window=config.analytics.long_window,
    )
    return format_trend(symbol, day, trend)


def _run_avg_volume(store, symbol: str, start: date, end: date) -> str:
    from stock_analyser.analytics.indicators import average_volume
    from stock_analyser.reporting.formatters import format_average_volume

    return format_average_volume(symbol, start, end, average_volume(store, symbol, start, end))


# ── Commands ──────────────────────────────────────────────────────────────────

_CSV_HELP = "Path to the stock CSV (default: config.data.csv_path)."
_CONFIG_HELP = "Path to TOML config file."


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  CSV path:          {config.data.csv_path}")
    typer.echo(f"  Top N:             {config.ranking.top_n}")
    typer.echo(f"  Default algorithm: {config.ranking.default_algorithm}")
    typer.echo(
        f"  SMA windows:       {config.analytics.short_window}"
        f"/{config.analytics.long_window}"
    )
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("search")
def search(
    symbol: str = typer.Argument(..., help="Ticker symbol, e.g. AAPL."),
    day: str = typer.Argument(..., metavar="DATE", help="Trading day (YYYY-MM-DD)."),
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Look up the record for one symbol on one trading day.

    A missing record is reported but is not an error (exit code 0).
    """
    config, store = _setup(config_path, csv_path)
    typer.echo(_run_search(store, symbol.strip(), _parse_date_or_exit(day, config)))


@app.command("top-volume")
def top_volume(
    algorithm: Optional[str] = typer.Option(
        None,
        "--algorithm",
        "-a",
        help="bubble | selection | merge | quick (default: config.ranking.default_algorithm).",
    ),
    day: Optional[str] = typer.Option(
        None,
        "--date",
        help="Restrict the ranking to one trading day (YYYY-MM-DD).",
    ),
    n: Optional[int] = typer.Option(None, "--top", "-n", min=1, help="Rows to show."),
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Rank records by traded volume, highest first."""
    config, store = _setup(config_path, csv_path)
    name = _resolve_algorithm_or_exit(algorithm, config)
    target = _parse_date_or_exit(day, config) if day else None
    top = n if n is not None else config.ranking.top_n
    typer.echo(_run_ranking(store, "volume", name, top, target))


@app.command("top-open")
def top_open(
    day: str = typer.Option(..., "--date", help="Trading day (YYYY-MM-DD)."),
    algorithm: Optional[str] = typer.Option(
        None,
        "--algorithm",
        "-a",
        help="bubble | selection | merge | quick (default: config.ranking.default_algorithm).",
    ),
    n: Optional[int] = typer.Option(None, "--top", "-n", min=1, help="Rows to show."),
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Rank one trading day's records by opening price, highest first."""
    config, store = _setup(config_path, csv_path)
    name = _resolve_algorithm_or_exit(algorithm, config)
    target = _parse_date_or_exit(day, config)
    top = n if n is not None else config.ranking.top_n
    typer.echo(_run_ranking(store, "open", name, top, target))


@app.command("compare-sorts")
def compare_sorts(
    metric: str = typer.Option("volume", "--metric", help="volume | open"),
    day: Optional[str] = typer.Option(
        None,
        "--date",
        help="Restrict the snapshot to one trading day (YYYY-MM-DD).",
    ),
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Run all four sorts on the same snapshot and compare their timings.

    The O(n²) sorts are slow on a full multi-year dataset; use --date to
    benchmark on a single day's snapshot.
    """
    from stock_analyser.analytics.indicators import records_for_date
    from stock_analyser.ranking.ranker import compare_algorithms
    from stock_analyser.reporting.formatters import format_algorithm_comparison

    metric = metric.strip().lower()
    if metric not in _METRICS:
        typer.echo(f"[ERROR] Unknown metric '{metric}'. Choose from: {', '.join(_METRICS)}", err=True)
        raise typer.Exit(code=1)

    config, store = _setup(config_path, csv_path)
    target = _parse_date_or_exit(day, config) if day else None
    snapshot = records_for_date(store, target) if target else store.all_records()

    results = compare_algorithms(snapshot, _comparator_for(metric))
    typer.echo(format_algorithm_comparison(results))


@app.command("stats")
def stats(
    symbol: str = typer.Argument(..., help="Ticker symbol."),
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Show min open, max high and average volume for a symbol."""
    _, store = _setup(config_path, csv_path)
    typer.echo(_run_stats(store, symbol.strip()))


@app.command("sma")
def sma(
    symbol: str = typer.Argument(..., help="Ticker symbol."),
    day: str = typer.Argument(..., metavar="DATE", help="End date (YYYY-MM-DD)."),
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Show the short and long simple moving averages of the close."""
    config, store = _setup(config_path, csv_path)
    typer.echo(_run_sma(store, config, symbol.strip(), _parse_date_or_exit(day, config)))


@app.command("trend")
def trend(
    symbol: str = typer.Argument(..., help="Ticker symbol."),
    day: str = typer.Argument(..., metavar="DATE", help="End date (YYYY-MM-DD)."),
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Classify the price trend (short SMA vs. long SMA)."""
    config, store = _setup(config_path, csv_path)
    typer.echo(_run_trend(store, config, symbol.strip(), _parse_date_or_exit(day, config)))


@app.command("avg-volume")
def avg_volume(
    symbol: str = typer.Argument(..., help="Ticker symbol."),
    start: str = typer.Option(..., "--start", help="First day (YYYY-MM-DD), inclusive."),
    end: str = typer.Option(..., "--end", help="Last day (YYYY-MM-DD), inclusive."),
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Show the average daily volume over a date range."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    start_day = _parse_date_or_exit(start, config)
    end_day = _parse_date_or_exit(end, config)
    if end_day < start_day:
        typer.echo("[ERROR] --end must be on or after --start.", err=True)
        raise typer.Exit(code=1)

    store = _load_store_or_exit(config, csv_path)
    typer.echo(_run_avg_volume(store, symbol.strip(), start_day, end_day))


# ── Interactive menu ──────────────────────────────────────────────────────────

_MENU = """
Menu:
1. Search stock by date and symbol
2. Display top high volume stocks (Bubble Sort)
3. Display top high volume stocks (Selection Sort)
4. Display statistics for a stock symbol
5. Display top high volume stocks (Quick Sort)
6. Display simple moving average for a stock
7. Display price trend for a stock
8. Display average volume over date range
9. Display top high volume stocks (Merge Sort)
10. Display top highest volume stocks for a specific date
11. Display top highest opening price stocks for a specific date
12. Exit"""

_MENU_SORTS = {"2": "bubble", "3": "selection", "5": "quick", "9": "merge"}


@app.command("menu")
def menu(
    csv_path: Optional[str] = typer.Option(None, "--csv", help=_CSV_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_HELP),
) -> None:
    """Interactive numbered menu over a loaded CSV. Choose 12 to exit."""
    from stock_analyser.utils.dates import parse_date

    config, store = _setup(config_path, csv_path)
    n = config.ranking.top_n

    def ask_date(prompt: str) -> date:
        return parse_date(typer.prompt(prompt), config.data.date_format)

    while True:
        typer.echo(_MENU)
        choice = typer.prompt("Enter choice").strip()

        try:
            if choice == "1":
                symbol = typer.prompt("Enter symbol (e.g., AAPL)").strip()
                typer.echo(_run_search(store, symbol, ask_date("Enter date (YYYY-MM-DD)")))
            elif choice in _MENU_SORTS:
                typer.echo(_run_ranking(store, "volume", _MENU_SORTS[choice], n))
            elif choice == "4":
                typer.echo(_run_stats(store, typer.prompt("Enter stock symbol").strip()))
            elif choice == "6":
                symbol = typer.prompt("Enter symbol").strip()
                typer.echo(_run_sma(store, config, symbol, ask_date("Enter date (YYYY-MM-DD)")))
            elif choice == "7":
                symbol = typer.prompt("Enter symbol").strip()
                typer.echo(_run_trend(store, config, symbol, ask_date("Enter date (YYYY-MM-DD)")))
            elif choice == "8":
                symbol = typer.prompt("Enter symbol").strip()
                start_day = ask_date("Enter start date (YYYY-MM-DD)")
                end_day = ask_date("Enter end date (YYYY-MM-DD)")
                typer.echo(_run_avg_volume(store, symbol, start_day, end_day))
            elif choice in ("10", "11"):
                metric = "volume" if choice == "10" else "open"
                day = ask_date("Enter date (YYYY-MM-DD)")
                typer.echo(
                    _run_ranking(store, metric, config.ranking.default_algorithm, n, day)
                )
            elif choice == "12":
                typer.echo("Goodbye!")
                return
            else:
                typer.echo("Invalid choice. Please enter a number between 1 and 12")
        except ValueError as exc:
            typer.echo(f"Error: {exc}")


if __name__ == "__main__":
    app()
