"""
Date parsing helpers shared by CSV ingestion and the CLI.

Trading records carry calendar dates only; any time-of-day component in the
source is rejected rather than silently truncated.
"""

from __future__ import annotations

from datetime import date, datetime

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str, date_format: str = DEFAULT_DATE_FORMAT) -> date:
    """Parse a calendar date string.

    Args:
        value:       Raw date string, e.g. ``"2024-01-02"``.
        date_format: ``strptime`` format (default ``YYYY-MM-DD``).

    Returns:
        The parsed ``date``.

    Raises:
        ValueError: If ``value`` is empty or does not match ``date_format``.
    """
    v = value.strip()
    if not v:
        raise ValueError("Date value is empty.")
    try:
        return datetime.strptime(v, date_format).date()
    except ValueError:
        raise ValueError(
            f"Invalid date '{v}'. Expected format {date_format!r} (e.g. "
            f"'{date(2024, 1, 2).strftime(date_format)}')."
        )
