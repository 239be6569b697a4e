"""
Daily stock record: one (symbol, trading day) observation.

``StockRecord`` is frozen (immutable) after construction, so the same
instance can sit in the ordered store and in any number of ranking
snapshots without risk of mutation.

The composite key ``(symbol, observed_on)`` orders records by symbol first,
then by date ascending. Plain tuple comparison gives exactly that ordering,
so ``CompositeKey`` is a ``tuple[str, date]``.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator

CompositeKey = tuple[str, date]


class StockRecord(BaseModel):
    """A single daily OHLCV observation for one symbol.

    Attributes:
        symbol: Ticker symbol, e.g. ``"AAPL"``.
        observed_on: Trading day of the observation.
        open: Opening price.
        high: Intraday high.
        low: Intraday low.
        close: Closing price.
        adjusted_close: Close adjusted for splits and dividends.
        volume: Shares traded (non-negative).
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    symbol: str
    observed_on: date
    open: float
    high: float
    low: float
    close: float
    adjusted_close: float
    volume: int

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Symbol must be non-empty.")
        return v

    @field_validator("volume")
    @classmethod
    def validate_volume_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Volume must be non-negative, got {v}.")
        return v

    @property
    def price(self) -> float:
        """Reference price of the day; same value as ``close``."""
        return self.close

    @property
    def key(self) -> CompositeKey:
        return (self.symbol, self.observed_on)
