"""
Candle Model

Input contract of the engine: an InstrumentSnapshot holding an ordered,
already-fetched OHLCV candle series. Snapshots are immutable value objects;
the engine reads them and never mutates or retains them.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator


# Intervals below one day. Candles with these intervals are aggregated to
# daily closes before daily moving averages are computed.
INTRADAY_INTERVALS = frozenset(
    {"1m", "2m", "5m", "15m", "30m", "60m", "90m", "1h", "4h"}
)


def is_intraday_interval(interval: str) -> bool:
    """True when the requested interval is finer than one day."""
    return interval.strip().lower() in INTRADAY_INTERVALS


class CandlePoint(BaseModel):
    """Single OHLCV candle. Timestamp is epoch seconds."""

    model_config = ConfigDict(frozen=True)

    open: float
    high: float
    low: float
    close: float
    volume: int = Field(default=0, ge=0)
    timestamp: int = Field(..., ge=0)


class InstrumentSnapshot(BaseModel):
    """
    Candle history for one instrument as delivered by the data provider.

    The series is ordered oldest first and strictly ascending by timestamp.
    De-duplication happens upstream; a series violating the ordering is
    rejected at construction time.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    requested_range: str = ""
    requested_interval: str = ""
    series: tuple[CandlePoint, ...] = ()

    # Quote fields, None when the provider did not supply them
    live_price: Optional[float] = None
    prev_close: Optional[float] = None

    @model_validator(mode="after")
    def _check_ascending(self) -> "InstrumentSnapshot":
        for prev, cur in zip(self.series, self.series[1:]):
            if cur.timestamp <= prev.timestamp:
                raise ValueError(
                    f"series must be strictly ascending by timestamp "
                    f"({prev.timestamp} -> {cur.timestamp})"
                )
        return self

    @property
    def is_valid(self) -> bool:
        return bool(self.symbol) and len(self.series) > 0

    @property
    def latest_price(self) -> Optional[float]:
        """Live price, falling back to the last close."""
        if self.live_price is not None:
            return self.live_price
        return self.series[-1].close if self.series else None

    @property
    def previous_close(self) -> Optional[float]:
        """Previous close, falling back to the second-to-last candle."""
        if self.prev_close is not None:
            return self.prev_close
        return self.series[-2].close if len(self.series) > 1 else None


@dataclass(frozen=True)
class OHLCVArrays:
    """OHLCV data arrays for calculations."""

    timestamps: np.ndarray
    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    def __len__(self) -> int:
        return len(self.closes)


def to_arrays(series: Sequence[CandlePoint]) -> OHLCVArrays:
    """Convert a candle series to numpy arrays."""
    return OHLCVArrays(
        timestamps=np.array([c.timestamp for c in series], dtype=np.int64),
        opens=np.array([c.open for c in series], dtype=float),
        highs=np.array([c.high for c in series], dtype=float),
        lows=np.array([c.low for c in series], dtype=float),
        closes=np.array([c.close for c in series], dtype=float),
        volumes=np.array([c.volume for c in series], dtype=float),
    )
