"""
Indicator Results

Value objects returned by the indicator library, momentum series and
moving-average series. Insufficient data is signalled by NaN values or empty
maps, never by exceptions.
"""

import math
from typing import NamedTuple

from pydantic import BaseModel, Field


# =============================================================================
# SCALAR / TUPLE RESULTS
# =============================================================================


class MACDResult(NamedTuple):
    """Last MACD value and last signal-line value."""

    macd: float
    signal: float

    @property
    def histogram(self) -> float:
        return self.macd - self.signal


class BollingerBands(NamedTuple):
    upper: float
    middle: float
    lower: float


class StochasticResult(NamedTuple):
    """%K and %D. %D is collapsed to %K (single-value approximation)."""

    k: float
    d: float


# =============================================================================
# SERIES RESULTS
# =============================================================================


class RSISeries(BaseModel):
    """
    Wilder RSI aligned index-for-index with the candle series.

    Leading entries (before the first full period) are NaN.
    """

    series: list[float] = Field(default_factory=list)
    last: float = math.nan


class MAResult(BaseModel):
    """
    Simple (DMA) and exponential (EMA) moving averages keyed by period.

    Each series has the same length as the source closes. DMA entries before
    the window fills are 0.0; EMA is seeded with the first close. Both differ
    from the NaN lead used by RSISeries.
    """

    dma: dict[int, list[float]] = Field(default_factory=dict)
    ema: dict[int, list[float]] = Field(default_factory=dict)

    @property
    def periods(self) -> list[int]:
        return sorted(self.dma)

    def is_empty(self) -> bool:
        return not self.dma and not self.ema


# =============================================================================
# LAST-VALUE SNAPSHOT
# =============================================================================


class IndicatorValues(BaseModel):
    """Last values of every indicator for one snapshot. NaN = not enough data."""

    last_close: float = math.nan
    sma_short: float = math.nan
    sma_long: float = math.nan
    rsi: float = math.nan
    macd: float = math.nan
    macd_signal: float = math.nan
    atr: float = math.nan
    vwap: float = math.nan
    bollinger_upper: float = math.nan
    bollinger_middle: float = math.nan
    bollinger_lower: float = math.nan
    obv: float = math.nan
    obv_slope: float = 0.0
    adx: float = math.nan
    stochastic_k: float = math.nan
    stochastic_d: float = math.nan
    cci: float = math.nan
    roc: float = math.nan
    mfi: float = math.nan
