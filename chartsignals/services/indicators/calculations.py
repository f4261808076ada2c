"""
Technical Indicator Calculations

Stateless last-value indicators over already-extracted price/volume series.
Every function is total: insufficient data yields NaN (or a tuple of NaNs),
never an exception.
"""

import math
from typing import Sequence, Union

import numpy as np

from chartsignals.schemas.indicators import (
    BollingerBands,
    MACDResult,
    StochasticResult,
)

NAN = math.nan

FloatSeries = Union[Sequence[float], np.ndarray]


def _as_array(data: FloatSeries) -> np.ndarray:
    return np.asarray(data, dtype=float)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(series: FloatSeries, period: int) -> float:
    """Simple Moving Average of the last `period` values."""
    values = _as_array(series)
    if period <= 0 or len(values) < period:
        return NAN

    total = 0.0
    for v in values[-period:]:
        total += v
    return float(total / period)


def ema(series: FloatSeries, period: int) -> float:
    """
    Exponential Moving Average, last value.

    With at least `period` values the EMA is seeded with the SMA of the
    trailing window and the recurrence is then applied over that same window
    (excluding its first element). With fewer values it degrades to seeding
    with the first element and applying the recurrence from the second one.
    Both modes are kept as-is so results stay comparable with existing data.
    """
    values = _as_array(series)
    if len(values) == 0 or period <= 0:
        return NAN

    alpha = 2.0 / (period + 1.0)
    n = len(values)

    if n >= period:
        result = 0.0
        for v in values[n - period:]:
            result += v
        result /= period
        for i in range(n - period + 1, n):
            result = alpha * values[i] + (1.0 - alpha) * result
        return float(result)

    # Degraded mode: not enough values for an SMA seed
    result = values[0]
    for i in range(1, n):
        result = alpha * values[i] + (1.0 - alpha) * result
    return float(result)


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: FloatSeries, period: int = 14) -> float:
    """Relative Strength Index over the trailing `period + 1` closes."""
    values = _as_array(closes)
    if period <= 0 or len(values) < period + 1:
        return NAN

    deltas = np.diff(values[-(period + 1):])
    gain = float(np.sum(deltas[deltas > 0]))
    loss = float(-np.sum(deltas[deltas < 0]))

    if gain + loss <= 0.0:
        return 50.0

    avg_gain = gain / period
    avg_loss = loss / period

    if avg_loss == 0.0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def macd(
    closes: FloatSeries,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence).

    The signal line is the EMA of a MACD series that is re-derived at every
    prefix length >= slow_period, so each point uses the same last-value EMA
    as the headline MACD. The signal is NaN until that series holds
    `signal_period` values.

    Returns: (macd, signal)
    """
    values = _as_array(closes)
    if slow_period <= 0 or len(values) < slow_period:
        return MACDResult(NAN, NAN)

    fast_ema = ema(values, fast_period)
    slow_ema = ema(values, slow_period)
    if math.isnan(fast_ema) or math.isnan(slow_ema):
        return MACDResult(NAN, NAN)

    macd_line = fast_ema - slow_ema

    macd_series = []
    for end in range(slow_period, len(values) + 1):
        prefix = values[:end]
        f = ema(prefix, fast_period)
        s = ema(prefix, slow_period)
        if not (math.isnan(f) or math.isnan(s)):
            macd_series.append(f - s)

    signal_line = NAN
    if signal_period > 0 and len(macd_series) >= signal_period:
        signal_line = ema(macd_series, signal_period)

    return MACDResult(macd_line, signal_line)


def stochastic(
    highs: FloatSeries,
    lows: FloatSeries,
    closes: FloatSeries,
    k_period: int = 14,
    d_period: int = 3,
) -> StochasticResult:
    """
    Stochastic Oscillator.

    Only the last %K is computed and %D is returned equal to %K instead of
    the d_period SMA of recent %K values. This single-value approximation is
    a documented limitation; d_period is accepted for interface stability.
    A flat window (highest high == lowest low) has no defined %K: NaN pair.

    Returns: (k, d)
    """
    high_arr = _as_array(highs)
    low_arr = _as_array(lows)
    close_arr = _as_array(closes)
    if (
        k_period <= 0
        or len(close_arr) < k_period
        or len(high_arr) < k_period
        or len(low_arr) < k_period
    ):
        return StochasticResult(NAN, NAN)

    highest_high = float(np.max(high_arr[-k_period:]))
    lowest_low = float(np.min(low_arr[-k_period:]))

    if highest_high == lowest_low:
        return StochasticResult(NAN, NAN)

    k = (float(close_arr[-1]) - lowest_low) / (highest_high - lowest_low) * 100.0
    return StochasticResult(k, k)


def cci(
    highs: FloatSeries, lows: FloatSeries, closes: FloatSeries, period: int = 20
) -> float:
    """Commodity Channel Index of the last bar."""
    high_arr = _as_array(highs)
    low_arr = _as_array(lows)
    close_arr = _as_array(closes)
    if period <= 0 or min(len(high_arr), len(low_arr), len(close_arr)) < period:
        return NAN

    typical_price = (high_arr[-period:] + low_arr[-period:] + close_arr[-period:]) / 3.0
    mean = float(np.mean(typical_price))
    mean_dev = float(np.mean(np.abs(typical_price - mean)))
    if mean_dev < 1e-12:
        return NAN

    return (float(typical_price[-1]) - mean) / (0.015 * mean_dev)


def roc(closes: FloatSeries, period: int = 12) -> float:
    """Rate of Change (percent) over `period` bars."""
    values = _as_array(closes)
    if period <= 0 or len(values) < period + 1:
        return NAN

    reference = float(values[-period - 1])
    if abs(reference) < 1e-12:
        return NAN
    return (float(values[-1]) - reference) / reference * 100.0


def mfi(
    highs: FloatSeries,
    lows: FloatSeries,
    closes: FloatSeries,
    volumes: FloatSeries,
    period: int = 14,
) -> float:
    """Money Flow Index over the trailing `period` transitions."""
    high_arr = _as_array(highs)
    low_arr = _as_array(lows)
    close_arr = _as_array(closes)
    volume_arr = _as_array(volumes)
    n = len(close_arr)
    if period <= 0 or n < period + 1 or not (len(high_arr) == len(low_arr) == len(volume_arr) == n):
        return NAN

    typical_price = (high_arr + low_arr + close_arr) / 3.0
    start = n - period - 1

    pos_flow = 0.0
    neg_flow = 0.0
    for i in range(start, len(close_arr) - 1):
        raw_flow = typical_price[i + 1] * volume_arr[i + 1]
        # Unchanged typical price counts as negative flow
        if typical_price[i + 1] > typical_price[i]:
            pos_flow += raw_flow
        else:
            neg_flow += raw_flow

    if pos_flow + neg_flow <= 1e-12:
        return 50.0

    money_ratio = pos_flow / max(1e-12, neg_flow)
    return float(100.0 - (100.0 / (1.0 + money_ratio)))


def adx(
    highs: FloatSeries, lows: FloatSeries, closes: FloatSeries, period: int = 14
) -> float:
    """
    Average Directional Index placeholder.

    Not implemented: always NaN. Consumers treat it like any other
    insufficient-data sentinel.
    """
    return NAN


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def atr(
    highs: FloatSeries, lows: FloatSeries, closes: FloatSeries, period: int = 14
) -> float:
    """Average True Range: plain mean of the last `period` true ranges."""
    high_arr = _as_array(highs)
    low_arr = _as_array(lows)
    close_arr = _as_array(closes)
    n = len(close_arr)
    if period <= 0 or n < period + 1 or not (len(high_arr) == len(low_arr) == n):
        return NAN

    total = 0.0
    for i in range(n - period, n):
        prev_close = close_arr[i - 1] if i > 0 else close_arr[0]
        total += max(
            high_arr[i] - low_arr[i],
            abs(high_arr[i] - prev_close),
            abs(low_arr[i] - prev_close),
        )
    return float(total / period)


def bollinger_bands(
    closes: FloatSeries, period: int = 20, std_dev: float = 2.0
) -> BollingerBands:
    """
    Bollinger Bands (population standard deviation).

    Returns: (upper, middle, lower)
    """
    values = _as_array(closes)
    if period <= 0 or len(values) < period:
        return BollingerBands(NAN, NAN, NAN)

    middle = sma(values, period)
    window = values[-period:]
    sd = math.sqrt(float(np.sum((window - middle) ** 2)) / period)

    return BollingerBands(middle + std_dev * sd, middle, middle - std_dev * sd)


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def obv(closes: FloatSeries, volumes: FloatSeries) -> float:
    """On-Balance Volume, accumulated from zero."""
    close_arr = _as_array(closes)
    volume_arr = _as_array(volumes)
    if len(close_arr) == 0 or len(close_arr) != len(volume_arr):
        return NAN

    result = 0.0
    for i in range(1, len(close_arr)):
        if close_arr[i] > close_arr[i - 1]:
            result += volume_arr[i]
        elif close_arr[i] < close_arr[i - 1]:
            result -= volume_arr[i]
    return float(result)


def vwap(
    highs: FloatSeries, lows: FloatSeries, closes: FloatSeries, volumes: FloatSeries
) -> float:
    """Volume Weighted Average Price over the whole series."""
    high_arr = _as_array(highs)
    low_arr = _as_array(lows)
    close_arr = _as_array(closes)
    volume_arr = _as_array(volumes)
    n = len(close_arr)
    if n == 0 or not (len(high_arr) == len(low_arr) == len(volume_arr) == n):
        return NAN

    typical_price = (high_arr + low_arr + close_arr) / 3.0
    total_volume = float(np.sum(volume_arr))
    if total_volume == 0.0:
        return NAN
    return float(np.sum(typical_price * volume_arr)) / total_volume
