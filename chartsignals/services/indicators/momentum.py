"""
Momentum Series

Full-series RSI with Wilder smoothing, aligned index-for-index with the
candle history (the smoothing method used by most brokers and charting
platforms).
"""

import logging
import math

from chartsignals.schemas.indicators import RSISeries
from chartsignals.schemas.market import InstrumentSnapshot

logger = logging.getLogger(__name__)


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0.0:
        return 100.0
    if avg_gain == 0.0:
        return 0.0
    return 100.0 - (100.0 / (1.0 + avg_gain / avg_loss))


def compute_rsi_series(snapshot: InstrumentSnapshot, period: int = 14) -> RSISeries:
    """
    RSI for every candle of the snapshot.

    series[i] corresponds to snapshot.series[i]. Indices 0..period-1 are NaN;
    the first value lands at index `period`, seeded with the plain average
    gain/loss of the first `period` changes.
    """
    history = snapshot.series
    n = len(history)

    if not snapshot.is_valid or n < 2:
        logger.debug("RSI series: invalid snapshot or fewer than 2 candles")
        return RSISeries(series=[math.nan] * n, last=math.nan)

    series = [math.nan] * n
    if period <= 0 or n <= period:
        logger.debug(f"RSI series: {n} candles, need more than {period}")
        return RSISeries(series=series, last=math.nan)

    gain_sum = 0.0
    loss_sum = 0.0
    for i in range(1, period + 1):
        diff = history[i].close - history[i - 1].close
        if diff > 0:
            gain_sum += diff
        else:
            loss_sum += -diff

    avg_gain = gain_sum / period
    avg_loss = loss_sum / period

    # Seed value uses only the avg_loss == 0 branch
    if avg_loss == 0.0:
        series[period] = 100.0
    else:
        series[period] = 100.0 - (100.0 / (1.0 + avg_gain / avg_loss))

    for i in range(period + 1, n):
        diff = history[i].close - history[i - 1].close
        gain = diff if diff > 0 else 0.0
        loss = -diff if diff < 0 else 0.0

        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period
        series[i] = _rsi_value(avg_gain, avg_loss)

    return RSISeries(series=series, last=series[-1])
