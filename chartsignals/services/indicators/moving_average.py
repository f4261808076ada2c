"""
Moving Average Series

DMA (simple) and EMA series for a ladder of periods chosen by the requested
chart range.
"""

import logging
from typing import Optional, Sequence

from chartsignals.core.config import get_settings
from chartsignals.schemas.indicators import MAResult
from chartsignals.schemas.market import InstrumentSnapshot
from chartsignals.services.indicators.daily import build_daily_closes, get_candle_closes

logger = logging.getLogger(__name__)

MIN_MA_VALUES = 5

RANGE_PERIODS = {
    "1mo": [5, 10, 20],
    "3mo": [5, 10, 20, 30, 50],
}


def active_periods(requested_range: str, full_ladder: Optional[Sequence[int]] = None) -> list[int]:
    """Periods computed for a chart range; anything but 1mo/3mo gets the full ladder."""
    if requested_range in RANGE_PERIODS:
        return list(RANGE_PERIODS[requested_range])
    if full_ladder is None:
        full_ladder = get_settings().ma_full_ladder
    return list(full_ladder)


def compute_dma(closes: Sequence[float], period: int) -> list[float]:
    """
    Simple moving average by running sum.

    Entries before the window fills stay 0.0. A source shorter than the
    period yields all zeros.
    """
    dma = [0.0] * len(closes)
    if period <= 0 or len(closes) < period:
        return dma

    total = 0.0
    for i, value in enumerate(closes):
        total += value
        if i >= period:
            total -= closes[i - period]
        if i >= period - 1:
            dma[i] = total / period
    return dma


def compute_ema_series(closes: Sequence[float], period: int) -> list[float]:
    """EMA seeded with the first close, multiplier 2 / (period + 1)."""
    ema = [0.0] * len(closes)
    if not closes or period <= 0:
        return ema

    multiplier = 2.0 / (period + 1.0)
    ema[0] = closes[0]
    for i in range(1, len(closes)):
        ema[i] = (closes[i] - ema[i - 1]) * multiplier + ema[i - 1]
    return ema


def compute_ma_family(
    snapshot: InstrumentSnapshot,
    use_daily_closes: bool = False,
    full_ladder: Optional[Sequence[int]] = None,
) -> MAResult:
    """
    DMA and EMA series for every active period.

    use_daily_closes selects daily-aggregated closes over raw candle closes;
    the choice belongs to the caller. Fewer than 5 source values gives an
    empty result.
    """
    if use_daily_closes:
        closes = build_daily_closes(snapshot)
    else:
        closes = get_candle_closes(snapshot)

    if len(closes) < MIN_MA_VALUES:
        logger.debug(
            f"MA family for {snapshot.symbol!r}: {len(closes)} closes, need {MIN_MA_VALUES}"
        )
        return MAResult()

    result = MAResult()
    for period in active_periods(snapshot.requested_range, full_ladder):
        result.dma[period] = compute_dma(closes, period)
        result.ema[period] = compute_ema_series(closes, period)
    return result
