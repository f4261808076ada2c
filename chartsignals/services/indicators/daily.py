"""
Daily Aggregator

Reduces intraday or mixed-granularity candles to one close per UTC day.
"""

import logging
from datetime import datetime, timezone

from chartsignals.schemas.market import InstrumentSnapshot

logger = logging.getLogger(__name__)


def day_key(timestamp: int) -> int:
    """UTC calendar day of an epoch-seconds timestamp as YYYYMMDD."""
    t = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return t.year * 10000 + t.month * 100 + t.day


def build_daily_closes(snapshot: InstrumentSnapshot) -> list[float]:
    """
    One close per calendar day, ordered by ascending day.

    Candles are visited oldest first, so the close kept for each day is the
    chronologically last one of that day.
    """
    if not snapshot.is_valid:
        logger.debug(f"build_daily_closes: invalid snapshot {snapshot.symbol!r}")
        return []

    daily: dict[int, float] = {}
    for candle in snapshot.series:
        daily[day_key(candle.timestamp)] = candle.close

    return [daily[key] for key in sorted(daily)]


def get_candle_closes(snapshot: InstrumentSnapshot) -> list[float]:
    """One close per candle, no aggregation."""
    if not snapshot.is_valid:
        logger.debug(f"get_candle_closes: invalid snapshot {snapshot.symbol!r}")
        return []

    return [candle.close for candle in snapshot.series]
