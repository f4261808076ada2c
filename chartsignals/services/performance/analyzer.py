"""
Performance Analyzer

Daily percentage move of an instrument and how it compares with its sector.
"""

import logging

from chartsignals.schemas.market import InstrumentSnapshot
from chartsignals.schemas.performance import PerformanceReport

logger = logging.getLogger(__name__)

UNAVAILABLE_EXPLANATION = (
    "Previous close not available, cannot compute daily performance."
)


def analyze_performance(
    snapshot: InstrumentSnapshot, sector_change_percent: float = 0.0
) -> PerformanceReport:
    """
    Daily change versus the previous close, relative to the sector's change.

    Without a positive previous close (or a current price) the change fields
    stay None and the explanation says the data is unavailable.
    """
    prev_close = snapshot.previous_close
    price = snapshot.latest_price

    if prev_close is None or prev_close <= 0 or price is None:
        logger.debug(f"Performance for {snapshot.symbol!r}: previous close unavailable")
        return PerformanceReport(symbol=snapshot.symbol, explanation=UNAVAILABLE_EXPLANATION)

    daily_change = (price - prev_close) / prev_close * 100.0
    relative = daily_change - sector_change_percent

    explanation = f"Stock {snapshot.symbol} moved {daily_change:.2f}% today. "
    if relative > 0:
        explanation += f"It outperformed the sector by {relative:.2f}%."
    elif relative < 0:
        explanation += f"It underperformed the sector by {abs(relative):.2f}%."
    else:
        explanation += "It performed in line with the sector."

    return PerformanceReport(
        symbol=snapshot.symbol,
        daily_change_percent=daily_change,
        relative_to_sector=relative,
        explanation=explanation,
    )
