"""
Candlestick Pattern Detection

Single-bar shapes of the last candle (doji family, hammer family, marubozu,
belt hold, ...) and multi-bar formations ending at the last candle
(engulfing, harami, stars, three soldiers/crows, three methods, ...).

Every detector looks only at the tail of the series, so the hits describe
the most recent price action. Several hits can fire for the same candle.
"""

import logging
from typing import Sequence

from chartsignals.schemas.market import CandlePoint
from chartsignals.schemas.patterns import CandleHit

logger = logging.getLogger(__name__)

# Fractions of the candle range (high - low)
DOJI_BODY_RATIO = 0.1
SHADOW_NONE = 0.05
SHADOW_SHORT = 0.1
SHADOW_LONG = 0.7
LONG_BODY_RATIO = 0.6
SHORT_BODY_RATIO = 0.25

# Two-bar tolerances
TWEEZER_TOLERANCE = 0.002
HARAMI_BODY_FACTOR = 2.0
KICKING_BODY_RATIO = 0.9
STAR_BODY_RATIO = 0.3


def _body(c: CandlePoint) -> float:
    return abs(c.close - c.open)


def _upper_wick(c: CandlePoint) -> float:
    return c.high - max(c.open, c.close)


def _lower_wick(c: CandlePoint) -> float:
    return min(c.open, c.close) - c.low


def _midpoint(c: CandlePoint) -> float:
    return (c.open + c.close) * 0.5


def _is_bull(c: CandlePoint) -> bool:
    return c.close > c.open


def _is_bear(c: CandlePoint) -> bool:
    return c.close < c.open


# =============================================================================
# SINGLE BAR
# =============================================================================


def detect_single_bar_patterns(series: Sequence[CandlePoint]) -> list[CandleHit]:
    """Shapes of the last candle. A zero-range candle gives no hits."""
    if not series:
        return []

    c = series[-1]
    last = len(series) - 1
    candle_range = c.high - c.low
    if candle_range <= 0.0:
        return []

    body = _body(c)
    upper = _upper_wick(c)
    lower = _lower_wick(c)
    body_ratio = body / candle_range
    bullish = _is_bull(c)
    bearish = _is_bear(c)
    hits = []

    def add(name: str, strength: float, rationale: str) -> None:
        hits.append(
            CandleHit(
                name=name,
                start_index=last,
                end_index=last,
                strength=strength,
                rationale=rationale,
            )
        )

    # Doji family
    if body_ratio < DOJI_BODY_RATIO:
        add("Doji", 0.8, "Small body relative to total range")
        if upper < SHADOW_SHORT * candle_range and lower > SHADOW_LONG * candle_range:
            add("Dragonfly Doji", 0.9, "Long lower shadow, open=close near high")
        elif lower < SHADOW_SHORT * candle_range and upper > SHADOW_LONG * candle_range:
            add("Gravestone Doji", 0.9, "Long upper shadow, open=close near low")
        elif upper > 0.4 * candle_range and lower > 0.4 * candle_range:
            add("Long-Legged Doji", 0.9, "Long upper and lower shadows, indecision")

    # Spinning top
    if (
        DOJI_BODY_RATIO < body_ratio < 0.4
        and upper > 0.25 * candle_range
        and lower > 0.25 * candle_range
    ):
        add("Spinning Top", 0.7, "Moderate body, long wicks both sides")

    # Marubozu
    if upper < SHADOW_NONE * candle_range and lower < SHADOW_NONE * candle_range:
        if bullish:
            add("Bullish Marubozu", 0.9, "Long body, no shadows (strong buying)")
        elif bearish:
            add("Bearish Marubozu", 0.9, "Long body, no shadows (strong selling)")

    # Hammer / hanging man
    if lower >= 2.0 * body and upper <= 0.25 * body:
        if bullish:
            add("Hammer", 0.9, "Long lower wick, small upper wick, bullish reversal")
        else:
            add("Hanging Man", 0.8, "Long lower wick after rally, possible bearish reversal")

    # Inverted hammer / shooting star
    if upper >= 2.0 * body and lower <= 0.25 * body:
        if bullish:
            add("Inverted Hammer", 0.85, "Long upper wick, small body, bullish reversal after downtrend")
        else:
            add("Shooting Star", 0.85, "Long upper wick after uptrend, bearish reversal")

    # Belt hold
    if (
        bullish
        and lower < SHADOW_NONE * candle_range
        and upper > 0.3 * candle_range
        and body_ratio > LONG_BODY_RATIO
    ):
        add("Bullish Belt Hold", 0.85, "No lower shadow, opens low, closes high")
    if (
        bearish
        and upper < SHADOW_NONE * candle_range
        and lower > 0.3 * candle_range
        and body_ratio > LONG_BODY_RATIO
    ):
        add("Bearish Belt Hold", 0.85, "No upper shadow, opens high, closes low")

    # High wave
    if upper > 0.4 * candle_range and lower > 0.4 * candle_range and body_ratio < 0.3:
        add("High Wave Candle", 0.7, "Long upper/lower shadows, small body, uncertainty")

    # Shaven head / bottom
    if upper < SHADOW_NONE * candle_range and lower > 0.2 * candle_range:
        add("Shaven Head", 0.75, "No upper shadow")
    if lower < SHADOW_NONE * candle_range and upper > 0.2 * candle_range:
        add("Shaven Bottom", 0.75, "No lower shadow")

    # Long / short day
    if body_ratio > LONG_BODY_RATIO:
        name = "Long Bullish Candle" if bullish else "Long Bearish Candle"
        add(name, 0.7, "Large real body, strong directional move")
    elif body_ratio < SHORT_BODY_RATIO:
        add("Short Candle", 0.6, "Small real body, low momentum")

    return hits


# =============================================================================
# MULTI BAR
# =============================================================================


def detect_multi_bar_patterns(series: Sequence[CandlePoint]) -> list[CandleHit]:
    """Two-, three- and five-bar formations ending at the last candle."""
    n = len(series)
    if n < 2:
        return []

    hits = []

    def add(name: str, start: int, strength: float, rationale: str) -> None:
        hits.append(
            CandleHit(
                name=name,
                start_index=start,
                end_index=n - 1,
                strength=strength,
                rationale=rationale,
            )
        )

    a, b = series[-2], series[-1]
    a_body, b_body = _body(a), _body(b)

    # Engulfing
    if _is_bear(a) and _is_bull(b) and b.open < a.close and b.close > a.open and b_body > a_body:
        add("Bullish Engulfing", n - 2, 0.9, "Green candle fully engulfs red body")
    if _is_bull(a) and _is_bear(b) and b.open > a.close and b.close < a.open and b_body > a_body:
        add("Bearish Engulfing", n - 2, 0.9, "Red candle fully engulfs green body")

    # Harami
    if (
        _is_bear(a)
        and _is_bull(b)
        and a_body > HARAMI_BODY_FACTOR * b_body
        and b.open > a.close
        and b.close < a.open
    ):
        add("Bullish Harami", n - 2, 0.8, "Small green inside large red body")
    if (
        _is_bull(a)
        and _is_bear(b)
        and a_body > HARAMI_BODY_FACTOR * b_body
        and b.open < a.close
        and b.close > a.open
    ):
        add("Bearish Harami", n - 2, 0.8, "Small red inside large green body")

    # Harami cross
    if a_body > HARAMI_BODY_FACTOR * b_body and b_body < DOJI_BODY_RATIO * (b.high - b.low):
        name = "Bullish Harami Cross" if _is_bear(a) else "Bearish Harami Cross"
        add(name, n - 2, 0.8, "Doji within previous body")

    # Tweezers
    if abs(a.high - b.high) < TWEEZER_TOLERANCE * a.high and _is_bull(a) and _is_bear(b):
        add("Tweezer Top", n - 2, 0.75, "Equal highs, potential reversal")
    if abs(a.low - b.low) < TWEEZER_TOLERANCE * a.low and _is_bear(a) and _is_bull(b):
        add("Tweezer Bottom", n - 2, 0.75, "Equal lows, potential reversal")

    # Piercing / dark cloud
    if _is_bear(a) and _is_bull(b) and b.open < a.low and _midpoint(a) < b.close < a.open:
        add("Piercing Pattern", n - 2, 0.85, "Gap down green closing > 50% into red")
    if _is_bull(a) and _is_bear(b) and b.open > a.high and a.open < b.close < _midpoint(a):
        add("Dark Cloud Cover", n - 2, 0.85, "Gap up red closing below midpoint")

    # Kicking
    if (
        a_body > KICKING_BODY_RATIO * (a.high - a.low)
        and b_body > KICKING_BODY_RATIO * (b.high - b.low)
    ):
        if _is_bear(a) and _is_bull(b) and b.open > a.high:
            add("Kicking (Bullish)", n - 2, 0.9, "Bullish marubozu gap up")
        elif _is_bull(a) and _is_bear(b) and b.open < a.low:
            add("Kicking (Bearish)", n - 2, 0.9, "Bearish marubozu gap down")

    if n >= 3:
        p1, p2, p3 = series[-3], series[-2], series[-1]

        if _is_bear(p1) and _body(p2) < STAR_BODY_RATIO * _body(p1) and _is_bull(p3) and p3.close > _midpoint(p1):
            add("Morning Star", n - 3, 0.9, "3-bar bullish reversal")
        if _is_bull(p1) and _body(p2) < STAR_BODY_RATIO * _body(p1) and _is_bear(p3) and p3.close < _midpoint(p1):
            add("Evening Star", n - 3, 0.9, "3-bar bearish reversal")

        if (
            _is_bull(p1) and _is_bull(p2) and _is_bull(p3)
            and p2.open > _midpoint(p1) and p3.open > _midpoint(p2)
        ):
            add("Three White Soldiers", n - 3, 0.95, "Strong bullish continuation")
        if (
            _is_bear(p1) and _is_bear(p2) and _is_bear(p3)
            and p2.open < _midpoint(p1) and p3.open < _midpoint(p2)
        ):
            add("Three Black Crows", n - 3, 0.95, "Strong bearish continuation")

    if n >= 5:
        c1, c2, c3, c4, c5 = series[-5:]
        if (
            _is_bull(c1) and _is_bull(c5)
            and _is_bear(c2) and _is_bear(c3) and _is_bear(c4)
            and c2.high < c1.high and c4.low > c1.low and c5.close > c1.close
        ):
            add("Rising Three Methods", n - 5, 0.9, "Bullish continuation pattern")
        if (
            _is_bear(c1) and _is_bear(c5)
            and _is_bull(c2) and _is_bull(c3) and _is_bull(c4)
            and c2.low > c1.low and c4.high < c1.high and c5.close < c1.close
        ):
            add("Falling Three Methods", n - 5, 0.9, "Bearish continuation pattern")

    # Inside / outside bar
    if b.high < a.high and b.low > a.low:
        add("Inside Bar", n - 2, 0.7, "Range inside previous bar")
    if b.high > a.high and b.low < a.low:
        add("Outside Bar", n - 2, 0.7, "Engulfing range, volatility expansion")

    return hits


def detect_candle_patterns(series: Sequence[CandlePoint]) -> list[CandleHit]:
    """Single-bar hits followed by multi-bar hits."""
    hits = detect_single_bar_patterns(series)
    hits.extend(detect_multi_bar_patterns(series))
    logger.debug(f"Candle patterns over {len(series)} candles: {len(hits)} hits")
    return hits
