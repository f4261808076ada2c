"""
Chart Pattern Detection

Geometric patterns over a whole candle series: double top/bottom,
head-and-shoulders (and inverse), trend structure.

These detectors run their own coarse scans instead of using the clustered
pivots of the levels package. Thresholds and strengths are fixed constants
of the algorithms, not configuration.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from chartsignals.schemas.market import CandlePoint
from chartsignals.schemas.patterns import PatternHit, PatternKind

logger = logging.getLogger(__name__)

# Double top / bottom
DOUBLE_MIN_POINTS = 8
PEAK_TOLERANCE = 0.03  # peaks within 3% of the larger one
TOP_VALLEY_RATIO = 0.95  # valley at most 95% of the smaller peak
BOTTOM_MATCH_RATIO = 0.97  # smaller trough at least 97% of the larger one
BOTTOM_PEAK_RATIO = 1.03  # peak at least 103% of the larger trough
DOUBLE_STRENGTH = 0.85

# Head and shoulders
HS_MIN_POINTS = 9
HEAD_ABOVE_RATIO = 1.03
HEAD_BELOW_RATIO = 0.97
SHOULDER_TOLERANCE = 0.06
HS_MAX_STRENGTH = 0.9

# Trend structure
TREND_MIN_POINTS = 5
TREND_MIN_PIVOTS = 2
TREND_STRENGTH = 0.85
NO_TREND_STRENGTH = 0.4

PATTERN_DESCRIPTIONS = {
    PatternKind.DOUBLE_TOP: (
        "Two peaks at similar price levels. Suggests strong resistance and a "
        "potential bearish reversal."
    ),
    PatternKind.DOUBLE_BOTTOM: (
        "Two troughs at similar price levels. Indicates strong support and a "
        "potential bullish reversal."
    ),
    PatternKind.HEAD_AND_SHOULDERS: (
        "Three peaks with the middle one highest. Bearish reversal signal."
    ),
    PatternKind.INVERSE_HEAD_AND_SHOULDERS: (
        "Three troughs with the middle one lowest. Bullish reversal formation."
    ),
    PatternKind.TREND: (
        "Sequence of swing highs and lows. Higher highs with higher lows mark "
        "an uptrend, lower highs with lower lows a downtrend."
    ),
}

GENERIC_DESCRIPTION = (
    "Technical pattern detected. Potential reversal or continuation signal."
)


def describe_pattern(kind: PatternKind) -> str:
    """Static description of a pattern kind."""
    return PATTERN_DESCRIPTIONS.get(kind, GENERIC_DESCRIPTION)


def _highs_lows(series: Sequence[CandlePoint]) -> tuple[np.ndarray, np.ndarray]:
    highs = np.array([c.high for c in series], dtype=float)
    lows = np.array([c.low for c in series], dtype=float)
    return highs, lows


# =============================================================================
# DOUBLE TOP / BOTTOM
# =============================================================================


def detect_double_top_bottom(series: Sequence[CandlePoint]) -> list[PatternHit]:
    """
    Double top and double bottom.

    The series is split at its midpoint and only the single extreme of each
    half is compared; there is no multi-pivot search, so at most one top and
    one bottom can be reported.
    """
    n = len(series)
    if n < DOUBLE_MIN_POINTS:
        return []

    highs, lows = _highs_lows(series)
    mid = n // 2
    hits = []

    # Double top: highest high per half
    left = int(np.argmax(highs[:mid]))
    right = mid + int(np.argmax(highs[mid:]))
    larger = max(highs[left], highs[right])
    smaller = min(highs[left], highs[right])
    if right - left > 1 and larger - smaller <= PEAK_TOLERANCE * larger:
        valley = float(np.min(lows[left + 1:right]))
        if valley <= TOP_VALLEY_RATIO * smaller:
            hits.append(
                PatternHit(
                    name=PatternKind.DOUBLE_TOP,
                    start_index=left,
                    end_index=right,
                    strength=DOUBLE_STRENGTH,
                    rationale=(
                        f"DoubleTop peaks at {highs[left]:.4f} and {highs[right]:.4f}, "
                        f"neckline {valley:.4f}, measured move {smaller - valley:.4f}"
                    ),
                )
            )

    # Double bottom: lowest low per half
    left = int(np.argmin(lows[:mid]))
    right = mid + int(np.argmin(lows[mid:]))
    larger = max(lows[left], lows[right])
    smaller = min(lows[left], lows[right])
    if right - left > 1 and smaller >= BOTTOM_MATCH_RATIO * larger:
        peak = float(np.max(highs[left + 1:right]))
        if peak >= BOTTOM_PEAK_RATIO * larger:
            hits.append(
                PatternHit(
                    name=PatternKind.DOUBLE_BOTTOM,
                    start_index=left,
                    end_index=right,
                    strength=DOUBLE_STRENGTH,
                    rationale=(
                        f"DoubleBottom lows at {lows[left]:.4f} and {lows[right]:.4f}, "
                        f"neckline {peak:.4f}, measured move {peak - larger:.4f}"
                    ),
                )
            )

    return hits


# =============================================================================
# HEAD AND SHOULDERS
# =============================================================================


def _shoulder_diff(left: float, right: float) -> Optional[float]:
    smaller = min(left, right)
    if smaller <= 0:
        return None
    return abs(left - right) / smaller


def detect_head_and_shoulders(series: Sequence[CandlePoint]) -> list[PatternHit]:
    """
    Head-and-shoulders on highs and inverse head-and-shoulders on lows.

    A 3-point window slides over the series; every qualifying window is
    reported on its own, overlapping hits are not merged.
    """
    n = len(series)
    if n < HS_MIN_POINTS:
        return []

    highs, lows = _highs_lows(series)
    hits = []

    for i in range(1, n - 1):
        ls, head, rs = highs[i - 1], highs[i], highs[i + 1]
        diff = _shoulder_diff(ls, rs)
        if (
            diff is not None
            and head > ls * HEAD_ABOVE_RATIO
            and head > rs * HEAD_ABOVE_RATIO
            and diff <= SHOULDER_TOLERANCE
        ):
            hits.append(
                PatternHit(
                    name=PatternKind.HEAD_AND_SHOULDERS,
                    start_index=i - 1,
                    end_index=i + 1,
                    strength=HS_MAX_STRENGTH * (1.0 - diff),
                    rationale=(
                        f"H&S LS={ls:.4f} Head={head:.4f} RS={rs:.4f}, "
                        f"shoulder difference {diff * 100:.2f}%"
                    ),
                )
            )

    for i in range(1, n - 1):
        ls, head, rs = lows[i - 1], lows[i], lows[i + 1]
        diff = _shoulder_diff(ls, rs)
        if (
            diff is not None
            and head < ls * HEAD_BELOW_RATIO
            and head < rs * HEAD_BELOW_RATIO
            and diff <= SHOULDER_TOLERANCE
        ):
            hits.append(
                PatternHit(
                    name=PatternKind.INVERSE_HEAD_AND_SHOULDERS,
                    start_index=i - 1,
                    end_index=i + 1,
                    strength=HS_MAX_STRENGTH * (1.0 - diff),
                    rationale=(
                        f"Inverse H&S lows {ls:.4f},{head:.4f},{rs:.4f}, "
                        f"shoulder difference {diff * 100:.2f}%"
                    ),
                )
            )

    return hits


# =============================================================================
# TREND STRUCTURE
# =============================================================================


def detect_trend_structure(series: Sequence[CandlePoint]) -> Optional[PatternHit]:
    """
    Classify trend from one-bar swing points.

    Each local maximum of highs is compared with the previous one (higher
    high / lower high), each local minimum of lows with the previous one
    (higher low / lower low). Returns None for fewer than 5 candles.
    """
    n = len(series)
    if n < TREND_MIN_POINTS:
        return None

    highs, lows = _highs_lows(series)
    higher_highs = higher_lows = lower_highs = lower_lows = 0
    last_peak: Optional[float] = None
    last_trough: Optional[float] = None

    for i in range(1, n - 1):
        if highs[i] > highs[i - 1] and highs[i] > highs[i + 1]:
            if last_peak is not None:
                if highs[i] > last_peak:
                    higher_highs += 1
                elif highs[i] < last_peak:
                    lower_highs += 1
            last_peak = highs[i]

        if lows[i] < lows[i - 1] and lows[i] < lows[i + 1]:
            if last_trough is not None:
                if lows[i] > last_trough:
                    higher_lows += 1
                elif lows[i] < last_trough:
                    lower_lows += 1
            last_trough = lows[i]

    counts = (
        f"HH={higher_highs} HL={higher_lows} LH={lower_highs} LL={lower_lows}"
    )
    if higher_highs >= TREND_MIN_PIVOTS and higher_lows >= TREND_MIN_PIVOTS:
        strength = TREND_STRENGTH
        rationale = f"uptrend: higher highs and higher lows ({counts})"
    elif lower_highs >= TREND_MIN_PIVOTS and lower_lows >= TREND_MIN_PIVOTS:
        strength = TREND_STRENGTH
        rationale = f"downtrend: lower highs and lower lows ({counts})"
    else:
        strength = NO_TREND_STRENGTH
        rationale = f"no clear trend ({counts})"

    return PatternHit(
        name=PatternKind.TREND,
        start_index=0,
        end_index=n - 1,
        strength=strength,
        rationale=rationale,
    )


def detect_all_chart_patterns(series: Sequence[CandlePoint]) -> list[PatternHit]:
    """Double top/bottom, head-and-shoulders hits, then the trend hit."""
    hits = detect_double_top_bottom(series)
    hits.extend(detect_head_and_shoulders(series))

    trend = detect_trend_structure(series)
    if trend is not None:
        hits.append(trend)

    logger.debug(f"Chart patterns over {len(series)} candles: {len(hits)} hits")
    return hits
