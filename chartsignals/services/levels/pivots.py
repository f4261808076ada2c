"""
Pivot Detector

Swing highs and lows relative to a symmetric neighbour window.
"""

from typing import NamedTuple, Optional, Sequence


class SwingPoint(NamedTuple):
    index: int
    price: float
    is_high: bool


def is_swing_high(highs: Sequence[float], i: int, left: int, right: Optional[int] = None) -> bool:
    """high[i] strictly above every high in [i-left, i-1] and [i+1, i+right]."""
    if right is None:
        right = left
    if i - left < 0 or i + right >= len(highs):
        return False

    for j in range(1, left + 1):
        if highs[i] <= highs[i - j]:
            return False
    for j in range(1, right + 1):
        if highs[i] <= highs[i + j]:
            return False
    return True


def is_swing_low(lows: Sequence[float], i: int, left: int, right: Optional[int] = None) -> bool:
    """low[i] strictly below every low in [i-left, i-1] and [i+1, i+right]."""
    if right is None:
        right = left
    if i - left < 0 or i + right >= len(lows):
        return False

    for j in range(1, left + 1):
        if lows[i] >= lows[i - j]:
            return False
    for j in range(1, right + 1):
        if lows[i] >= lows[i + j]:
            return False
    return True


def find_swing_points(
    highs: Sequence[float], lows: Sequence[float], pivot_range: int = 3
) -> list[SwingPoint]:
    """
    Swing points in scan order.

    i runs from pivot_range to len - pivot_range - 1; at a bar that is both a
    swing high and a swing low the high comes first. Too few bars (fewer than
    2 * pivot_range + 1) or a non-positive range gives no points.
    """
    size = min(len(highs), len(lows))
    if pivot_range <= 0 or size < 2 * pivot_range + 1:
        return []

    points = []
    for i in range(pivot_range, size - pivot_range):
        if is_swing_high(highs, i, pivot_range):
            points.append(SwingPoint(i, float(highs[i]), True))
        if is_swing_low(lows, i, pivot_range):
            points.append(SwingPoint(i, float(lows[i]), False))
    return points
