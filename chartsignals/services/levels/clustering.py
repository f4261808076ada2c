"""
Support / Resistance Clusterer

Merges swing points into price levels. Swing highs feed resistances, swing
lows feed supports.
"""

import logging
from typing import Iterable, Optional

from chartsignals.schemas.levels import NearestLevels, PivotCluster, SupportResistanceLevels
from chartsignals.schemas.market import InstrumentSnapshot
from chartsignals.services.levels.pivots import SwingPoint, find_swing_points

logger = logging.getLogger(__name__)

ADAPTIVE_TOLERANCE_FRACTION = 0.005


def adaptive_cluster_tolerance(
    snapshot: InstrumentSnapshot, fraction: float = ADAPTIVE_TOLERANCE_FRACTION
) -> float:
    """Tolerance as a fraction (default 0.5%) of the last close."""
    if not snapshot.series:
        return 0.0
    return abs(snapshot.series[-1].close) * fraction


def _merge(clusters: list[PivotCluster], price: float, index: int, tolerance: float) -> None:
    # First cluster within tolerance wins, even if a later one is closer
    for cluster in clusters:
        if abs(cluster.price - price) <= tolerance:
            count = cluster.touch_count
            cluster.price = (cluster.price * count + price) / (count + 1)
            cluster.touch_count = count + 1
            cluster.last_touch_index = index
            return
    clusters.append(PivotCluster(price=price, touch_count=1, last_touch_index=index))


def cluster_swing_points(
    points: Iterable[SwingPoint], cluster_tolerance: float
) -> SupportResistanceLevels:
    """Fold swing points into running-mean clusters, in detection order."""
    resistances: list[PivotCluster] = []
    supports: list[PivotCluster] = []

    for point in points:
        target = resistances if point.is_high else supports
        _merge(target, point.price, point.index, cluster_tolerance)

    return SupportResistanceLevels(resistances=resistances, supports=supports)


def compute_support_resistance(
    snapshot: InstrumentSnapshot,
    pivot_range: int = 3,
    cluster_tolerance: Optional[float] = 0.30,
) -> SupportResistanceLevels:
    """
    Detect swing points over the snapshot and cluster them.

    cluster_tolerance is an absolute price distance; None uses 0.5% of the
    last close.
    """
    if not snapshot.is_valid:
        logger.debug(f"Support/resistance: invalid snapshot {snapshot.symbol!r}")
        return SupportResistanceLevels()

    if cluster_tolerance is None:
        cluster_tolerance = adaptive_cluster_tolerance(snapshot)

    highs = [c.high for c in snapshot.series]
    lows = [c.low for c in snapshot.series]
    points = find_swing_points(highs, lows, pivot_range)

    return cluster_swing_points(points, cluster_tolerance)


def level_score(cluster: PivotCluster, total_bars: int) -> float:
    """touch_count * 2 plus a recency weight in [0, 1)."""
    recency = cluster.last_touch_index / total_bars if total_bars > 0 else 0.0
    return cluster.touch_count * 2.0 + recency


def rank_levels(
    levels: SupportResistanceLevels, total_bars: int, max_levels: int = 4
) -> SupportResistanceLevels:
    """Strongest clusters first, truncated to max_levels per side."""

    def _rank(clusters: list[PivotCluster]) -> list[PivotCluster]:
        ranked = sorted(clusters, key=lambda c: level_score(c, total_bars), reverse=True)
        return [c.model_copy() for c in ranked[: max(0, max_levels)]]

    return SupportResistanceLevels(
        resistances=_rank(levels.resistances),
        supports=_rank(levels.supports),
    )


def nearest_levels(levels: SupportResistanceLevels, price: float) -> NearestLevels:
    """Closest support at or below price and closest resistance at or above it."""
    below = [c.price for c in levels.supports if c.price <= price]
    above = [c.price for c in levels.resistances if c.price >= price]

    return NearestLevels(
        price=price,
        support=max(below) if below else None,
        resistance=min(above) if above else None,
    )
