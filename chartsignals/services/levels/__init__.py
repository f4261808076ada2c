"""
Support / Resistance Levels

Pivot (swing point) detection and clustering of pivots into price levels.
"""

from chartsignals.services.levels.pivots import (
    SwingPoint,
    is_swing_high,
    is_swing_low,
    find_swing_points,
)
from chartsignals.services.levels.clustering import (
    adaptive_cluster_tolerance,
    cluster_swing_points,
    compute_support_resistance,
    level_score,
    rank_levels,
    nearest_levels,
)

__all__ = [
    "SwingPoint",
    "is_swing_high",
    "is_swing_low",
    "find_swing_points",
    "adaptive_cluster_tolerance",
    "cluster_swing_points",
    "compute_support_resistance",
    "level_score",
    "rank_levels",
    "nearest_levels",
]
