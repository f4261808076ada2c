"""
Support / Resistance Results
"""

from typing import Optional
from pydantic import BaseModel, Field


class PivotCluster(BaseModel):
    """
    A price level built from merged swing points.

    price is a running weighted mean of the merged pivot prices, not a
    recomputed centroid.
    """

    price: float
    touch_count: int = Field(default=1, ge=1)
    last_touch_index: int = Field(default=0, ge=0)


class SupportResistanceLevels(BaseModel):
    """Clusters in detection order (or strength order after ranking)."""

    resistances: list[PivotCluster] = Field(default_factory=list)
    supports: list[PivotCluster] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.resistances and not self.supports


class NearestLevels(BaseModel):
    """Closest support below and resistance above a reference price."""

    price: float
    support: Optional[float] = None
    resistance: Optional[float] = None
