"""
Performance Report
"""

from typing import Optional
from pydantic import BaseModel


class PerformanceReport(BaseModel):
    """
    Daily move of an instrument and its performance relative to its sector.

    Change fields stay None when the previous close is unavailable.
    """

    symbol: str = ""
    daily_change_percent: Optional[float] = None
    relative_to_sector: Optional[float] = None
    explanation: str = ""

    @property
    def available(self) -> bool:
        return self.daily_change_percent is not None
