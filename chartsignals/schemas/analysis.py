"""
Composite Analysis Report

Output of the analysis service: every indicator, level and pattern for one
snapshot, combined into a bounded score and a recommendation.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from chartsignals.schemas.indicators import IndicatorValues, MAResult, RSISeries
from chartsignals.schemas.levels import NearestLevels, SupportResistanceLevels
from chartsignals.schemas.patterns import CandleHit, PatternHit
from chartsignals.schemas.performance import PerformanceReport


class Recommendation(str, Enum):
    STRONG_BUY = "StrongBuy"
    BUY = "Buy"
    HOLD = "Hold"
    SELL = "Sell"
    STRONG_SELL = "StrongSell"
    UNKNOWN = "Unknown"


class AnalysisReport(BaseModel):
    """Complete technical analysis for one instrument snapshot."""

    symbol: str = ""
    generated_at: datetime = Field(default_factory=datetime.now)
    candle_count: int = 0

    indicators: IndicatorValues = Field(default_factory=IndicatorValues)
    rsi_series: RSISeries = Field(default_factory=RSISeries)
    moving_averages: MAResult = Field(default_factory=MAResult)
    levels: SupportResistanceLevels = Field(default_factory=SupportResistanceLevels)
    nearest_levels: Optional[NearestLevels] = None
    candle_patterns: list[CandleHit] = Field(default_factory=list)
    chart_patterns: list[PatternHit] = Field(default_factory=list)
    trend: Optional[PatternHit] = None
    performance: Optional[PerformanceReport] = None

    score: float = Field(default=0.0, ge=-1, le=1)
    recommendation: Recommendation = Recommendation.UNKNOWN
    explanation: str = ""

    @property
    def is_bullish(self) -> bool:
        return self.recommendation in (Recommendation.BUY, Recommendation.STRONG_BUY)

    @property
    def is_bearish(self) -> bool:
        return self.recommendation in (Recommendation.SELL, Recommendation.STRONG_SELL)
