"""
Chart Pattern Results
"""

from enum import Enum
from pydantic import BaseModel, Field


class PatternKind(str, Enum):
    DOUBLE_TOP = "DoubleTop"
    DOUBLE_BOTTOM = "DoubleBottom"
    HEAD_AND_SHOULDERS = "HeadAndShoulders"
    INVERSE_HEAD_AND_SHOULDERS = "InverseHeadAndShoulders"
    TREND = "Trend"


BULLISH_PATTERNS = frozenset(
    {PatternKind.DOUBLE_BOTTOM, PatternKind.INVERSE_HEAD_AND_SHOULDERS}
)
BEARISH_PATTERNS = frozenset(
    {PatternKind.DOUBLE_TOP, PatternKind.HEAD_AND_SHOULDERS}
)


class PatternHit(BaseModel):
    """One detected pattern over candle indices [start_index, end_index]."""

    name: PatternKind
    start_index: int = Field(..., ge=0)
    end_index: int = Field(..., ge=0)
    strength: float = Field(..., ge=0, le=1)
    rationale: str = ""


class CandleBias(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class CandleHit(BaseModel):
    """
    One candlestick pattern over the last one to five candles.

    Names are display names ("Bullish Engulfing", "Hammer", ...). The bias
    follows the name: "Bull" marks bullish, "Bear" bearish, anything else
    (Hammer, Doji, Inside Bar) is neutral for scoring.
    """

    name: str
    start_index: int = Field(..., ge=0)
    end_index: int = Field(..., ge=0)
    strength: float = Field(..., ge=0, le=1)
    rationale: str = ""

    @property
    def bias(self) -> CandleBias:
        if "Bull" in self.name:
            return CandleBias.BULLISH
        if "Bear" in self.name:
            return CandleBias.BEARISH
        return CandleBias.NEUTRAL
