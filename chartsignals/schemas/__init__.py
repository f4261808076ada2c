"""
chartsignals Schema Contracts

Value objects exchanged between the data provider, the engine and the
consumers of its results.
"""

from chartsignals.schemas.market import (
    CandlePoint,
    InstrumentSnapshot,
    OHLCVArrays,
    to_arrays,
    is_intraday_interval,
)
from chartsignals.schemas.indicators import (
    RSISeries,
    MAResult,
    MACDResult,
    BollingerBands,
    StochasticResult,
    IndicatorValues,
)
from chartsignals.schemas.levels import (
    PivotCluster,
    SupportResistanceLevels,
    NearestLevels,
)
from chartsignals.schemas.patterns import PatternKind, PatternHit, CandleBias, CandleHit
from chartsignals.schemas.performance import PerformanceReport
from chartsignals.schemas.analysis import AnalysisReport, Recommendation

__all__ = [
    # Market
    "CandlePoint",
    "InstrumentSnapshot",
    "OHLCVArrays",
    "to_arrays",
    "is_intraday_interval",
    # Indicators
    "RSISeries",
    "MAResult",
    "MACDResult",
    "BollingerBands",
    "StochasticResult",
    "IndicatorValues",
    # Levels
    "PivotCluster",
    "SupportResistanceLevels",
    "NearestLevels",
    # Patterns
    "CandleBias",
    "CandleHit",
    "PatternKind",
    "PatternHit",
    # Performance
    "PerformanceReport",
    # Analysis
    "AnalysisReport",
    "Recommendation",
]
