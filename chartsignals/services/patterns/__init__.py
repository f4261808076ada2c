"""
Pattern Detection

Chart patterns (double top/bottom, head-and-shoulders, trend structure) over
a whole candle series, and candlestick patterns at its tail.
"""

from chartsignals.services.patterns.chart_patterns import (
    detect_double_top_bottom,
    detect_head_and_shoulders,
    detect_trend_structure,
    detect_all_chart_patterns,
    describe_pattern,
)
from chartsignals.services.patterns.candles import (
    detect_single_bar_patterns,
    detect_multi_bar_patterns,
    detect_candle_patterns,
)

__all__ = [
    "detect_double_top_bottom",
    "detect_head_and_shoulders",
    "detect_trend_structure",
    "detect_all_chart_patterns",
    "describe_pattern",
    "detect_single_bar_patterns",
    "detect_multi_bar_patterns",
    "detect_candle_patterns",
]
