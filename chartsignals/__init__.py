"""
chartsignals

Technical-analysis engine over OHLCV candle history: indicators, moving
average ladders, support/resistance levels, chart patterns and a composite
recommendation.
"""

__version__ = "0.1.0"
