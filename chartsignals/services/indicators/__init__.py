"""
Indicator Engine

PURE COMPUTATION:
    - Last-value indicators (SMA, EMA, RSI, ATR, MACD, Bollinger, OBV,
      Stochastic, CCI, ROC, MFI, VWAP, ADX placeholder)
    - Daily close aggregation
    - Full-series Wilder RSI
    - DMA / EMA series families

Uses NumPy for calculations. All math is deterministic and reproducible.
"""

from chartsignals.services.indicators.calculations import (
    sma,
    ema,
    rsi,
    macd,
    stochastic,
    cci,
    roc,
    mfi,
    adx,
    atr,
    bollinger_bands,
    obv,
    vwap,
)
from chartsignals.services.indicators.daily import (
    build_daily_closes,
    get_candle_closes,
    day_key,
)
from chartsignals.services.indicators.momentum import compute_rsi_series
from chartsignals.services.indicators.moving_average import (
    active_periods,
    compute_dma,
    compute_ema_series,
    compute_ma_family,
)

__all__ = [
    "sma",
    "ema",
    "rsi",
    "macd",
    "stochastic",
    "cci",
    "roc",
    "mfi",
    "adx",
    "atr",
    "bollinger_bands",
    "obv",
    "vwap",
    "build_daily_closes",
    "get_candle_closes",
    "day_key",
    "compute_rsi_series",
    "active_periods",
    "compute_dma",
    "compute_ema_series",
    "compute_ma_family",
]
