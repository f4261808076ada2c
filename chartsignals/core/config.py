"""
Engine Configuration

Defaults for indicator periods, pivot detection and logging.
All settings can be overridden from environment variables (CHARTSIGNALS_*).
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHARTSIGNALS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "chartsignals"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Momentum / trend
    rsi_period: int = 14
    sma_short: int = 9
    sma_long: int = 21
    atr_period: int = 14
    roc_period: int = 12

    # MACD
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    # Volatility
    bollinger_period: int = 20
    bollinger_k: float = 2.0

    # Stochastic
    stochastic_k: int = 14
    stochastic_d: int = 3

    # Support / resistance
    pivot_range: int = 3
    cluster_tolerance: Optional[float] = 0.30  # None = 0.5% of last close
    max_levels: int = 4

    # Moving average ladder used for ranges other than 1mo / 3mo
    ma_full_ladder: list[int] = [5, 10, 20, 30, 50, 100, 150, 200]

    # Aggregate intraday candles to one close per day before MA computation
    use_daily_closes_for_intraday: bool = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
