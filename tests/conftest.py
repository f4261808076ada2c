"""
Pytest configuration file
Common candle and snapshot fixtures for all tests
"""

from typing import Optional, Sequence

import pytest

from chartsignals.schemas.market import CandlePoint, InstrumentSnapshot

# 2024-01-02 00:00:00 UTC
BASE_TS = 1704153600
DAY = 86400


def build_snapshot(
    closes: Sequence[float],
    highs: Optional[Sequence[float]] = None,
    lows: Optional[Sequence[float]] = None,
    volumes: Optional[Sequence[int]] = None,
    symbol: str = "TEST",
    requested_range: str = "1y",
    requested_interval: str = "1d",
    start_ts: int = BASE_TS,
    step: int = DAY,
    **quote,
) -> InstrumentSnapshot:
    """Snapshot with one candle per close; highs/lows default to close +/- 1."""
    highs = highs if highs is not None else [c + 1.0 for c in closes]
    lows = lows if lows is not None else [c - 1.0 for c in closes]
    volumes = volumes if volumes is not None else [1000] * len(closes)

    series = tuple(
        CandlePoint(
            open=c,
            high=h,
            low=lo,
            close=c,
            volume=v,
            timestamp=start_ts + i * step,
        )
        for i, (c, h, lo, v) in enumerate(zip(closes, highs, lows, volumes))
    )
    return InstrumentSnapshot(
        symbol=symbol,
        requested_range=requested_range,
        requested_interval=requested_interval,
        series=series,
        **quote,
    )


@pytest.fixture
def make_snapshot():
    """Provide the snapshot builder"""
    return build_snapshot


@pytest.fixture
def rising_snapshot():
    """60 daily candles climbing one point per day"""
    return build_snapshot([100.0 + i for i in range(60)], symbol="UP")


@pytest.fixture
def falling_snapshot():
    """60 daily candles dropping one point per day"""
    return build_snapshot([200.0 - i for i in range(60)], symbol="DOWN")


def pytest_configure(config):
    """Configure pytest settings"""
    config.addinivalue_line(
        "markers", "concurrency: mark test as exercising multiple threads"
    )
