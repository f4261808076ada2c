"""
Unit Tests for daily close aggregation
"""

from chartsignals.schemas.market import CandlePoint, InstrumentSnapshot
from chartsignals.services.indicators.daily import (
    build_daily_closes,
    day_key,
    get_candle_closes,
)

# 2024-01-02 00:00:00 UTC
D = 1704153600
HOUR = 3600


def _candle(ts: int, close: float) -> CandlePoint:
    return CandlePoint(open=close, high=close, low=close, close=close, volume=10, timestamp=ts)


def _intraday_snapshot() -> InstrumentSnapshot:
    return InstrumentSnapshot(
        symbol="INFY",
        requested_range="5d",
        requested_interval="60m",
        series=(
            _candle(D + 1 * HOUR, 10.0),
            _candle(D + 2 * HOUR, 12.0),
            _candle(D + 3 * HOUR, 15.0),
            _candle(D + 24 * HOUR + 1 * HOUR, 20.0),
            _candle(D + 24 * HOUR + 2 * HOUR, 18.0),
        ),
    )


def test_day_key():
    assert day_key(D) == 20240102
    assert day_key(D + 24 * HOUR - 1) == 20240102
    assert day_key(D + 24 * HOUR) == 20240103


def test_last_close_per_day():
    assert build_daily_closes(_intraday_snapshot()) == [15.0, 18.0]


def test_candle_closes_are_not_aggregated():
    assert get_candle_closes(_intraday_snapshot()) == [10.0, 12.0, 15.0, 20.0, 18.0]


def test_invalid_snapshot_gives_empty():
    empty = InstrumentSnapshot(symbol="INFY")
    no_symbol = InstrumentSnapshot(series=(_candle(D, 1.0),))
    assert build_daily_closes(empty) == []
    assert build_daily_closes(no_symbol) == []
    assert get_candle_closes(empty) == []
