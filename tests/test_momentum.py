"""
Unit Tests for the full-series Wilder RSI
"""

import math

import pytest

from chartsignals.services.indicators.momentum import compute_rsi_series


class TestRSISeries:
    """Test compute_rsi_series"""

    def test_aligned_with_candles(self, rising_snapshot):
        result = compute_rsi_series(rising_snapshot, 14)
        assert len(result.series) == len(rising_snapshot.series)

    def test_leading_values_are_nan(self, rising_snapshot):
        result = compute_rsi_series(rising_snapshot, 14)
        assert all(math.isnan(v) for v in result.series[:14])
        assert not math.isnan(result.series[14])

    def test_rising_series(self, rising_snapshot):
        result = compute_rsi_series(rising_snapshot, 14)
        assert all(v == 100.0 for v in result.series[14:])
        assert result.last == 100.0

    def test_falling_series(self, falling_snapshot):
        result = compute_rsi_series(falling_snapshot, 14)
        assert all(v == 0.0 for v in result.series[14:])

    def test_values_bounded(self, make_snapshot):
        closes = [100.0 + math.sin(i / 2.0) * 10 for i in range(80)]
        result = compute_rsi_series(make_snapshot(closes), 14)
        assert all(0.0 <= v <= 100.0 for v in result.series[14:])

    def test_too_few_candles(self, make_snapshot):
        result = compute_rsi_series(make_snapshot([1.0 + i for i in range(14)]), 14)
        assert len(result.series) == 14
        assert all(math.isnan(v) for v in result.series)
        assert math.isnan(result.last)

    def test_invalid_snapshot(self, make_snapshot):
        result = compute_rsi_series(make_snapshot([1.0 + i for i in range(30)], symbol=""), 14)
        assert len(result.series) == 30
        assert all(math.isnan(v) for v in result.series)

    def test_seed_and_wilder_step(self, make_snapshot):
        # changes +1, -0.5, +1, +0.5
        result = compute_rsi_series(make_snapshot([10.0, 11.0, 10.5, 11.5, 12.0]), 3)
        # seed: avg gain 2/3, avg loss 1/6 -> RS 4
        assert result.series[3] == pytest.approx(80.0)
        # Wilder: avg gain 11/18, avg loss 2/18 -> RS 5.5
        assert result.series[4] == pytest.approx(100.0 - 100.0 / 6.5)
        assert result.last == result.series[4]
