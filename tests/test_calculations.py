"""
Unit Tests for the last-value indicator library
"""

import math

import numpy as np
import pytest

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


class TestMovingAverages:
    """Test sma and ema"""

    def test_sma_last_window(self):
        assert sma([1, 2, 3, 4, 5], 3) == pytest.approx(4.0)

    def test_sma_insufficient_data(self):
        assert math.isnan(sma([1, 2], 3))
        assert math.isnan(sma([1, 2, 3], 0))

    def test_ema_constant_series(self):
        assert ema([5.0] * 30, 10) == pytest.approx(5.0)

    def test_ema_period_one_is_last_value(self):
        assert ema([3.0, 7.0, 2.0, 9.0], 1) == pytest.approx(9.0)

    def test_ema_seeded_with_trailing_sma(self):
        # seed = mean(4, 5, 6) = 5.0, then 5 -> 5.0 and 6 -> 5.5
        assert ema([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], 3) == pytest.approx(5.5)

    def test_ema_degraded_seed(self):
        # Fewer values than the period: seed with the first value
        assert ema([1.0, 2.0], 5) == pytest.approx(1.0 + 1.0 / 3.0)

    def test_ema_empty(self):
        assert math.isnan(ema([], 5))

    def test_accepts_numpy_arrays(self):
        assert sma(np.arange(1.0, 6.0), 5) == pytest.approx(3.0)


class TestRSI:
    """Test rsi"""

    def test_monotonic_rise(self):
        assert rsi([float(i) for i in range(1, 21)]) == pytest.approx(100.0)

    def test_monotonic_fall(self):
        assert rsi([float(i) for i in range(20, 0, -1)]) == pytest.approx(0.0)

    def test_flat_series(self):
        assert rsi([10.0] * 20) == pytest.approx(50.0)

    def test_needs_period_plus_one(self):
        assert math.isnan(rsi([float(i) for i in range(14)], 14))
        assert not math.isnan(rsi([float(i) for i in range(15)], 14))


class TestMACD:
    """Test macd"""

    def test_short_series(self):
        result = macd([float(i) for i in range(20)])
        assert math.isnan(result.macd)
        assert math.isnan(result.signal)

    def test_constant_series(self):
        result = macd([50.0] * 40)
        assert result.macd == pytest.approx(0.0)
        assert result.signal == pytest.approx(0.0)
        assert result.histogram == pytest.approx(0.0)

    def test_signal_needs_signal_period_values(self):
        # 30 closes give only 5 MACD points
        result = macd([float(i) for i in range(30)])
        assert not math.isnan(result.macd)
        assert math.isnan(result.signal)

    def test_signal_from_prefix_macd_values(self):
        # MACD at prefixes [1,2,3] and [1,2,3,5] is 1/3 and 7/12
        result = macd([1.0, 2.0, 3.0, 5.0], fast_period=2, slow_period=3, signal_period=2)
        assert result.macd == pytest.approx(7.0 / 12.0)
        assert result.signal == pytest.approx(13.0 / 24.0)

    def test_rising_series_positive(self):
        result = macd([100.0 + i for i in range(60)])
        assert result.macd > 0


class TestStochastic:
    """Test stochastic"""

    def test_position_in_range(self):
        highs = [10.0] * 14
        lows = [0.0] * 14
        closes = [5.0] * 13 + [2.5]
        result = stochastic(highs, lows, closes)
        assert result.k == pytest.approx(25.0)
        assert result.d == result.k

    def test_flat_range_is_undefined(self):
        result = stochastic([5.0] * 14, [5.0] * 14, [5.0] * 14)
        assert math.isnan(result.k)
        assert math.isnan(result.d)

    def test_short_series(self):
        result = stochastic([1.0] * 5, [1.0] * 5, [1.0] * 5)
        assert math.isnan(result.k)
        assert math.isnan(result.d)


class TestOscillators:
    """Test cci, roc, mfi and adx"""

    def test_cci(self):
        closes = [float(i) for i in range(1, 21)]
        highs = [c + 1 for c in closes]
        lows = [c - 1 for c in closes]
        # typical price == close, mean 10.5, mean deviation 5
        assert cci(highs, lows, closes) == pytest.approx(9.5 / 0.075)

    def test_cci_flat_is_nan(self):
        assert math.isnan(cci([5.0] * 20, [5.0] * 20, [5.0] * 20))

    def test_roc(self):
        closes = [100.0] + [105.0] * 11 + [110.0]
        assert roc(closes, 12) == pytest.approx(10.0)

    def test_roc_short(self):
        assert math.isnan(roc([1.0] * 12, 12))

    def test_mfi_rising(self):
        closes = [float(i) for i in range(10, 30)]
        highs = [c + 1 for c in closes]
        lows = [c - 1 for c in closes]
        assert mfi(highs, lows, closes, [100] * 20) == pytest.approx(100.0)

    def test_mfi_unchanged_price_counts_as_negative(self):
        assert mfi([11.0] * 20, [9.0] * 20, [10.0] * 20, [100] * 20) == pytest.approx(0.0)

    def test_mfi_zero_volume(self):
        assert mfi([11.0] * 20, [9.0] * 20, [10.0] * 20, [0] * 20) == pytest.approx(50.0)

    def test_adx_not_implemented(self):
        assert math.isnan(adx([1.0] * 30, [1.0] * 30, [1.0] * 30))


class TestVolatility:
    """Test atr and bollinger_bands"""

    def test_atr(self):
        assert atr([11.0] * 15, [9.0] * 15, [10.0] * 15, 14) == pytest.approx(2.0)

    def test_atr_gap_uses_previous_close(self):
        highs = [11.0] * 14 + [21.0]
        lows = [9.0] * 14 + [19.0]
        closes = [10.0] * 14 + [20.0]
        # last true range is |21 - 10| = 11, the other 13 are 2
        assert atr(highs, lows, closes, 14) == pytest.approx((13 * 2.0 + 11.0) / 14)

    def test_atr_mismatched_lengths(self):
        assert math.isnan(atr([11.0] * 20, [9.0] * 15, [10.0] * 15, 14))
        assert math.isnan(atr([11.0] * 15, [9.0] * 15, [10.0] * 20, 14))

    def test_atr_needs_period_plus_one(self):
        assert math.isnan(atr([11.0] * 14, [9.0] * 14, [10.0] * 14, 14))

    def test_bollinger_constant(self):
        bands = bollinger_bands([10.0] * 25)
        assert bands.upper == pytest.approx(10.0)
        assert bands.middle == pytest.approx(10.0)
        assert bands.lower == pytest.approx(10.0)

    def test_bollinger_population_std(self):
        bands = bollinger_bands([float(i) for i in range(1, 21)], 20, 2.0)
        sd = math.sqrt(399.0 / 12.0)
        assert bands.middle == pytest.approx(10.5)
        assert bands.upper == pytest.approx(10.5 + 2 * sd)
        assert bands.lower == pytest.approx(10.5 - 2 * sd)

    def test_bollinger_short(self):
        assert all(math.isnan(v) for v in bollinger_bands([1.0] * 5))


class TestVolume:
    """Test obv and vwap"""

    def test_obv(self):
        closes = [10.0, 11.0, 10.0, 10.0, 12.0]
        volumes = [100, 200, 300, 400, 500]
        assert obv(closes, volumes) == pytest.approx(400.0)

    def test_obv_invalid(self):
        assert math.isnan(obv([], []))
        assert math.isnan(obv([1.0, 2.0], [1]))

    def test_vwap(self):
        assert vwap([11.0, 21.0], [9.0, 19.0], [10.0, 20.0], [1, 3]) == pytest.approx(17.5)

    def test_vwap_zero_volume(self):
        assert math.isnan(vwap([11.0], [9.0], [10.0], [0]))


def test_calculations_are_deterministic():
    closes = [100.0 + math.sin(i / 3.0) * 5 for i in range(80)]
    assert macd(closes) == macd(closes)
    assert rsi(closes) == rsi(closes)
    assert bollinger_bands(closes) == bollinger_bands(closes)
