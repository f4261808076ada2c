"""
Unit Tests for moving average ladders
"""

from chartsignals.services.indicators.moving_average import (
    active_periods,
    compute_dma,
    compute_ema_series,
    compute_ma_family,
)

HOUR = 3600


class TestActivePeriods:
    """Test active_periods"""

    def test_one_month(self):
        assert active_periods("1mo") == [5, 10, 20]

    def test_three_months(self):
        assert active_periods("3mo") == [5, 10, 20, 30, 50]

    def test_other_ranges_use_full_ladder(self):
        assert active_periods("1y") == [5, 10, 20, 30, 50, 100, 150, 200]
        assert active_periods("5y", [5, 300]) == [5, 300]


class TestSeries:
    """Test compute_dma and compute_ema_series"""

    def test_dma_zero_lead(self):
        assert compute_dma([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], 3) == [0.0, 0.0, 2.0, 3.0, 4.0, 5.0]

    def test_dma_short_source(self):
        assert compute_dma([1.0, 2.0], 5) == [0.0, 0.0]

    def test_ema_seeded_with_first_close(self):
        assert compute_ema_series([10.0, 20.0, 20.0], 3) == [10.0, 15.0, 17.5]

    def test_ema_empty(self):
        assert compute_ema_series([], 3) == []


class TestMAFamily:
    """Test compute_ma_family"""

    def test_periods_follow_range(self, make_snapshot):
        snapshot = make_snapshot([100.0 + i for i in range(30)], requested_range="1mo")
        result = compute_ma_family(snapshot)
        assert result.periods == [5, 10, 20]
        assert sorted(result.ema) == [5, 10, 20]
        assert all(len(s) == 30 for s in result.dma.values())

    def test_too_few_values(self, make_snapshot):
        result = compute_ma_family(make_snapshot([1.0, 2.0, 3.0, 4.0]))
        assert result.is_empty()

    def test_daily_closes_flag(self, make_snapshot):
        # 10 hourly candles spread over two UTC days
        snapshot = make_snapshot(
            [100.0 + i for i in range(10)],
            requested_range="1mo",
            requested_interval="60m",
            start_ts=1704153600 + 18 * HOUR,
            step=HOUR,
        )
        assert not compute_ma_family(snapshot, use_daily_closes=False).is_empty()
        assert compute_ma_family(snapshot, use_daily_closes=True).is_empty()
