"""
Analysis Service Implementation

Runs every indicator, level and pattern detector over a snapshot and folds
the results into a bounded score and a recommendation.
Pure Python/NumPy calculations.
"""

import logging
import math
from typing import Iterable, Optional

from chartsignals.core.config import Settings, get_settings
from chartsignals.schemas.analysis import AnalysisReport, Recommendation
from chartsignals.schemas.indicators import IndicatorValues
from chartsignals.schemas.market import InstrumentSnapshot, is_intraday_interval, to_arrays
from chartsignals.schemas.patterns import (
    BEARISH_PATTERNS,
    BULLISH_PATTERNS,
    CandleBias,
    CandleHit,
    PatternHit,
)
from chartsignals.services.analysis.interface import AnalysisServiceInterface
from chartsignals.services.indicators.calculations import (
    sma,
    ema,
    rsi,
    macd,
    atr,
    vwap,
    bollinger_bands,
    obv,
    adx,
    stochastic,
    cci,
    roc,
    mfi,
)
from chartsignals.services.indicators.momentum import compute_rsi_series
from chartsignals.services.indicators.moving_average import compute_ma_family
from chartsignals.services.levels.clustering import (
    compute_support_resistance,
    nearest_levels,
    rank_levels,
)
from chartsignals.services.patterns.chart_patterns import (
    detect_double_top_bottom,
    detect_head_and_shoulders,
    detect_trend_structure,
)
from chartsignals.services.patterns.candles import detect_candle_patterns
from chartsignals.services.performance.analyzer import analyze_performance

logger = logging.getLogger(__name__)

LONG_TERM_PERIOD = 30


def _finite(value: float) -> bool:
    return not math.isnan(value)


def compute_score(
    values: IndicatorValues,
    patterns: Iterable[PatternHit],
    candle_patterns: Iterable[CandleHit] = (),
    long_term: Optional[InstrumentSnapshot] = None,
) -> float:
    """
    Composite score in [-1, 1] from indicator confirmations and patterns.

    NaN indicators contribute nothing. long_term is an optional longer-range
    snapshot of the same instrument used as a trend confirmation.
    """
    score = 0.0
    close = values.last_close

    # MACD vs signal
    if _finite(values.macd) and _finite(values.macd_signal):
        score += 0.20 if values.macd > values.macd_signal else -0.20

    # RSI extremes
    if _finite(values.rsi):
        if values.rsi < 30:
            score += 0.12
        elif values.rsi > 70:
            score -= 0.12

    # SMA crossover bias
    if _finite(values.sma_short) and _finite(values.sma_long):
        score += 0.12 if values.sma_short > values.sma_long else -0.12

    # VWAP bias
    if _finite(values.vwap) and close > 0:
        score += 0.08 if close > values.vwap else -0.08

    # Bollinger band position
    upper, lower = values.bollinger_upper, values.bollinger_lower
    if _finite(values.bollinger_middle) and upper > lower:
        if close > upper:
            score += 0.12
        elif close < lower:
            score -= 0.12
        else:
            band_position = (close - lower) / (upper - lower)
            if band_position > 0.85:
                score -= 0.04
            if band_position < 0.15:
                score += 0.04

    # OBV confirmation
    if _finite(values.obv):
        if values.obv_slope > 0.0:
            score += 0.10
        elif values.obv_slope < 0.0:
            score -= 0.10

    # Strong trend amplifies aligned signals
    if _finite(values.adx) and values.adx > 25.0:
        if values.sma_short > values.sma_long and values.macd > values.macd_signal:
            score += 0.08
        elif values.sma_short < values.sma_long and values.macd < values.macd_signal:
            score -= 0.08

    # Stochastic extremes
    if _finite(values.stochastic_k) and _finite(values.stochastic_d):
        if values.stochastic_k < 20 and values.stochastic_d < 20:
            score += 0.06
        elif values.stochastic_k > 80 and values.stochastic_d > 80:
            score -= 0.06

    # Minor confirmations
    if _finite(values.cci):
        if values.cci < -100:
            score += 0.03
        elif values.cci > 100:
            score -= 0.03
    if _finite(values.roc):
        if values.roc > 5.0:
            score += 0.03
        elif values.roc < -5.0:
            score -= 0.03
    if _finite(values.mfi):
        if values.mfi < 30:
            score += 0.03
        elif values.mfi > 80:
            score -= 0.03

    for candle in candle_patterns:
        if candle.bias == CandleBias.BULLISH:
            score += 0.08
        elif candle.bias == CandleBias.BEARISH:
            score -= 0.08

    for hit in patterns:
        if hit.name in BULLISH_PATTERNS:
            score += 0.18
        elif hit.name in BEARISH_PATTERNS:
            score -= 0.18

    # Long-term confirmation
    if long_term is not None and long_term.is_valid:
        data = to_arrays(long_term.series)
        long_sma = sma(data.closes, LONG_TERM_PERIOD)
        long_ema = ema(data.closes, LONG_TERM_PERIOD)
        if _finite(long_sma) and _finite(long_ema):
            score += 0.12 if long_ema > long_sma else -0.12

        long_vwap = vwap(data.highs, data.lows, data.closes, data.volumes)
        if _finite(long_vwap):
            score += 0.04 if close > long_vwap else -0.04

    # Dampen in very volatile markets
    if _finite(values.atr) and close > 0 and values.atr / close > 0.04:
        score *= 0.85

    return max(-1.0, min(1.0, score))


def recommendation_for(score: float) -> Recommendation:
    """Map a composite score to a recommendation."""
    if score >= 0.6:
        return Recommendation.STRONG_BUY
    elif score >= 0.2:
        return Recommendation.BUY
    elif score >= -0.2:
        return Recommendation.HOLD
    elif score >= -0.6:
        return Recommendation.SELL
    return Recommendation.STRONG_SELL


class TechnicalAnalysisService(AnalysisServiceInterface):
    """
    Technical Analysis Service.

    Stateless apart from its settings; one instance can serve many threads.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()

    @property
    def name(self) -> str:
        return "TechnicalAnalysisService"

    @property
    def settings(self) -> Settings:
        return self._settings

    async def execute(self, input_data: InstrumentSnapshot) -> AnalysisReport:
        """Analyze one snapshot."""
        return self.analyze(input_data)

    async def analyze_many(
        self, snapshots: Iterable[InstrumentSnapshot]
    ) -> dict[str, AnalysisReport]:
        """Analyze every snapshot, keyed by symbol."""
        results = {}

        for snapshot in snapshots:
            try:
                results[snapshot.symbol] = await self.execute(snapshot)
            except Exception:
                # Log error but continue with other symbols
                logger.exception(f"Error analyzing {snapshot.symbol}")

        return results

    def analyze(
        self,
        snapshot: InstrumentSnapshot,
        sector_change_percent: float = 0.0,
        long_term: Optional[InstrumentSnapshot] = None,
    ) -> AnalysisReport:
        """
        Build the complete report for one snapshot.

        long_term, when given, is a longer-range snapshot of the same symbol
        (for example 1y daily candles behind a 5d intraday view).
        """
        if not snapshot.is_valid:
            logger.info(f"Skipping analysis of invalid snapshot {snapshot.symbol!r}")
            return AnalysisReport(
                symbol=snapshot.symbol,
                candle_count=len(snapshot.series),
                recommendation=Recommendation.UNKNOWN,
                explanation="Snapshot invalid",
            )

        cfg = self._settings
        values = self._calculate_indicator_values(snapshot)

        chart_patterns = detect_double_top_bottom(snapshot.series)
        chart_patterns.extend(detect_head_and_shoulders(snapshot.series))
        candle_patterns = detect_candle_patterns(snapshot.series)

        levels = compute_support_resistance(
            snapshot, cfg.pivot_range, cfg.cluster_tolerance
        )
        ranked = rank_levels(levels, len(snapshot.series), cfg.max_levels)

        use_daily = cfg.use_daily_closes_for_intraday and is_intraday_interval(
            snapshot.requested_interval
        )

        score = compute_score(values, chart_patterns, candle_patterns, long_term)
        report = AnalysisReport(
            symbol=snapshot.symbol,
            candle_count=len(snapshot.series),
            indicators=values,
            rsi_series=compute_rsi_series(snapshot, cfg.rsi_period),
            moving_averages=compute_ma_family(snapshot, use_daily, cfg.ma_full_ladder),
            levels=ranked,
            nearest_levels=nearest_levels(ranked, values.last_close),
            candle_patterns=candle_patterns,
            chart_patterns=chart_patterns,
            trend=detect_trend_structure(snapshot.series),
            performance=analyze_performance(snapshot, sector_change_percent),
            score=score,
            recommendation=recommendation_for(score),
        )
        report.explanation = self._build_explanation(report)

        logger.info(
            f"Analyzed {snapshot.symbol}: {len(snapshot.series)} candles, "
            f"score {score:.2f} ({report.recommendation.value})"
        )
        return report

    def _calculate_indicator_values(self, snapshot: InstrumentSnapshot) -> IndicatorValues:
        """Last value of every indicator."""
        cfg = self._settings
        data = to_arrays(snapshot.series)
        closes, highs, lows, volumes = data.closes, data.highs, data.lows, data.volumes

        macd_result = macd(closes, cfg.macd_fast, cfg.macd_slow, cfg.macd_signal)
        bands = bollinger_bands(closes, cfg.bollinger_period, cfg.bollinger_k)
        stoch = stochastic(highs, lows, closes, cfg.stochastic_k, cfg.stochastic_d)
        obv_value = obv(closes, volumes)

        # OBV change against the window ending one bar earlier
        obv_slope = 0.0
        look = min(max(10, cfg.sma_short), len(closes) - 1)
        if len(closes) > look + 1:
            prev_obv = obv(closes[-(look + 1):-1], volumes[-(look + 1):-1])
            if _finite(prev_obv):
                obv_slope = obv_value - prev_obv

        return IndicatorValues(
            last_close=float(closes[-1]),
            sma_short=sma(closes, cfg.sma_short),
            sma_long=sma(closes, cfg.sma_long),
            rsi=rsi(closes, cfg.rsi_period),
            macd=macd_result.macd,
            macd_signal=macd_result.signal,
            atr=atr(highs, lows, closes, cfg.atr_period),
            vwap=vwap(highs, lows, closes, volumes),
            bollinger_upper=bands.upper,
            bollinger_middle=bands.middle,
            bollinger_lower=bands.lower,
            obv=obv_value,
            obv_slope=obv_slope,
            adx=adx(highs, lows, closes, cfg.atr_period),
            stochastic_k=stoch.k,
            stochastic_d=stoch.d,
            cci=cci(highs, lows, closes),
            roc=roc(closes, cfg.roc_period),
            mfi=mfi(highs, lows, closes, volumes),
        )

    def _build_explanation(self, report: AnalysisReport) -> str:
        """Human readable indicator summary."""
        v = report.indicators
        parts = [
            f"Score {report.score:.2f} ({report.recommendation.value}); ",
            f"SMA{self._settings.sma_short}={v.sma_short:.2f}, RSI={v.rsi:.2f}, ATR={v.atr:.2f}; ",
            f"VWAP={v.vwap:.2f}, OBV={v.obv:.0f} (delta={v.obv_slope:.0f}), ADX={v.adx:.2f}; ",
            f"Bollinger(mid={v.bollinger_middle:.2f} up={v.bollinger_upper:.2f} "
            f"low={v.bollinger_lower:.2f}); ",
            f"Stoch K/D={v.stochastic_k:.2f}/{v.stochastic_d:.2f}; ",
            f"CCI={v.cci:.2f}, ROC={v.roc:.2f}, MFI={v.mfi:.2f}.",
        ]
        if report.candle_patterns:
            names = ", ".join(c.name for c in report.candle_patterns)
            parts.append(f" Candles: {names}.")
        if report.chart_patterns:
            names = ", ".join(f"{p.name.value}({p.strength:.2f})" for p in report.chart_patterns)
            parts.append(f" Charts: {names}.")
        if report.trend is not None:
            parts.append(f" Trend: {report.trend.rationale}.")
        return "".join(parts)

    async def health_check(self) -> bool:
        """Analysis service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[TechnicalAnalysisService] = None


def get_analysis_service() -> TechnicalAnalysisService:
    """Get or create analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = TechnicalAnalysisService()
    return _service_instance
