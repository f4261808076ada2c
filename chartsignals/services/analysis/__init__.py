"""
Composite Analysis

Combines indicators, levels, chart patterns and performance into one report
with a bounded score and a recommendation.
"""

from chartsignals.services.analysis.interface import AnalysisServiceInterface
from chartsignals.services.analysis.service import (
    TechnicalAnalysisService,
    compute_score,
    recommendation_for,
    get_analysis_service,
)

__all__ = [
    "AnalysisServiceInterface",
    "TechnicalAnalysisService",
    "compute_score",
    "recommendation_for",
    "get_analysis_service",
]
