"""
Performance Analyzer

Daily % change and sector-relative performance.
"""

from chartsignals.services.performance.analyzer import analyze_performance

__all__ = ["analyze_performance"]
