"""
Analysis Service Interface

Defines the contract for the composite technical-analysis layer.
"""

from abc import abstractmethod
from typing import Iterable

from chartsignals.services.base import BaseService
from chartsignals.schemas.market import InstrumentSnapshot
from chartsignals.schemas.analysis import AnalysisReport


class AnalysisServiceInterface(BaseService[InstrumentSnapshot, AnalysisReport]):
    """
    Analysis Service Contract.

    INPUT: InstrumentSnapshot
        - symbol, requested range/interval, ordered candle series

    OUTPUT: AnalysisReport
        - Indicator values, RSI series, MA family, levels, chart patterns,
          performance, composite score and recommendation
    """

    @property
    def name(self) -> str:
        return "AnalysisService"

    @abstractmethod
    async def execute(self, input_data: InstrumentSnapshot) -> AnalysisReport:
        """Analyze one snapshot."""
        pass

    @abstractmethod
    async def analyze_many(
        self, snapshots: Iterable[InstrumentSnapshot]
    ) -> dict[str, AnalysisReport]:
        """
        Analyze several snapshots.

        Returns:
            Reports keyed by symbol; symbols that fail are skipped
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Analysis service is always healthy (pure computation)."""
        pass
