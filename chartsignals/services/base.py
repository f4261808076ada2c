"""
Base Service Interface

Services wrap the pure engine functions behind a typed execute() contract.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """Typed execute() over one engine input, plus a health check."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name used in logs and ServiceError messages."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass


class ServiceError(Exception):
    """Raised at service boundaries; details carries the offending values."""

    def __init__(self, service_name: str, message: str, details: Optional[dict] = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class ValidationError(ServiceError):
    """Input rejected before any computation."""
    pass


class InvalidSnapshotError(ValidationError):
    """Snapshot has an empty symbol or an empty candle series."""
    pass
