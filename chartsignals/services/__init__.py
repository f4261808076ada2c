"""
chartsignals Services

Pure technical-analysis computations plus the service layer that composes
them. Every computation is a pure function of its inputs and is safe to call
concurrently from multiple threads.
"""

from chartsignals.services.base import (
    BaseService,
    ServiceError,
    ValidationError,
    InvalidSnapshotError,
)

__all__ = ["BaseService", "ServiceError", "ValidationError", "InvalidSnapshotError"]
