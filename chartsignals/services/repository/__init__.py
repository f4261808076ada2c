"""
Snapshot Repository

Injectable, thread-safe store of the latest candle snapshot per symbol.
"""

from chartsignals.services.repository.snapshots import SnapshotRepository, normalize_symbol

__all__ = ["SnapshotRepository", "normalize_symbol"]
