"""
Snapshot Repository

Owns the latest InstrumentSnapshot per symbol. Create one and inject it
into the code that needs it; there is no module-level instance.

Single writer, many readers: writes replace whole snapshots under a lock,
reads return the snapshot object that was current at the time of the call.
Snapshots are immutable, so a reader never sees a partially updated series.
"""

import logging
import threading
from typing import Iterable, Optional

from chartsignals.schemas.market import InstrumentSnapshot
from chartsignals.services.base import InvalidSnapshotError

logger = logging.getLogger(__name__)


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


class SnapshotRepository:
    """
    Thread-safe symbol -> latest snapshot map.

    Usage:
        repo = SnapshotRepository()
        repo.put(snapshot)
        latest = repo.get("RELIANCE")
    """

    name = "SnapshotRepository"

    def __init__(self, snapshots: Optional[Iterable[InstrumentSnapshot]] = None):
        self._lock = threading.RLock()
        self._snapshots: dict[str, InstrumentSnapshot] = {}
        for snapshot in snapshots or ():
            self.put(snapshot)

    def put(self, snapshot: InstrumentSnapshot) -> None:
        """Store snapshot as the latest for its symbol."""
        if not snapshot.is_valid:
            raise InvalidSnapshotError(
                self.name,
                "Snapshot must have a symbol and at least one candle",
                {"symbol": snapshot.symbol, "candles": len(snapshot.series)},
            )

        key = normalize_symbol(snapshot.symbol)
        with self._lock:
            self._snapshots[key] = snapshot
        logger.debug(f"Stored snapshot {key} ({len(snapshot.series)} candles)")

    def get(self, symbol: str) -> Optional[InstrumentSnapshot]:
        """Latest snapshot for symbol, None if unknown."""
        with self._lock:
            return self._snapshots.get(normalize_symbol(symbol))

    def remove(self, symbol: str) -> bool:
        with self._lock:
            return self._snapshots.pop(normalize_symbol(symbol), None) is not None

    def symbols(self) -> list[str]:
        with self._lock:
            return sorted(self._snapshots)

    def snapshots(self) -> list[InstrumentSnapshot]:
        """Consistent copy of all stored snapshots, ordered by symbol."""
        with self._lock:
            return [self._snapshots[key] for key in sorted(self._snapshots)]

    def clear(self) -> None:
        with self._lock:
            self._snapshots.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)

    def __contains__(self, symbol: object) -> bool:
        if not isinstance(symbol, str):
            return False
        with self._lock:
            return normalize_symbol(symbol) in self._snapshots
