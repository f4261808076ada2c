"""
Unit Tests for the snapshot repository
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from chartsignals.services.base import InvalidSnapshotError, ServiceError
from chartsignals.services.repository import SnapshotRepository


class TestSnapshotRepository:
    """Test SnapshotRepository"""

    def test_put_and_get(self, make_snapshot):
        repo = SnapshotRepository()
        snapshot = make_snapshot([1.0, 2.0], symbol="reliance")
        repo.put(snapshot)
        assert repo.get(" RELIANCE ") is snapshot
        assert "Reliance" in repo
        assert len(repo) == 1

    def test_put_replaces_latest(self, make_snapshot):
        repo = SnapshotRepository()
        repo.put(make_snapshot([1.0], symbol="TCS"))
        newer = make_snapshot([1.0, 2.0], symbol="TCS")
        repo.put(newer)
        assert repo.get("TCS") is newer
        assert len(repo) == 1

    def test_unknown_symbol(self):
        repo = SnapshotRepository()
        assert repo.get("NOPE") is None
        assert 42 not in repo

    def test_invalid_snapshot_rejected(self, make_snapshot):
        repo = SnapshotRepository()
        with pytest.raises(InvalidSnapshotError) as exc_info:
            repo.put(make_snapshot([], symbol="EMPTY"))
        assert isinstance(exc_info.value, ServiceError)
        assert exc_info.value.details == {"symbol": "EMPTY", "candles": 0}
        assert len(repo) == 0

    def test_symbols_sorted(self, make_snapshot):
        repo = SnapshotRepository(
            [make_snapshot([1.0], symbol=s) for s in ("WIPRO", "HDFC", "ITC")]
        )
        assert repo.symbols() == ["HDFC", "ITC", "WIPRO"]
        assert [s.symbol for s in repo.snapshots()] == ["HDFC", "ITC", "WIPRO"]

    def test_remove_and_clear(self, make_snapshot):
        repo = SnapshotRepository([make_snapshot([1.0], symbol=s) for s in ("A", "B")])
        assert repo.remove("a")
        assert not repo.remove("a")
        repo.clear()
        assert len(repo) == 0

    @pytest.mark.concurrency
    def test_concurrent_writers_and_readers(self, make_snapshot):
        repo = SnapshotRepository()
        snapshots = [make_snapshot([float(i), float(i + 1)], symbol=f"S{i}") for i in range(50)]

        def write(snapshot):
            repo.put(snapshot)
            return repo.get(snapshot.symbol) is not None

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(write, snapshots))

        assert all(results)
        assert len(repo) == 50
