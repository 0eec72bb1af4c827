"""
Unit tests for SnapshotCache.

Tests cover:
- Refresh writes the replayed balance and overwrites stale values
- Refresh idempotence
- Refresh after posting covers later cached dates
- Failures collected as warnings
- Read-through with optional verification
"""

from unittest.mock import MagicMock

import pytest

from captable.services import SnapshotCache, PositionEngine
from captable.domain.models import PositionSnapshot, TransactionKind
from captable.core.exceptions import CacheRefreshError

from tests.conftest import ISSUER, d


class TestRefresh:
    """Tests for single snapshot refresh."""

    def test_refresh_writes_replayed_balance(self, snapshot_cache: SnapshotCache, holder, credit_factory):
        """
        GIVEN a deposit of 500
        WHEN I refresh the snapshot for that date
        THEN the stored snapshot shows 500
        """
        credit_factory(holder.shareholder_id, "SEC1", 500, d("2024-01-01"))

        snapshot = snapshot_cache.refresh(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01"))

        assert snapshot.shares_owned == 500
        assert snapshot.last_updated_at_est is not None

    def test_refresh_is_idempotent(self, snapshot_cache: SnapshotCache, snapshot_repo, holder, credit_factory):
        """
        GIVEN an unchanged ledger
        WHEN I refresh the same key twice
        THEN the stored value is the same both times
        """
        credit_factory(holder.shareholder_id, "SEC1", 500, d("2024-01-01"))

        first = snapshot_cache.refresh(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01"))
        second = snapshot_cache.refresh(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01"))

        assert first.shares_owned == second.shares_owned == 500
        assert snapshot_repo.list_dates_from(ISSUER, holder.shareholder_id, "SEC1", d("2000-01-01")) == [
            d("2024-01-01")
        ]

    def test_refresh_overwrites_stale_value(self, snapshot_cache: SnapshotCache, snapshot_repo, holder, credit_factory):
        credit_factory(holder.shareholder_id, "SEC1", 500, d("2024-01-01"))
        snapshot_repo.upsert(PositionSnapshot(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01"), 9999))

        snapshot = snapshot_cache.refresh(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01"))

        assert snapshot.shares_owned == 500

    def test_store_failure_raises_cache_refresh_error(self, position_engine: PositionEngine, holder):
        failing_repo = MagicMock()
        failing_repo.upsert.side_effect = RuntimeError("disk full")
        cache = SnapshotCache(position_engine=position_engine, snapshot_repo=failing_repo)

        with pytest.raises(CacheRefreshError, match="disk full"):
            cache.refresh(ISSUER, holder.shareholder_id, "SEC1", d("2024-01-01"))


class TestRefreshAfterPosting:
    """Tests for the refresh routine shared by posting flows."""

    def test_later_cached_dates_are_refreshed(
        self, snapshot_cache: SnapshotCache, snapshot_repo, holder, credit_factory
    ):
        """
        GIVEN a snapshot cached for 2024-12-31 showing 100
        WHEN a backdated deposit of 50 on 2024-06-01 is refreshed
        THEN both 2024-06-01 and 2024-12-31 snapshots show the replayed values
        """
        credit_factory(holder.shareholder_id, "SEC1", 100, d("2024-01-01"))
        snapshot_cache.refresh(ISSUER, holder.shareholder_id, "SEC1", d("2024-12-31"))
        credit_factory(holder.shareholder_id, "SEC1", 50, d("2024-06-01"))

        report = snapshot_cache.refresh_after_posting(ISSUER, holder.shareholder_id, ["SEC1"], d("2024-06-01"))

        assert report.ok
        assert [s.as_of_date for s in report.snapshots] == [d("2024-06-01"), d("2024-12-31")]
        assert snapshot_repo.get(ISSUER, holder.shareholder_id, "SEC1", d("2024-12-31")).shares_owned == 150

    def test_failures_become_warnings(self, position_engine: PositionEngine, holder):
        failing_repo = MagicMock()
        failing_repo.list_dates_from.return_value = []
        failing_repo.upsert.side_effect = RuntimeError("timeout")
        cache = SnapshotCache(position_engine=position_engine, snapshot_repo=failing_repo)

        report = cache.refresh_after_posting(ISSUER, holder.shareholder_id, ["SEC1", "SEC2"], d("2024-01-01"))

        assert not report.ok
        assert len(report.warnings) == 2
        assert report.snapshots == []


class TestGetPosition:
    """Tests for read-through access."""

    def test_miss_builds_snapshot(self, snapshot_cache: SnapshotCache, snapshot_repo, holder, credit_factory):
        credit_factory(holder.shareholder_id, "SEC1", 70, d("2024-01-01"))

        snapshot = snapshot_cache.get_position(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01"))

        assert snapshot.shares_owned == 70
        assert snapshot_repo.get(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01")) is not None

    def test_hit_without_verify_returns_cached_value(
        self, snapshot_cache: SnapshotCache, snapshot_repo, holder, credit_factory
    ):
        credit_factory(holder.shareholder_id, "SEC1", 70, d("2024-01-01"))
        snapshot_repo.upsert(PositionSnapshot(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01"), 1))

        snapshot = snapshot_cache.get_position(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01"))

        assert snapshot.shares_owned == 1

    def test_verify_heals_drifted_snapshot(
        self, snapshot_cache: SnapshotCache, snapshot_repo, holder, credit_factory
    ):
        """
        GIVEN a cached snapshot that disagrees with the ledger
        WHEN I read it with verify=True
        THEN the replayed value is returned and stored
        """
        credit_factory(holder.shareholder_id, "SEC1", 70, d("2024-01-01"))
        credit_factory(holder.shareholder_id, "SEC1", 20, d("2024-01-15"), kind=TransactionKind.WITHDRAWAL)
        snapshot_repo.upsert(PositionSnapshot(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01"), 1))

        snapshot = snapshot_cache.get_position(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01"), verify=True)

        assert snapshot.shares_owned == 50
        assert snapshot_repo.get(ISSUER, holder.shareholder_id, "SEC1", d("2024-02-01")).shares_owned == 50
