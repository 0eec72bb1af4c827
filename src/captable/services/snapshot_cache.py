"""Position snapshot cache: write-through, always rebuilt by replay."""

import logging
from datetime import date
from typing import Iterable

from captable.core.timezone import now_eastern
from captable.core.exceptions import CacheRefreshError
from captable.domain.models import PositionSnapshot
from captable.domain.views import RefreshReport
from captable.repositories.protocols import SnapshotRepository
from captable.services.position_engine import PositionEngine

logger = logging.getLogger(__name__)


class SnapshotCache:
    """
    Maintains (issuer, shareholder, security, as-of date) -> balance rows.

    The ledger is authoritative. A snapshot is only ever written with the
    result of a full replay and overwrites whatever was stored for its key;
    it is never incremented from a previous value.
    """

    def __init__(self, position_engine: PositionEngine, snapshot_repo: SnapshotRepository):
        self._engine = position_engine
        self._snapshot_repo = snapshot_repo

    def refresh(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
    ) -> PositionSnapshot:
        """
        Replay the pair and upsert the snapshot for as_of_date.

        Raises CacheRefreshError if either the replay or the write fails.
        """
        try:
            shares = self._engine.balance_as_of(
                issuer_id=issuer_id,
                shareholder_id=shareholder_id,
                security_id=security_id,
                as_of_date=as_of_date,
            )
            return self._snapshot_repo.upsert(
                PositionSnapshot(
                    issuer_id=issuer_id,
                    shareholder_id=shareholder_id,
                    security_id=security_id,
                    as_of_date=as_of_date,
                    shares_owned=shares,
                    last_updated_at_est=now_eastern(),
                )
            )
        except Exception as exc:
            raise CacheRefreshError(
                security_id=security_id,
                as_of=as_of_date.isoformat(),
                reason=str(exc) or exc.__class__.__name__,
            ) from exc

    def refresh_after_posting(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_ids: Iterable[str],
        as_of_date: date,
    ) -> RefreshReport:
        """
        Refresh every snapshot a posting dated as_of_date can have changed.

        That is the posting date itself plus any later date already cached
        for the same pair. Failures are collected as warnings, never raised:
        the ledger write they follow has already committed.
        """
        report = RefreshReport()
        for security_id in dict.fromkeys(security_ids):
            try:
                dates = self._affected_dates(issuer_id, shareholder_id, security_id, as_of_date)
            except Exception as exc:
                self._record_failure(
                    report,
                    CacheRefreshError(security_id, as_of_date.isoformat(), str(exc)),
                )
                continue

            for snapshot_date in dates:
                try:
                    report.snapshots.append(
                        self.refresh(issuer_id, shareholder_id, security_id, snapshot_date)
                    )
                except CacheRefreshError as exc:
                    self._record_failure(report, exc)
        return report

    def get_position(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
        verify: bool = False,
    ) -> PositionSnapshot:
        """
        Read a snapshot, building it on a miss.

        With verify=True the cached value is compared with a fresh replay and
        overwritten when they disagree.
        """
        snapshot = self._snapshot_repo.get(issuer_id, shareholder_id, security_id, as_of_date)
        if snapshot is None:
            return self.refresh(issuer_id, shareholder_id, security_id, as_of_date)

        if verify:
            replayed = self._engine.balance_as_of(
                issuer_id=issuer_id,
                shareholder_id=shareholder_id,
                security_id=security_id,
                as_of_date=as_of_date,
            )
            if replayed != snapshot.shares_owned:
                logger.warning(
                    "Snapshot drift for %s/%s/%s as of %s: cached %d, ledger %d",
                    issuer_id, shareholder_id, security_id, as_of_date,
                    snapshot.shares_owned, replayed,
                )
                return self.refresh(issuer_id, shareholder_id, security_id, as_of_date)
        return snapshot

    def _affected_dates(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        from_date: date,
    ) -> list[date]:
        later = self._snapshot_repo.list_dates_from(issuer_id, shareholder_id, security_id, from_date)
        return sorted({from_date, *later})

    @staticmethod
    def _record_failure(report: RefreshReport, error: CacheRefreshError) -> None:
        logger.warning("%s (ledger committed; snapshot will be rebuilt on next refresh)", error.message)
        report.warnings.append(error.message)
