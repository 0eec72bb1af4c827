"""Snapshot repository protocol for derived positions."""

from datetime import date
from typing import Protocol, Optional

from captable.domain.models import PositionSnapshot


class SnapshotRepository(Protocol):
    """Interface for position snapshot data access."""

    def get(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
    ) -> Optional[PositionSnapshot]:
        """Get the snapshot stored for an exact as-of date."""
        ...

    def list_dates_from(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        from_date: date,
    ) -> list[date]:
        """As-of dates already cached for a pair, on or after from_date."""
        ...

    def upsert(self, snapshot: PositionSnapshot) -> PositionSnapshot:
        """Insert or overwrite the snapshot for its key."""
        ...
