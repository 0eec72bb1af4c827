"""SQLAlchemy implementation of SnapshotRepository."""

from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from captable.domain.models import PositionSnapshot
from captable.repositories.sqlalchemy.orm_models import PositionSnapshotORM


class SqlAlchemySnapshotRepository:
    """SQLAlchemy-backed repository for position snapshots."""

    def __init__(self, db: Session):
        self._db = db

    def get(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
    ) -> Optional[PositionSnapshot]:
        """Get the snapshot stored for an exact as-of date."""
        orm_snap = self._pair_query(issuer_id, shareholder_id, security_id).filter(
            PositionSnapshotORM.as_of_date == as_of_date
        ).first()
        return self._to_domain(orm_snap) if orm_snap else None

    def list_dates_from(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        from_date: date,
    ) -> list[date]:
        """As-of dates already cached for a pair, on or after from_date."""
        rows = (
            self._pair_query(issuer_id, shareholder_id, security_id)
            .filter(PositionSnapshotORM.as_of_date >= from_date)
            .order_by(PositionSnapshotORM.as_of_date)
            .all()
        )
        return [r.as_of_date for r in rows]

    def upsert(self, snapshot: PositionSnapshot) -> PositionSnapshot:
        """Insert or overwrite the snapshot for its key."""
        orm_snap = self._pair_query(
            snapshot.issuer_id, snapshot.shareholder_id, snapshot.security_id
        ).filter(PositionSnapshotORM.as_of_date == snapshot.as_of_date).first()

        if orm_snap:
            orm_snap.shares_owned = snapshot.shares_owned
            orm_snap.last_updated_at_est = snapshot.last_updated_at_est
        else:
            orm_snap = PositionSnapshotORM(
                issuer_id=snapshot.issuer_id,
                shareholder_id=snapshot.shareholder_id,
                security_id=snapshot.security_id,
                as_of_date=snapshot.as_of_date,
                shares_owned=snapshot.shares_owned,
                last_updated_at_est=snapshot.last_updated_at_est,
            )
            self._db.add(orm_snap)

        try:
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        self._db.refresh(orm_snap)
        return self._to_domain(orm_snap)

    def _pair_query(self, issuer_id: str, shareholder_id: str, security_id: str):
        return self._db.query(PositionSnapshotORM).filter(
            PositionSnapshotORM.issuer_id == issuer_id,
            PositionSnapshotORM.shareholder_id == shareholder_id,
            PositionSnapshotORM.security_id == security_id,
        )

    @staticmethod
    def _to_domain(orm: PositionSnapshotORM) -> PositionSnapshot:
        """Convert ORM snapshot to domain model."""
        return PositionSnapshot(
            issuer_id=orm.issuer_id,
            shareholder_id=orm.shareholder_id,
            security_id=orm.security_id,
            as_of_date=orm.as_of_date,
            shares_owned=int(orm.shares_owned or 0),
            last_updated_at_est=orm.last_updated_at_est,
        )
