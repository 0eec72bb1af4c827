"""SQLAlchemy implementations of the security and shareholder directories."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from captable.domain.models import Security, Shareholder
from captable.repositories.sqlalchemy.orm_models import SecurityORM, ShareholderORM


class SqlAlchemySecurityDirectory:
    """SQLAlchemy-backed security directory."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, security: Security) -> Security:
        """Register a security."""
        next_seq = (
            self._db.query(func.coalesce(func.max(SecurityORM.seq), 0))
            .filter(SecurityORM.issuer_id == security.issuer_id)
            .scalar()
        ) + 1
        orm_sec = SecurityORM(
            issuer_id=security.issuer_id,
            security_id=security.security_id,
            class_name=security.class_name,
            total_authorized_shares=security.total_authorized_shares,
            seq=next_seq,
        )
        self._db.add(orm_sec)
        self._db.commit()
        self._db.refresh(orm_sec)
        return self._to_domain(orm_sec)

    def get(self, issuer_id: str, security_id: str) -> Optional[Security]:
        """Retrieve a security by issuer and code."""
        orm_sec = self._db.query(SecurityORM).filter(
            SecurityORM.issuer_id == issuer_id,
            SecurityORM.security_id == security_id,
        ).first()
        return self._to_domain(orm_sec) if orm_sec else None

    def list_by_issuer(self, issuer_id: str) -> list[Security]:
        """List an issuer's securities in registration order."""
        orm_secs = (
            self._db.query(SecurityORM)
            .filter(SecurityORM.issuer_id == issuer_id)
            .order_by(SecurityORM.seq)
            .all()
        )
        return [self._to_domain(s) for s in orm_secs]

    @staticmethod
    def _to_domain(orm: SecurityORM) -> Security:
        return Security(
            issuer_id=orm.issuer_id,
            security_id=orm.security_id,
            class_name=orm.class_name,
            total_authorized_shares=(
                int(orm.total_authorized_shares)
                if orm.total_authorized_shares is not None
                else None
            ),
        )


class SqlAlchemyShareholderDirectory:
    """SQLAlchemy-backed shareholder directory."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, shareholder: Shareholder) -> Shareholder:
        """Register a shareholder."""
        orm_sh = ShareholderORM(
            shareholder_id=shareholder.shareholder_id,
            issuer_id=shareholder.issuer_id,
            name=shareholder.name,
        )
        self._db.add(orm_sh)
        self._db.commit()
        self._db.refresh(orm_sh)
        return self._to_domain(orm_sh)

    def get(self, shareholder_id: str) -> Optional[Shareholder]:
        """Retrieve a shareholder by ID."""
        orm_sh = self._db.get(ShareholderORM, shareholder_id)
        return self._to_domain(orm_sh) if orm_sh else None

    def delete(self, shareholder_id: str) -> None:
        """Remove a shareholder (hard delete)."""
        self._db.query(ShareholderORM).filter(
            ShareholderORM.shareholder_id == shareholder_id
        ).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: ShareholderORM) -> Shareholder:
        return Shareholder(
            shareholder_id=orm.shareholder_id,
            issuer_id=orm.issuer_id,
            name=orm.name,
        )
