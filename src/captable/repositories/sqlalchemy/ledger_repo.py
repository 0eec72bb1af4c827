"""SQLAlchemy implementation of LedgerRepository."""

import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from captable.core.exceptions import NotFoundError, PostingFailureError, ShareholderNotFoundError
from captable.domain.models import TransactionEntry, EntryStatus
from captable.repositories.sqlalchemy.orm_models import LedgerEntryORM, ShareholderORM

logger = logging.getLogger(__name__)


class SqlAlchemyLedgerRepository:
    """SQLAlchemy-backed, append-only ledger repository."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, entry: TransactionEntry) -> TransactionEntry:
        """Persist a new entry."""
        return self.append_batch([entry])[0]

    def append_batch(self, entries: list[TransactionEntry]) -> list[TransactionEntry]:
        """
        Persist entries in one database transaction.

        Either every row commits or the session is rolled back and nothing
        is visible. Store errors are translated into domain errors here.
        """
        orm_entries = [self._to_orm(e) for e in entries]
        try:
            self._db.add_all(orm_entries)
            self._db.commit()
        except IntegrityError as exc:
            self._db.rollback()
            missing = self._find_missing_shareholder(entries)
            if missing:
                raise ShareholderNotFoundError(missing) from exc
            logger.error("Ledger batch of %d rejected: %s", len(entries), exc.orig)
            raise PostingFailureError(f"Ledger store rejected the posting: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.error("Ledger batch of %d failed: %s", len(entries), exc)
            raise PostingFailureError(f"Ledger store write failed: {exc}") from exc

        return [self._to_domain(o) for o in orm_entries]

    def get_by_id(self, entry_id: str) -> Optional[TransactionEntry]:
        """Retrieve entry by ID."""
        orm_entry = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.entry_id == entry_id
        ).first()
        return self._to_domain(orm_entry) if orm_entry else None

    def set_status(self, entry_id: str, status: EntryStatus) -> TransactionEntry:
        """Change the status of an existing entry."""
        orm_entry = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.entry_id == entry_id
        ).first()
        if not orm_entry:
            raise NotFoundError("Ledger entry", entry_id)

        orm_entry.status = status
        try:
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise PostingFailureError(f"Could not update entry {entry_id}: {exc}") from exc
        self._db.refresh(orm_entry)
        return self._to_domain(orm_entry)

    def query(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
        include_inactive: bool = False,
    ) -> list[TransactionEntry]:
        """Entries dated on or before as_of_date, ordered by transaction_date."""
        query = self._db.query(LedgerEntryORM).filter(
            LedgerEntryORM.issuer_id == issuer_id,
            LedgerEntryORM.shareholder_id == shareholder_id,
            LedgerEntryORM.security_id == security_id,
            LedgerEntryORM.transaction_date <= as_of_date,
        )
        if not include_inactive:
            query = query.filter(LedgerEntryORM.status == EntryStatus.ACTIVE)
        query = query.order_by(LedgerEntryORM.transaction_date)
        return [self._to_domain(e) for e in query.all()]

    def query_by_shareholder(
        self,
        issuer_id: str,
        shareholder_id: str,
        as_of_date: date,
    ) -> list[TransactionEntry]:
        """Active entries of one holder across all securities."""
        query = (
            self._db.query(LedgerEntryORM)
            .filter(
                LedgerEntryORM.issuer_id == issuer_id,
                LedgerEntryORM.shareholder_id == shareholder_id,
                LedgerEntryORM.transaction_date <= as_of_date,
                LedgerEntryORM.status == EntryStatus.ACTIVE,
            )
            .order_by(LedgerEntryORM.transaction_date)
        )
        return [self._to_domain(e) for e in query.all()]

    def query_by_security(
        self,
        issuer_id: str,
        security_id: str,
        as_of_date: date,
    ) -> list[TransactionEntry]:
        """Active entries of one security across all holders."""
        query = (
            self._db.query(LedgerEntryORM)
            .filter(
                LedgerEntryORM.issuer_id == issuer_id,
                LedgerEntryORM.security_id == security_id,
                LedgerEntryORM.transaction_date <= as_of_date,
                LedgerEntryORM.status == EntryStatus.ACTIVE,
            )
            .order_by(LedgerEntryORM.transaction_date)
        )
        return [self._to_domain(e) for e in query.all()]

    def list_by_correlation(self, correlation_id: str) -> list[TransactionEntry]:
        """All entries written by one logical posting."""
        query = (
            self._db.query(LedgerEntryORM)
            .filter(LedgerEntryORM.correlation_id == correlation_id)
            .order_by(LedgerEntryORM.signed_quantity)
        )
        return [self._to_domain(e) for e in query.all()]

    def _find_missing_shareholder(self, entries: list[TransactionEntry]) -> Optional[str]:
        for shareholder_id in {e.shareholder_id for e in entries}:
            if self._db.get(ShareholderORM, shareholder_id) is None:
                return shareholder_id
        return None

    @staticmethod
    def _to_orm(entry: TransactionEntry) -> LedgerEntryORM:
        """Convert domain model to ORM model."""
        return LedgerEntryORM(
            entry_id=entry.entry_id,
            issuer_id=entry.issuer_id,
            security_id=entry.security_id,
            shareholder_id=entry.shareholder_id,
            kind=entry.kind,
            signed_quantity=entry.signed_quantity,
            transaction_date=entry.transaction_date,
            status=entry.status,
            restriction_id=entry.restriction_id,
            note=entry.note,
            correlation_id=entry.correlation_id,
            created_at_est=entry.created_at_est,
        )

    @staticmethod
    def _to_domain(orm: LedgerEntryORM) -> TransactionEntry:
        """Convert ORM model to domain model."""
        return TransactionEntry(
            entry_id=orm.entry_id,
            issuer_id=orm.issuer_id,
            security_id=orm.security_id,
            shareholder_id=orm.shareholder_id,
            kind=orm.kind,
            signed_quantity=int(orm.signed_quantity),
            transaction_date=orm.transaction_date,
            status=orm.status,
            restriction_id=orm.restriction_id,
            note=orm.note,
            correlation_id=orm.correlation_id,
            created_at_est=orm.created_at_est,
        )
