"""Ledger store service: validated, append-only share movement entries."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from captable.core.timezone import now_eastern
from captable.core.exceptions import ValidationError, NotFoundError
from captable.domain.models import TransactionEntry, TransactionKind, EntryStatus
from captable.repositories.protocols import LedgerRepository

logger = logging.getLogger(__name__)


def _new_entry_id() -> str:
    return str(uuid.uuid4())


@dataclass
class EntryCreate:
    """Input data for appending one ledger entry (quantity already signed)."""

    issuer_id: str
    security_id: str
    shareholder_id: str
    kind: TransactionKind
    signed_quantity: int
    transaction_date: date
    restriction_id: Optional[str] = None
    note: Optional[str] = None
    correlation_id: Optional[str] = None


class LedgerService:
    """
    Service owning the transaction ledger.

    Entries are immutable once written. The only state change ever applied
    to a committed row is ACTIVE -> INACTIVE (void); nothing is deleted.
    """

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        id_factory: Callable[[], str] = _new_entry_id,
    ):
        self._ledger_repo = ledger_repo
        self._id_factory = id_factory

    def append(self, data: EntryCreate) -> TransactionEntry:
        """
        Validate and append one entry.

        Raises ValidationError for a zero quantity, an unknown kind or a sign
        that does not match the kind.
        """
        entry = self._build(data)
        created = self._ledger_repo.append(entry)
        logger.debug(
            "Appended %s %+d %s for %s",
            created.kind.value, created.signed_quantity, created.security_id, created.shareholder_id,
        )
        return created

    def append_batch(self, items: list[EntryCreate]) -> list[TransactionEntry]:
        """
        Validate every item, then append them all with one store call.

        Nothing is written unless every item is valid, and the store commits
        the batch as a unit.
        """
        if not items:
            raise ValidationError("Cannot append an empty batch")
        entries = [self._build(item) for item in items]
        return self._ledger_repo.append_batch(entries)

    def query(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
    ) -> list[TransactionEntry]:
        """Active entries for the pair dated on or before as_of_date, oldest first."""
        return self._ledger_repo.query(
            issuer_id=issuer_id,
            shareholder_id=shareholder_id,
            security_id=security_id,
            as_of_date=as_of_date,
        )

    def history(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
    ) -> list[TransactionEntry]:
        """Like query() but including voided entries (for display)."""
        return self._ledger_repo.query(
            issuer_id=issuer_id,
            shareholder_id=shareholder_id,
            security_id=security_id,
            as_of_date=as_of_date,
            include_inactive=True,
        )

    def get_entry(self, entry_id: str) -> TransactionEntry:
        """Get entry by ID."""
        entry = self._ledger_repo.get_by_id(entry_id)
        if not entry:
            raise NotFoundError("Ledger entry", entry_id)
        return entry

    def list_correlated(self, correlation_id: str) -> list[TransactionEntry]:
        """Entries sharing a correlation id (the legs of one split)."""
        return self._ledger_repo.list_by_correlation(correlation_id)

    def void_entry(self, entry_id: str) -> TransactionEntry:
        """
        Mark an entry INACTIVE so it no longer counts toward balances.

        Voiding an already-void entry is a no-op.
        """
        entry = self.get_entry(entry_id)
        if not entry.is_active:
            return entry
        return self._ledger_repo.set_status(entry_id, EntryStatus.INACTIVE)

    def _build(self, data: EntryCreate) -> TransactionEntry:
        kind = self._validate(data)
        transaction_date = data.transaction_date
        if isinstance(transaction_date, datetime):
            transaction_date = transaction_date.date()
        return TransactionEntry(
            entry_id=self._id_factory(),
            issuer_id=data.issuer_id,
            security_id=data.security_id,
            shareholder_id=data.shareholder_id,
            kind=kind,
            signed_quantity=data.signed_quantity,
            transaction_date=transaction_date,
            status=EntryStatus.ACTIVE,
            restriction_id=data.restriction_id,
            note=data.note,
            correlation_id=data.correlation_id,
            created_at_est=now_eastern(),
        )

    @staticmethod
    def _validate(data: EntryCreate) -> TransactionKind:
        """Validate entry shape; returns the normalized kind."""
        try:
            kind = TransactionKind(data.kind)
        except ValueError:
            raise ValidationError(f"Unknown transaction kind: {data.kind!r}")

        for field_name in ("issuer_id", "security_id", "shareholder_id"):
            if not getattr(data, field_name):
                raise ValidationError(f"{field_name} is required")

        qty = data.signed_quantity
        if isinstance(qty, bool) or not isinstance(qty, int):
            raise ValidationError(f"Quantity must be a whole number of shares, got {qty!r}")
        if qty == 0:
            raise ValidationError("Quantity cannot be zero")
        if (qty > 0) != (kind.sign > 0):
            expected = "negative" if kind.is_debit else "positive"
            raise ValidationError(f"{kind.value} requires a {expected} quantity, got {qty}")

        if not isinstance(data.transaction_date, date):
            raise ValidationError("transaction_date must be a date")

        return kind
