"""Ledger repository protocol."""

from datetime import date
from typing import Protocol, Optional

from captable.domain.models import TransactionEntry, EntryStatus


class LedgerRepository(Protocol):
    """Interface for transaction entry (ledger) data access. Append-only."""

    def append(self, entry: TransactionEntry) -> TransactionEntry:
        """Persist a new entry."""
        ...

    def append_batch(self, entries: list[TransactionEntry]) -> list[TransactionEntry]:
        """Persist several entries as one unit: all are stored or none are."""
        ...

    def get_by_id(self, entry_id: str) -> Optional[TransactionEntry]:
        """Retrieve entry by ID."""
        ...

    def set_status(self, entry_id: str, status: EntryStatus) -> TransactionEntry:
        """Change the status of an existing entry (the only permitted mutation)."""
        ...

    def query(
        self,
        issuer_id: str,
        shareholder_id: str,
        security_id: str,
        as_of_date: date,
        include_inactive: bool = False,
    ) -> list[TransactionEntry]:
        """Entries dated on or before as_of_date, ordered by transaction_date."""
        ...

    def query_by_shareholder(
        self,
        issuer_id: str,
        shareholder_id: str,
        as_of_date: date,
    ) -> list[TransactionEntry]:
        """Active entries of one holder across all securities."""
        ...

    def query_by_security(
        self,
        issuer_id: str,
        security_id: str,
        as_of_date: date,
    ) -> list[TransactionEntry]:
        """Active entries of one security across all holders."""
        ...

    def list_by_correlation(self, correlation_id: str) -> list[TransactionEntry]:
        """All entries written by one logical posting."""
        ...
