"""TransactionEntry domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from captable.domain.models.enums import TransactionKind, EntryStatus


@dataclass(frozen=True)
class TransactionEntry:
    """
    Immutable ledger entry (source of truth).

    - signed_quantity has the kind's sign baked in: credits positive,
      debits negative. Balances are a plain signed sum.
    - Only ACTIVE entries participate in balances; INACTIVE marks a void.
    - created_at_est is audit information, never used for ordering.
    """

    entry_id: str
    issuer_id: str
    security_id: str
    shareholder_id: str
    kind: TransactionKind
    signed_quantity: int
    transaction_date: date
    status: EntryStatus = EntryStatus.ACTIVE
    restriction_id: Optional[str] = None
    note: Optional[str] = None
    correlation_id: Optional[str] = None
    created_at_est: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.kind, str):
            object.__setattr__(self, "kind", TransactionKind(self.kind))
        if isinstance(self.status, str):
            object.__setattr__(self, "status", EntryStatus(self.status))

    @property
    def is_active(self) -> bool:
        return self.status == EntryStatus.ACTIVE

    @property
    def magnitude(self) -> int:
        return abs(self.signed_quantity)
