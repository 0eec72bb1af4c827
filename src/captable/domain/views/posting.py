"""View models for posting and position outputs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from captable.domain.models import (
    TransactionEntry,
    PositionSnapshot,
    Security,
    PostingOutcome,
    PostingEventType,
    SplitSecurityType,
)


@dataclass
class RefreshReport:
    """Snapshots written after a posting, plus any refresh failures."""

    snapshots: list[PositionSnapshot] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


@dataclass
class PostingResult:
    """
    Outcome of a committed posting.

    A non-empty ``warnings`` list means the ledger write succeeded but one or
    more snapshot refreshes did not; readers replaying the ledger are unaffected.
    """

    entries: list[TransactionEntry]
    snapshots: list[PositionSnapshot] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def outcome(self) -> PostingOutcome:
        if self.warnings:
            return PostingOutcome.COMMITTED_CACHE_PENDING
        return PostingOutcome.COMMITTED

    @property
    def cache_refreshed(self) -> bool:
        return not self.warnings


@dataclass
class SplitSecurities:
    """The three securities taking part in a split."""

    base: Security
    class_a: Security
    secondary: Security
    secondary_type: SplitSecurityType

    @property
    def security_ids(self) -> list[str]:
        return [self.base.security_id, self.class_a.security_id, self.secondary.security_id]


@dataclass
class SplitResult(PostingResult):
    """Posting result for a split, with the resolved securities and leg sizes."""

    securities: Optional[SplitSecurities] = None
    units_debited: int = 0
    class_a_credited: int = 0
    secondary_credited: int = 0
    correlation_id: Optional[str] = None


@dataclass
class EventLeg:
    """One security movement inside a posting event."""

    security_id: str
    signed_quantity: int


@dataclass
class PostingEvent:
    """Structured record emitted to audit/notification collaborators."""

    event_type: PostingEventType
    kind: str
    issuer_id: str
    shareholder_id: str
    transaction_date: date
    legs: list[EventLeg] = field(default_factory=list)
    entry_ids: list[str] = field(default_factory=list)
    actor: Optional[str] = None
    occurred_at_est: Optional[datetime] = None


@dataclass
class LegQuantities:
    """Floored derivative quantities for a split of ``units`` base units."""

    units: int
    class_a: int
    secondary: int
    class_a_ratio: Decimal
    secondary_ratio: Decimal
