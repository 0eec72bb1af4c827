"""Domain layer - pure business models with no external dependencies."""

from captable.domain.models import (
    TransactionEntry,
    PositionSnapshot,
    SplitConfiguration,
    Security,
    Shareholder,
    TransactionKind,
    EntryStatus,
    SplitSecurityType,
    SecurityRole,
    PostingOutcome,
    PostingEventType,
)

__all__ = [
    "TransactionEntry",
    "PositionSnapshot",
    "SplitConfiguration",
    "Security",
    "Shareholder",
    "TransactionKind",
    "EntryStatus",
    "SplitSecurityType",
    "SecurityRole",
    "PostingOutcome",
    "PostingEventType",
]
