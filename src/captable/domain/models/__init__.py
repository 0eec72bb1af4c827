"""Domain models package."""

from captable.domain.models.enums import (
    TransactionKind,
    EntryStatus,
    SplitSecurityType,
    SecurityRole,
    PostingOutcome,
    PostingEventType,
)
from captable.domain.models.ledger_entry import TransactionEntry
from captable.domain.models.snapshot import PositionSnapshot
from captable.domain.models.split_config import SplitConfiguration
from captable.domain.models.directory import Security, Shareholder

__all__ = [
    "TransactionKind",
    "EntryStatus",
    "SplitSecurityType",
    "SecurityRole",
    "PostingOutcome",
    "PostingEventType",
    "TransactionEntry",
    "PositionSnapshot",
    "SplitConfiguration",
    "Security",
    "Shareholder",
]
