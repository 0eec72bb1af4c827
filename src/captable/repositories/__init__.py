"""Repository layer - data access abstractions and implementations."""

from captable.repositories.protocols import (
    LedgerRepository,
    SnapshotRepository,
    SecurityDirectory,
    ShareholderDirectory,
    SplitConfigRepository,
)

__all__ = [
    "LedgerRepository",
    "SnapshotRepository",
    "SecurityDirectory",
    "ShareholderDirectory",
    "SplitConfigRepository",
]
