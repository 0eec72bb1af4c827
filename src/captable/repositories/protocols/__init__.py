"""Repository protocol definitions (interfaces)."""

from captable.repositories.protocols.ledger_repo import LedgerRepository
from captable.repositories.protocols.snapshot_repo import SnapshotRepository
from captable.repositories.protocols.directory_repo import SecurityDirectory, ShareholderDirectory
from captable.repositories.protocols.split_config_repo import SplitConfigRepository

__all__ = [
    "LedgerRepository",
    "SnapshotRepository",
    "SecurityDirectory",
    "ShareholderDirectory",
    "SplitConfigRepository",
]
