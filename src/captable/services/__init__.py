"""Service layer for business logic."""

from captable.services.ledger_service import LedgerService, EntryCreate
from captable.services.position_engine import PositionEngine, signed_total
from captable.services.balance_validator import BalanceValidator
from captable.services.snapshot_cache import SnapshotCache
from captable.services.split_config_service import SplitConfigService
from captable.services.directory_service import DirectoryService
from captable.services.posting_service import PostingService, PostingRequest
from captable.services.split_orchestrator import SplitOrchestrator, SplitRequest, floor_shares
from captable.services.notifications import publish_safely

__all__ = [
    "LedgerService",
    "EntryCreate",
    "PositionEngine",
    "signed_total",
    "BalanceValidator",
    "SnapshotCache",
    "SplitConfigService",
    "DirectoryService",
    "PostingService",
    "PostingRequest",
    "SplitOrchestrator",
    "SplitRequest",
    "floor_shares",
    "publish_safely",
]
