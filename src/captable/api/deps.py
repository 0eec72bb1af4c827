"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session

from captable.repositories.sqlalchemy.database import get_db
from captable.repositories.sqlalchemy import (
    SqlAlchemyLedgerRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemySecurityDirectory,
    SqlAlchemyShareholderDirectory,
    SqlAlchemySplitConfigRepository,
)
from captable.providers import PostingEventPublisher, LoggingEventPublisher
from captable.services import (
    LedgerService,
    PositionEngine,
    BalanceValidator,
    SnapshotCache,
    SplitConfigService,
    DirectoryService,
    PostingService,
    SplitOrchestrator,
)
from captable.config.settings import get_settings


def get_ledger_repo(db: Session = Depends(get_db)) -> SqlAlchemyLedgerRepository:
    """Provide LedgerRepository instance."""
    return SqlAlchemyLedgerRepository(db)


def get_snapshot_repo(db: Session = Depends(get_db)) -> SqlAlchemySnapshotRepository:
    """Provide SnapshotRepository instance."""
    return SqlAlchemySnapshotRepository(db)


def get_security_directory(db: Session = Depends(get_db)) -> SqlAlchemySecurityDirectory:
    return SqlAlchemySecurityDirectory(db)


def get_shareholder_directory(db: Session = Depends(get_db)) -> SqlAlchemyShareholderDirectory:
    return SqlAlchemyShareholderDirectory(db)


def get_split_config_repo(db: Session = Depends(get_db)) -> SqlAlchemySplitConfigRepository:
    return SqlAlchemySplitConfigRepository(db)


def get_event_publisher() -> PostingEventPublisher:
    """Provide the posting event publisher (application log by default)."""
    return LoggingEventPublisher()


def get_ledger_service(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(ledger_repo=ledger_repo)


def get_position_engine(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
) -> PositionEngine:
    """Provide PositionEngine instance."""
    return PositionEngine(ledger_repo=ledger_repo)


def get_balance_validator(
    engine: PositionEngine = Depends(get_position_engine),
) -> BalanceValidator:
    return BalanceValidator(position_engine=engine)


def get_snapshot_cache(
    engine: PositionEngine = Depends(get_position_engine),
    snapshot_repo: SqlAlchemySnapshotRepository = Depends(get_snapshot_repo),
) -> SnapshotCache:
    """Provide SnapshotCache instance."""
    return SnapshotCache(position_engine=engine, snapshot_repo=snapshot_repo)


def get_split_config_service(
    repo: SqlAlchemySplitConfigRepository = Depends(get_split_config_repo),
) -> SplitConfigService:
    return SplitConfigService(split_config_repo=repo)


def get_directory_service(
    securities: SqlAlchemySecurityDirectory = Depends(get_security_directory),
    shareholders: SqlAlchemyShareholderDirectory = Depends(get_shareholder_directory),
) -> DirectoryService:
    return DirectoryService(security_directory=securities, shareholder_directory=shareholders)


def get_posting_service(
    ledger_service: LedgerService = Depends(get_ledger_service),
    securities: SqlAlchemySecurityDirectory = Depends(get_security_directory),
    engine: PositionEngine = Depends(get_position_engine),
    validator: BalanceValidator = Depends(get_balance_validator),
    cache: SnapshotCache = Depends(get_snapshot_cache),
    publisher: PostingEventPublisher = Depends(get_event_publisher),
) -> PostingService:
    """Provide PostingService instance."""
    settings = get_settings()
    return PostingService(
        ledger_service=ledger_service,
        security_directory=securities,
        position_engine=engine,
        validator=validator,
        snapshot_cache=cache,
        publisher=publisher,
        enforce_authorized_shares=settings.enforce_authorized_shares,
    )


def get_split_orchestrator(
    ledger_service: LedgerService = Depends(get_ledger_service),
    securities: SqlAlchemySecurityDirectory = Depends(get_security_directory),
    config_service: SplitConfigService = Depends(get_split_config_service),
    validator: BalanceValidator = Depends(get_balance_validator),
    cache: SnapshotCache = Depends(get_snapshot_cache),
    publisher: PostingEventPublisher = Depends(get_event_publisher),
) -> SplitOrchestrator:
    """Provide SplitOrchestrator instance."""
    settings = get_settings()
    return SplitOrchestrator(
        ledger_service=ledger_service,
        security_directory=securities,
        split_config_service=config_service,
        validator=validator,
        snapshot_cache=cache,
        publisher=publisher,
        trigger_kind=settings.split_trigger_kind,
        base_terms=settings.split_base_terms,
        class_a_terms=settings.split_class_a_terms,
    )
