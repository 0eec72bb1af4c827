"""
Pytest configuration and fixtures for cap table ledger tests.

This module provides:
- In-memory SQLite database fixtures
- Repository and service fixtures wired like the API dependencies
- Factory helpers for securities, shareholders and split configurations
- A SPAC-style issuer preset (units, class A, warrants)
- Date helpers
"""

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from captable.main import app
from captable.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from captable.repositories.sqlalchemy import orm_models  # noqa: F401
from captable.repositories.sqlalchemy import (
    SqlAlchemyLedgerRepository,
    SqlAlchemySnapshotRepository,
    SqlAlchemySecurityDirectory,
    SqlAlchemyShareholderDirectory,
    SqlAlchemySplitConfigRepository,
)
from captable.providers import RecordingEventPublisher
from captable.services import (
    LedgerService,
    EntryCreate,
    PositionEngine,
    BalanceValidator,
    SnapshotCache,
    SplitConfigService,
    DirectoryService,
    PostingService,
    PostingRequest,
    SplitOrchestrator,
)
from captable.domain.models import (
    Security,
    Shareholder,
    SplitConfiguration,
    SplitSecurityType,
    TransactionKind,
)
from captable.core.timezone import EASTERN_TZ
from captable.config.settings import Settings, set_settings, reset_settings


ISSUER = "issuer-1"


# =============================================================================
# DATE HELPERS
# =============================================================================


def d(value: str) -> date:
    """Shorthand for date.fromisoformat in test bodies."""
    return date.fromisoformat(value)


def eastern_datetime(year: int, month: int, day: int, hour: int = 10, minute: int = 0) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute))


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def ledger_repo(test_session) -> SqlAlchemyLedgerRepository:
    """Provide test LedgerRepository."""
    return SqlAlchemyLedgerRepository(test_session)


@pytest.fixture
def snapshot_repo(test_session) -> SqlAlchemySnapshotRepository:
    """Provide test SnapshotRepository."""
    return SqlAlchemySnapshotRepository(test_session)


@pytest.fixture
def security_directory(test_session) -> SqlAlchemySecurityDirectory:
    return SqlAlchemySecurityDirectory(test_session)


@pytest.fixture
def shareholder_directory(test_session) -> SqlAlchemyShareholderDirectory:
    return SqlAlchemyShareholderDirectory(test_session)


@pytest.fixture
def split_config_repo(test_session) -> SqlAlchemySplitConfigRepository:
    return SqlAlchemySplitConfigRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def publisher() -> RecordingEventPublisher:
    """Publisher that keeps emitted events for assertions."""
    return RecordingEventPublisher()


@pytest.fixture
def ledger_service(ledger_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(ledger_repo=ledger_repo)


@pytest.fixture
def position_engine(ledger_repo) -> PositionEngine:
    """Provide test PositionEngine."""
    return PositionEngine(ledger_repo=ledger_repo)


@pytest.fixture
def balance_validator(position_engine) -> BalanceValidator:
    return BalanceValidator(position_engine=position_engine)


@pytest.fixture
def snapshot_cache(position_engine, snapshot_repo) -> SnapshotCache:
    """Provide test SnapshotCache."""
    return SnapshotCache(position_engine=position_engine, snapshot_repo=snapshot_repo)


@pytest.fixture
def split_config_service(split_config_repo) -> SplitConfigService:
    return SplitConfigService(split_config_repo=split_config_repo)


@pytest.fixture
def directory_service(security_directory, shareholder_directory) -> DirectoryService:
    return DirectoryService(
        security_directory=security_directory,
        shareholder_directory=shareholder_directory,
    )


@pytest.fixture
def posting_service(
    ledger_service,
    security_directory,
    position_engine,
    balance_validator,
    snapshot_cache,
    publisher,
) -> PostingService:
    """Provide test PostingService (authorized-share cap off)."""
    return PostingService(
        ledger_service=ledger_service,
        security_directory=security_directory,
        position_engine=position_engine,
        validator=balance_validator,
        snapshot_cache=snapshot_cache,
        publisher=publisher,
    )


@pytest.fixture
def split_orchestrator(
    ledger_service,
    security_directory,
    split_config_service,
    balance_validator,
    snapshot_cache,
    publisher,
) -> SplitOrchestrator:
    """Provide test SplitOrchestrator."""
    return SplitOrchestrator(
        ledger_service=ledger_service,
        security_directory=security_directory,
        split_config_service=split_config_service,
        validator=balance_validator,
        snapshot_cache=snapshot_cache,
        publisher=publisher,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def security_factory(directory_service) -> Callable[..., Security]:
    """Factory for registering test securities."""

    def _create_security(
        security_id: str,
        class_name: str,
        issuer_id: str = ISSUER,
        total_authorized_shares: Optional[int] = None,
    ) -> Security:
        return directory_service.register_security(
            issuer_id=issuer_id,
            security_id=security_id,
            class_name=class_name,
            total_authorized_shares=total_authorized_shares,
        )

    return _create_security


@pytest.fixture
def shareholder_factory(directory_service) -> Callable[..., Shareholder]:
    """Factory for registering test shareholders."""

    def _create_shareholder(
        name: Optional[str] = None,
        shareholder_id: Optional[str] = None,
        issuer_id: str = ISSUER,
    ) -> Shareholder:
        if name is None:
            name = f"Holder {uuid.uuid4().hex[:8]}"
        return directory_service.register_shareholder(
            issuer_id=issuer_id,
            name=name,
            shareholder_id=shareholder_id,
        )

    return _create_shareholder


@pytest.fixture
def split_config_factory(split_config_service) -> Callable[..., SplitConfiguration]:
    """Factory for issuer split ratios."""

    def _configure(
        class_a_ratio: str = "1",
        secondary_ratio: str = "1",
        secondary_type: SplitSecurityType = SplitSecurityType.WARRANT,
        issuer_id: str = ISSUER,
    ) -> SplitConfiguration:
        return split_config_service.configure(
            issuer_id=issuer_id,
            class_a_ratio=Decimal(class_a_ratio),
            secondary_ratio=Decimal(secondary_ratio),
            secondary_type=secondary_type,
        )

    return _configure


@pytest.fixture
def credit_factory(ledger_service) -> Callable[..., object]:
    """Append a credit straight to the ledger (no validation, no refresh)."""

    def _credit(
        shareholder_id: str,
        security_id: str,
        quantity: int,
        on: date,
        kind: TransactionKind = TransactionKind.DEPOSIT,
        issuer_id: str = ISSUER,
    ):
        return ledger_service.append(
            entry_data(issuer_id, shareholder_id, security_id, kind, quantity, on)
        )

    return _credit


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def spac_securities(security_factory) -> dict[str, Security]:
    """Units, class A and warrants registered in that order."""
    return {
        "units": security_factory("UNITCUSIP", "Units"),
        "class_a": security_factory("CLSACUSIP", "Class A Ordinary Shares"),
        "warrants": security_factory("WRNTCUSIP", "Redeemable Warrants"),
    }


@pytest.fixture
def holder(shareholder_factory) -> Shareholder:
    """A registered shareholder."""
    return shareholder_factory(name="Cede & Co", shareholder_id="holder-1")


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    set_settings(Settings(database_url="sqlite:///:memory:"))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def entry_data(
    issuer_id: str,
    shareholder_id: str,
    security_id: str,
    kind: TransactionKind,
    quantity: int,
    on: date,
    note: Optional[str] = None,
) -> EntryCreate:
    """Helper to build EntryCreate with the kind's sign applied to quantity."""
    return EntryCreate(
        issuer_id=issuer_id,
        security_id=security_id,
        shareholder_id=shareholder_id,
        kind=kind,
        signed_quantity=kind.signed(quantity),
        transaction_date=on,
        note=note,
    )


def posting(
    shareholder_id: str,
    security_id: str,
    kind: TransactionKind,
    quantity: int,
    on: date,
    issuer_id: str = ISSUER,
) -> PostingRequest:
    """Helper to build a PostingRequest."""
    return PostingRequest(
        issuer_id=issuer_id,
        shareholder_id=shareholder_id,
        security_id=security_id,
        kind=kind,
        quantity=quantity,
        transaction_date=on,
    )
