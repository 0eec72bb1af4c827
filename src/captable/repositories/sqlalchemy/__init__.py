"""SQLAlchemy repository implementations."""

from captable.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from captable.repositories.sqlalchemy.ledger_repo import SqlAlchemyLedgerRepository
from captable.repositories.sqlalchemy.snapshot_repo import SqlAlchemySnapshotRepository
from captable.repositories.sqlalchemy.directory_repo import (
    SqlAlchemySecurityDirectory,
    SqlAlchemyShareholderDirectory,
)
from captable.repositories.sqlalchemy.split_config_repo import SqlAlchemySplitConfigRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyLedgerRepository",
    "SqlAlchemySnapshotRepository",
    "SqlAlchemySecurityDirectory",
    "SqlAlchemyShareholderDirectory",
    "SqlAlchemySplitConfigRepository",
]
