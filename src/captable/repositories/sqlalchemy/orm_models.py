"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    BigInteger,
    Integer,
    Text,
    ForeignKey,
    Numeric,
    Index,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from captable.repositories.sqlalchemy.database import Base
from captable.domain.models.enums import TransactionKind, EntryStatus, SplitSecurityType


class SecurityORM(Base):
    """SQLAlchemy model for Security (directory record)."""

    __tablename__ = "securities"

    issuer_id = Column(String(36), primary_key=True)
    security_id = Column(String(20), primary_key=True)
    class_name = Column(String(255), nullable=False)
    total_authorized_shares = Column(BigInteger, nullable=True)
    # Registration order drives first-match resolution for splits
    seq = Column(Integer, nullable=False, default=0)


class ShareholderORM(Base):
    """SQLAlchemy model for Shareholder (directory record)."""

    __tablename__ = "shareholders"

    shareholder_id = Column(String(36), primary_key=True)
    issuer_id = Column(String(36), nullable=False)
    name = Column(String(255), nullable=False)

    entries = relationship("LedgerEntryORM", back_populates="shareholder")


class LedgerEntryORM(Base):
    """SQLAlchemy model for TransactionEntry (ledger row)."""

    __tablename__ = "ledger_entries"
    __table_args__ = (
        Index("ix_ledger_position", "issuer_id", "shareholder_id", "security_id", "transaction_date"),
    )

    entry_id = Column(String(36), primary_key=True)
    issuer_id = Column(String(36), nullable=False)
    security_id = Column(String(20), nullable=False)
    shareholder_id = Column(
        String(36),
        ForeignKey("shareholders.shareholder_id"),
        nullable=False,
    )
    kind = Column(SqlEnum(TransactionKind), nullable=False)
    signed_quantity = Column(BigInteger, nullable=False)
    transaction_date = Column(Date, nullable=False)
    status = Column(SqlEnum(EntryStatus), nullable=False, default=EntryStatus.ACTIVE)
    restriction_id = Column(String(36), nullable=True)
    note = Column(Text, nullable=True)
    correlation_id = Column(String(64), nullable=True, index=True)
    created_at_est = Column(DateTime, nullable=False, default=datetime.utcnow)

    shareholder = relationship("ShareholderORM", back_populates="entries")


class PositionSnapshotORM(Base):
    """SQLAlchemy model for PositionSnapshot (derived holdings)."""

    __tablename__ = "position_snapshots"

    issuer_id = Column(String(36), primary_key=True)
    shareholder_id = Column(String(36), primary_key=True)
    security_id = Column(String(20), primary_key=True)
    as_of_date = Column(Date, primary_key=True)
    shares_owned = Column(BigInteger, nullable=False, default=0)
    last_updated_at_est = Column(DateTime, nullable=True)


class SplitConfigurationORM(Base):
    """SQLAlchemy model for SplitConfiguration."""

    __tablename__ = "split_configurations"

    issuer_id = Column(String(36), primary_key=True)
    trigger_kind = Column(SqlEnum(TransactionKind), primary_key=True)
    class_a_ratio = Column(Numeric(precision=18, scale=8), nullable=False, default=Decimal("1"))
    secondary_ratio = Column(Numeric(precision=18, scale=8), nullable=False, default=Decimal("1"))
    secondary_type = Column(
        SqlEnum(SplitSecurityType),
        nullable=False,
        default=SplitSecurityType.WARRANT,
    )
    updated_at_est = Column(DateTime, nullable=True)
