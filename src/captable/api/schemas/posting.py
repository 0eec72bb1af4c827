"""Pydantic schemas for posting, split and ledger entry endpoints."""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from captable.core.timezone import parse_transaction_date, to_eastern
from captable.domain.models.enums import TransactionKind, EntryStatus, PostingOutcome


def _coerce_date(value: Any) -> Any:
    """Accept ISO dates or full timestamps; timestamps map to their Eastern day."""
    if isinstance(value, datetime):
        return to_eastern(value).date()
    if isinstance(value, str):
        return parse_transaction_date(value)
    return value


class PostingRequestBody(BaseModel):
    """Request schema for a single posting."""

    shareholder_id: str = Field(..., min_length=1, description="Holder of record")
    security_id: str = Field(..., min_length=1, description="CUSIP-style security code")
    kind: TransactionKind = Field(..., description="Movement kind; its sign is fixed")
    quantity: int = Field(..., gt=0, description="Unsigned number of shares")
    transaction_date: date = Field(..., description="Business date of the movement")
    restriction_id: Optional[str] = Field(default=None, max_length=100)
    note: Optional[str] = Field(default=None, max_length=500)
    actor: Optional[str] = Field(default=None, max_length=255, description="User performing the posting")

    @field_validator("transaction_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return _coerce_date(v)


class SplitRequestBody(BaseModel):
    """Request schema for splitting units."""

    shareholder_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, description="Number of units to split")
    transaction_date: date
    base_security_id: Optional[str] = Field(
        default=None,
        description="Units security; the issuer's first units security when omitted",
    )
    restriction_id: Optional[str] = Field(default=None, max_length=100)
    note: Optional[str] = Field(default=None, max_length=500)
    actor: Optional[str] = Field(default=None, max_length=255)

    @field_validator("transaction_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return _coerce_date(v)


class VoidRequestBody(BaseModel):
    actor: Optional[str] = Field(default=None, max_length=255)


class EntryResponse(BaseModel):
    """Response schema for a single ledger entry."""

    model_config = {"from_attributes": True}

    entry_id: str
    issuer_id: str
    security_id: str
    shareholder_id: str
    kind: TransactionKind
    signed_quantity: int
    transaction_date: date
    status: EntryStatus
    restriction_id: Optional[str] = None
    note: Optional[str] = None
    correlation_id: Optional[str] = None
    created_at_est: Optional[datetime] = None


class SnapshotResponse(BaseModel):
    """Response schema for a position snapshot."""

    model_config = {"from_attributes": True}

    issuer_id: str
    shareholder_id: str
    security_id: str
    as_of_date: date
    shares_owned: int
    last_updated_at_est: Optional[datetime] = None


class PostingResponse(BaseModel):
    """
    Response schema for a committed posting.

    outcome is COMMITTED_CACHE_PENDING when the ledger write succeeded but a
    snapshot refresh did not; warnings then says which.
    """

    outcome: PostingOutcome
    entries: list[EntryResponse]
    snapshots: list[SnapshotResponse]
    warnings: list[str] = Field(default_factory=list)


class SplitResponse(PostingResponse):
    """Response schema for a split."""

    correlation_id: str
    units_security_id: str
    class_a_security_id: str
    secondary_security_id: str
    units_debited: int
    class_a_credited: int
    secondary_credited: int


class EntryListResponse(BaseModel):
    entries: list[EntryResponse]
    count: int
