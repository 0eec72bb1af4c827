"""Pydantic schemas for position endpoints."""

from datetime import date
from typing import Optional

from pydantic import BaseModel

from captable.api.schemas.posting import SnapshotResponse


class PositionResponse(SnapshotResponse):
    """A cached position; verified is True when it was checked against the ledger."""

    verified: bool = False


class HoldingItem(BaseModel):
    security_id: str
    shares: int


class HoldingsResponse(BaseModel):
    """All non-zero holdings of one shareholder on a record date."""

    issuer_id: str
    shareholder_id: str
    as_of_date: date
    holdings: list[HoldingItem]


class OutstandingResponse(BaseModel):
    """Shares of one security held across all holders on a record date."""

    issuer_id: str
    security_id: str
    as_of_date: date
    outstanding: int
    total_authorized_shares: Optional[int] = None
