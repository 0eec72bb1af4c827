"""Position and holdings endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from captable.api.deps import get_snapshot_cache, get_position_engine, get_directory_service
from captable.api.schemas import PositionResponse, HoldingItem, HoldingsResponse, OutstandingResponse
from captable.core.timezone import today_eastern
from captable.domain.models import PositionSnapshot
from captable.services import SnapshotCache, PositionEngine, DirectoryService

router = APIRouter(prefix="/issuers/{issuer_id}", tags=["positions"])


def _position_response(snapshot: PositionSnapshot, verified: bool) -> PositionResponse:
    return PositionResponse(
        issuer_id=snapshot.issuer_id,
        shareholder_id=snapshot.shareholder_id,
        security_id=snapshot.security_id,
        as_of_date=snapshot.as_of_date,
        shares_owned=snapshot.shares_owned,
        last_updated_at_est=snapshot.last_updated_at_est,
        verified=verified,
    )


@router.get("/positions/{shareholder_id}/{security_id}", response_model=PositionResponse)
def get_position(
    issuer_id: str,
    shareholder_id: str,
    security_id: str,
    as_of: Optional[date] = Query(None, description="Defaults to today (US/Eastern)"),
    verify: bool = Query(False, description="Check the cached value against a ledger replay"),
    cache: SnapshotCache = Depends(get_snapshot_cache),
) -> PositionResponse:
    """Cached position, built on a miss."""
    snapshot = cache.get_position(
        issuer_id, shareholder_id, security_id, as_of or today_eastern(), verify=verify
    )
    return _position_response(snapshot, verified=verify)


@router.post("/positions/{shareholder_id}/{security_id}/refresh", response_model=PositionResponse)
def refresh_position(
    issuer_id: str,
    shareholder_id: str,
    security_id: str,
    as_of: Optional[date] = Query(None),
    cache: SnapshotCache = Depends(get_snapshot_cache),
) -> PositionResponse:
    """Rebuild one snapshot from the ledger."""
    snapshot = cache.refresh(issuer_id, shareholder_id, security_id, as_of or today_eastern())
    return _position_response(snapshot, verified=True)


@router.get("/holdings/{shareholder_id}", response_model=HoldingsResponse)
def get_holdings(
    issuer_id: str,
    shareholder_id: str,
    as_of: Optional[date] = Query(None),
    engine: PositionEngine = Depends(get_position_engine),
) -> HoldingsResponse:
    """All non-zero holdings of a shareholder on a record date, replayed."""
    as_of_date = as_of or today_eastern()
    holdings = engine.holdings_as_of(issuer_id, shareholder_id, as_of_date)
    return HoldingsResponse(
        issuer_id=issuer_id,
        shareholder_id=shareholder_id,
        as_of_date=as_of_date,
        holdings=[HoldingItem(security_id=sec, shares=qty) for sec, qty in holdings.items()],
    )


@router.get("/securities/{security_id}/outstanding", response_model=OutstandingResponse)
def get_outstanding(
    issuer_id: str,
    security_id: str,
    as_of: Optional[date] = Query(None),
    engine: PositionEngine = Depends(get_position_engine),
    directory: DirectoryService = Depends(get_directory_service),
) -> OutstandingResponse:
    """Point-in-time outstanding total for the control book, replayed."""
    security = directory.get_security(issuer_id, security_id)
    as_of_date = as_of or today_eastern()
    return OutstandingResponse(
        issuer_id=issuer_id,
        security_id=security_id,
        as_of_date=as_of_date,
        outstanding=engine.outstanding_as_of(issuer_id, security_id, as_of_date),
        total_authorized_shares=security.total_authorized_shares,
    )
