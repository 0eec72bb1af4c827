"""Posting, split, void and ledger listing endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from captable.api.deps import (
    get_posting_service,
    get_split_orchestrator,
    get_ledger_service,
)
from captable.api.schemas import (
    PostingRequestBody,
    SplitRequestBody,
    VoidRequestBody,
    EntryResponse,
    SnapshotResponse,
    PostingResponse,
    SplitResponse,
    EntryListResponse,
)
from captable.core.exceptions import NotFoundError
from captable.core.timezone import today_eastern
from captable.domain.views import PostingResult, SplitResult
from captable.services import (
    LedgerService,
    PostingService,
    PostingRequest,
    SplitOrchestrator,
    SplitRequest,
)

router = APIRouter(tags=["postings"])


def _posting_response(result: PostingResult) -> PostingResponse:
    return PostingResponse(
        outcome=result.outcome,
        entries=[EntryResponse.model_validate(e) for e in result.entries],
        snapshots=[SnapshotResponse.model_validate(s) for s in result.snapshots],
        warnings=result.warnings,
    )


def _split_response(result: SplitResult) -> SplitResponse:
    securities = result.securities
    return SplitResponse(
        outcome=result.outcome,
        entries=[EntryResponse.model_validate(e) for e in result.entries],
        snapshots=[SnapshotResponse.model_validate(s) for s in result.snapshots],
        warnings=result.warnings,
        correlation_id=result.correlation_id,
        units_security_id=securities.base.security_id,
        class_a_security_id=securities.class_a.security_id,
        secondary_security_id=securities.secondary.security_id,
        units_debited=result.units_debited,
        class_a_credited=result.class_a_credited,
        secondary_credited=result.secondary_credited,
    )


@router.post("/issuers/{issuer_id}/postings", response_model=PostingResponse, status_code=201)
def create_posting(
    issuer_id: str,
    body: PostingRequestBody,
    service: PostingService = Depends(get_posting_service),
) -> PostingResponse:
    """Post an issuance, deposit, withdrawal or transfer leg."""
    result = service.post(
        PostingRequest(
            issuer_id=issuer_id,
            shareholder_id=body.shareholder_id,
            security_id=body.security_id,
            kind=body.kind,
            quantity=body.quantity,
            transaction_date=body.transaction_date,
            restriction_id=body.restriction_id,
            note=body.note,
            actor=body.actor,
        )
    )
    return _posting_response(result)


@router.post("/issuers/{issuer_id}/splits", response_model=SplitResponse, status_code=201)
def create_split(
    issuer_id: str,
    body: SplitRequestBody,
    orchestrator: SplitOrchestrator = Depends(get_split_orchestrator),
) -> SplitResponse:
    """Split units into class A shares and warrants/rights."""
    result = orchestrator.post_split(
        SplitRequest(
            issuer_id=issuer_id,
            shareholder_id=body.shareholder_id,
            quantity=body.quantity,
            transaction_date=body.transaction_date,
            base_security_id=body.base_security_id,
            note=body.note,
            restriction_id=body.restriction_id,
            actor=body.actor,
        )
    )
    return _split_response(result)


@router.post("/entries/{entry_id}/void", response_model=PostingResponse)
def void_entry(
    entry_id: str,
    body: Optional[VoidRequestBody] = None,
    service: PostingService = Depends(get_posting_service),
) -> PostingResponse:
    """Mark a ledger entry inactive."""
    result = service.void(entry_id, actor=body.actor if body else None)
    return _posting_response(result)


@router.get("/issuers/{issuer_id}/entries", response_model=EntryListResponse)
def list_entries(
    issuer_id: str,
    shareholder_id: str = Query(..., min_length=1),
    security_id: str = Query(..., min_length=1),
    as_of: Optional[date] = Query(None, description="Defaults to today (US/Eastern)"),
    include_voided: bool = Query(False),
    ledger: LedgerService = Depends(get_ledger_service),
) -> EntryListResponse:
    """Ledger history for one holder and security."""
    as_of_date = as_of or today_eastern()
    if include_voided:
        entries = ledger.history(issuer_id, shareholder_id, security_id, as_of_date)
    else:
        entries = ledger.query(issuer_id, shareholder_id, security_id, as_of_date)
    return EntryListResponse(
        entries=[EntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )


@router.get("/splits/{correlation_id}/entries", response_model=EntryListResponse)
def list_split_entries(
    correlation_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> EntryListResponse:
    """The legs of one split, debit first, voided or not."""
    entries = ledger.list_correlated(correlation_id)
    if not entries:
        raise NotFoundError("Split", correlation_id)
    return EntryListResponse(
        entries=[EntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )
