"""Security and shareholder registration endpoints."""

from fastapi import APIRouter, Depends

from captable.api.deps import get_directory_service
from captable.api.schemas import (
    SecurityCreate,
    SecurityResponse,
    SecurityListResponse,
    ShareholderCreate,
    ShareholderResponse,
)
from captable.services import DirectoryService

router = APIRouter(prefix="/issuers/{issuer_id}", tags=["directory"])


@router.post("/securities", response_model=SecurityResponse, status_code=201)
def create_security(
    issuer_id: str,
    body: SecurityCreate,
    service: DirectoryService = Depends(get_directory_service),
) -> SecurityResponse:
    """Register a security class."""
    security = service.register_security(
        issuer_id=issuer_id,
        security_id=body.security_id,
        class_name=body.class_name,
        total_authorized_shares=body.total_authorized_shares,
    )
    return SecurityResponse.model_validate(security)


@router.get("/securities", response_model=SecurityListResponse)
def list_securities(
    issuer_id: str,
    service: DirectoryService = Depends(get_directory_service),
) -> SecurityListResponse:
    securities = service.list_securities(issuer_id)
    return SecurityListResponse(
        securities=[SecurityResponse.model_validate(s) for s in securities],
        count=len(securities),
    )


@router.post("/shareholders", response_model=ShareholderResponse, status_code=201)
def create_shareholder(
    issuer_id: str,
    body: ShareholderCreate,
    service: DirectoryService = Depends(get_directory_service),
) -> ShareholderResponse:
    """Register a holder of record."""
    shareholder = service.register_shareholder(
        issuer_id=issuer_id,
        name=body.name,
        shareholder_id=body.shareholder_id,
    )
    return ShareholderResponse.model_validate(shareholder)


@router.get("/securities/{security_id}", response_model=SecurityResponse)
def get_security(
    issuer_id: str,
    security_id: str,
    service: DirectoryService = Depends(get_directory_service),
) -> SecurityResponse:
    return SecurityResponse.model_validate(service.get_security(issuer_id, security_id))


@router.get("/shareholders/{shareholder_id}", response_model=ShareholderResponse)
def get_shareholder(
    issuer_id: str,
    shareholder_id: str,
    service: DirectoryService = Depends(get_directory_service),
) -> ShareholderResponse:
    return ShareholderResponse.model_validate(service.get_shareholder(issuer_id, shareholder_id))
