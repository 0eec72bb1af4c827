"""Split configuration admin endpoints."""

from fastapi import APIRouter, Depends

from captable.api.deps import get_split_config_service
from captable.api.schemas import SplitConfigRequest, SplitConfigResponse
from captable.config.settings import get_settings
from captable.services import SplitConfigService

router = APIRouter(prefix="/issuers/{issuer_id}/split-config", tags=["split-config"])


@router.put("", response_model=SplitConfigResponse)
def put_split_config(
    issuer_id: str,
    body: SplitConfigRequest,
    service: SplitConfigService = Depends(get_split_config_service),
) -> SplitConfigResponse:
    """Create or replace the issuer's split ratios."""
    config = service.configure(
        issuer_id=issuer_id,
        class_a_ratio=body.class_a_ratio,
        secondary_ratio=body.secondary_ratio,
        secondary_type=body.secondary_type,
        trigger_kind=get_settings().split_trigger_kind,
    )
    return SplitConfigResponse.model_validate(config)


@router.get("", response_model=SplitConfigResponse)
def get_split_config(
    issuer_id: str,
    service: SplitConfigService = Depends(get_split_config_service),
) -> SplitConfigResponse:
    config = service.get(issuer_id, get_settings().split_trigger_kind)
    return SplitConfigResponse.model_validate(config)
