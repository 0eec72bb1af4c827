"""Pydantic schemas for split configuration endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from captable.core.exceptions import ValidationError
from captable.domain.models.enums import SplitSecurityType, TransactionKind
from captable.services.split_config_service import parse_ratio


class SplitConfigRequest(BaseModel):
    """Request schema for creating or replacing an issuer's split ratios."""

    class_a_ratio: Decimal = Field(..., ge=0, description='Class A shares per unit, e.g. "1" or "1/3"')
    secondary_ratio: Decimal = Field(..., ge=0, description="Warrants or rights per unit")
    secondary_type: SplitSecurityType = Field(default=SplitSecurityType.WARRANT)

    @field_validator("class_a_ratio", "secondary_ratio", mode="before")
    @classmethod
    def parse_ratio_text(cls, v, info):
        try:
            return parse_ratio(info.field_name, v)
        except ValidationError as exc:
            raise ValueError(exc.message)


class SplitConfigResponse(BaseModel):
    model_config = {"from_attributes": True}

    issuer_id: str
    trigger_kind: TransactionKind
    class_a_ratio: Decimal
    secondary_ratio: Decimal
    secondary_type: SplitSecurityType
    updated_at_est: Optional[datetime] = None
