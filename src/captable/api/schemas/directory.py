"""Pydantic schemas for security and shareholder endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class SecurityCreate(BaseModel):
    """Request schema for registering a security."""

    security_id: str = Field(..., min_length=1, max_length=50, description="CUSIP-style code")
    class_name: str = Field(..., min_length=1, max_length=255, description="e.g. 'Units', 'Class A Ordinary Shares'")
    total_authorized_shares: Optional[int] = Field(default=None, ge=0)


class SecurityResponse(BaseModel):
    model_config = {"from_attributes": True}

    issuer_id: str
    security_id: str
    class_name: str
    total_authorized_shares: Optional[int] = None


class SecurityListResponse(BaseModel):
    securities: list[SecurityResponse]
    count: int


class ShareholderCreate(BaseModel):
    """Request schema for registering a shareholder."""

    name: str = Field(..., min_length=1, max_length=255)
    shareholder_id: Optional[str] = Field(default=None, max_length=100)


class ShareholderResponse(BaseModel):
    model_config = {"from_attributes": True}

    shareholder_id: str
    issuer_id: str
    name: str
