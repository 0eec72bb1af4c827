"""Pydantic schemas for API request/response."""

from captable.api.schemas.posting import (
    PostingRequestBody,
    SplitRequestBody,
    VoidRequestBody,
    EntryResponse,
    SnapshotResponse,
    PostingResponse,
    SplitResponse,
    EntryListResponse,
)
from captable.api.schemas.position import (
    PositionResponse,
    HoldingItem,
    HoldingsResponse,
    OutstandingResponse,
)
from captable.api.schemas.split_config import SplitConfigRequest, SplitConfigResponse
from captable.api.schemas.directory import (
    SecurityCreate,
    SecurityResponse,
    SecurityListResponse,
    ShareholderCreate,
    ShareholderResponse,
)

__all__ = [
    "PostingRequestBody",
    "SplitRequestBody",
    "VoidRequestBody",
    "EntryResponse",
    "SnapshotResponse",
    "PostingResponse",
    "SplitResponse",
    "EntryListResponse",
    "PositionResponse",
    "HoldingItem",
    "HoldingsResponse",
    "OutstandingResponse",
    "SplitConfigRequest",
    "SplitConfigResponse",
    "SecurityCreate",
    "SecurityResponse",
    "SecurityListResponse",
    "ShareholderCreate",
    "ShareholderResponse",
]
