"""View models for service outputs."""

from captable.domain.views.posting import (
    RefreshReport,
    PostingResult,
    SplitSecurities,
    SplitResult,
    EventLeg,
    PostingEvent,
    LegQuantities,
)

__all__ = [
    "RefreshReport",
    "PostingResult",
    "SplitSecurities",
    "SplitResult",
    "EventLeg",
    "PostingEvent",
    "LegQuantities",
]
