"""Outbound collaborator providers."""

from captable.providers.event_publisher import PostingEventPublisher
from captable.providers.logging_publisher import LoggingEventPublisher, RecordingEventPublisher

__all__ = [
    "PostingEventPublisher",
    "LoggingEventPublisher",
    "RecordingEventPublisher",
]
