"""Posting event publisher protocol."""

from typing import Protocol

from captable.domain.views import PostingEvent


class PostingEventPublisher(Protocol):
    """
    Protocol for audit/notification sinks.

    Delivery is fire-and-forget from the engine's point of view: callers
    never wait on or fail because of a publisher.
    """

    def publish(self, event: PostingEvent) -> None:
        """Hand one event to the downstream collaborator."""
        ...
