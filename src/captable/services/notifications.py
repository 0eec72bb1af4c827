"""Fire-and-forget dispatch of posting events."""

import logging

from captable.core.timezone import now_eastern
from captable.domain.views import PostingEvent
from captable.providers import PostingEventPublisher

logger = logging.getLogger(__name__)


def publish_safely(publisher: PostingEventPublisher, event: PostingEvent) -> None:
    """
    Hand an event to the publisher without letting it affect the posting.

    The posting has already committed; a failing audit or notification sink
    is logged and otherwise ignored.
    """
    if event.occurred_at_est is None:
        event.occurred_at_est = now_eastern()
    try:
        publisher.publish(event)
    except Exception:
        logger.warning(
            "Event publisher failed for %s on issuer %s",
            event.event_type.value, event.issuer_id,
            exc_info=True,
        )
