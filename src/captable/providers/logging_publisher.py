"""Default publisher that writes posting events to the application log."""

import logging

from captable.domain.views import PostingEvent

logger = logging.getLogger("captable.events")


class LoggingEventPublisher:
    """Publisher used when no audit/notification collaborator is wired in."""

    def publish(self, event: PostingEvent) -> None:
        legs = ", ".join(f"{leg.security_id}:{leg.signed_quantity:+d}" for leg in event.legs)
        logger.info(
            "%s %s issuer=%s shareholder=%s date=%s legs=[%s] actor=%s",
            event.event_type.value,
            event.kind,
            event.issuer_id,
            event.shareholder_id,
            event.transaction_date.isoformat(),
            legs,
            event.actor or "-",
        )


class RecordingEventPublisher:
    """Keeps events in memory; handy for embedding and for tests."""

    def __init__(self) -> None:
        self.events: list[PostingEvent] = []

    def publish(self, event: PostingEvent) -> None:
        self.events.append(event)
