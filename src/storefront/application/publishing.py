"""Fire-and-forget hand-off of domain events to the notification collaborator."""

from __future__ import annotations

import structlog

from storefront.domain.events import DomainEvent, EventPublisher

logger = structlog.get_logger(__name__)


def publish_quietly(publisher: EventPublisher, event: DomainEvent) -> None:
    """Publish ``event``; a failing publisher is logged, never raised.

    The operation that produced the event is already committed when
    this runs.
    """
    try:
        publisher.publish(event)
    except Exception:
        logger.exception("Event publishing failed", event_name=event.name)
