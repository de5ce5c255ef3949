"""Outbox for the notification collaborator.

Events are appended as JSON lines to an outbox file that the
email/SMS/WhatsApp senders consume. Delivery is their business; the
core only records that a message is due.
"""

from __future__ import annotations

import fcntl
import json
from collections import Counter
from dataclasses import asdict
from pathlib import Path

import structlog

from storefront.domain.events import DomainEvent, EventPublisher

logger = structlog.get_logger(__name__)


class OutboxEventPublisher(EventPublisher):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    def publish(self, event: DomainEvent) -> None:
        record = {"event": event.name, **asdict(event)}
        record["occurred_at"] = event.occurred_at.isoformat()

        with self._file_path.open("a", encoding="utf-8") as fh:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
            try:
                fh.write(json.dumps(record) + "\n")
                fh.flush()
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)

        logger.info("Notification queued", event_name=event.name, order_id=event.order_id)

    def counts(self) -> dict[str, int]:
        """Number of queued events per event name."""
        if not self._file_path.exists():
            return {}
        lines = self._file_path.read_text(encoding="utf-8").splitlines()
        return dict(Counter(json.loads(line)["event"] for line in lines if line.strip()))
