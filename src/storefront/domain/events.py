"""Domain events handed to the notification collaborator.

The core only announces that something happened; formatting and
delivering the actual email/SMS/chat message is the publisher's concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class OrderCreated:
    name = "order_created"

    order_id: int
    order_number: str
    customer_id: str
    total: str
    payment_method: str
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class StatusChanged:
    name = "status_changed"

    order_id: int
    old_status: str
    new_status: str
    changed_by: str
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


DomainEvent = OrderCreated | StatusChanged


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """Hand an event to the notification collaborator."""
