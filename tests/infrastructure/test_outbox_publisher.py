"""Tests for the notification outbox."""

import json

from structlog.testing import capture_logs

from storefront.domain.events import OrderCreated, StatusChanged
from storefront.infrastructure.notifications.outbox_publisher import OutboxEventPublisher


class TestOutboxEventPublisher:

    def test_appends_json_lines(self, tmp_path):
        outbox = OutboxEventPublisher(tmp_path / "outbox.jsonl")
        outbox.publish(OrderCreated(1, "ORD-1", "c1", "INR 100.00", "cash_on_delivery"))
        outbox.publish(StatusChanged(1, "pending", "in_transit", "d1"))

        records = [json.loads(line) for line in (tmp_path / "outbox.jsonl").read_text().splitlines()]
        assert [r["event"] for r in records] == ["order_created", "status_changed"]
        assert records[0]["customer_id"] == "c1"
        assert records[1]["new_status"] == "in_transit"
        assert "T" in records[1]["occurred_at"]

    def test_counts(self, tmp_path):
        outbox = OutboxEventPublisher(tmp_path / "outbox.jsonl")
        assert outbox.counts() == {}
        outbox.publish(StatusChanged(1, "pending", "in_transit", "d1"))
        outbox.publish(StatusChanged(1, "in_transit", "delivered", "d1"))
        assert outbox.counts() == {"status_changed": 2}

    def test_logs_queued_notification(self, tmp_path):
        outbox = OutboxEventPublisher(tmp_path / "outbox.jsonl")
        with capture_logs() as logs:
            outbox.publish(StatusChanged(7, "pending", "cancelled", "a1"))
        assert logs[0]["event"] == "Notification queued"
        assert logs[0]["order_id"] == 7
