"""
Tests for the notification channel.
"""

import pytest

from notifications.channel import Notification, NotificationChannel, NotificationVariant


class TestNotification:
    def test_success_and_failure_factories(self):
        ok = Notification.success("Product created successfully")
        bad = Notification.failure("Failed to create product")

        assert ok.title == "Success"
        assert ok.variant is NotificationVariant.DEFAULT
        assert bad.title == "Error"
        assert bad.variant is NotificationVariant.DESTRUCTIVE

    def test_to_dict(self):
        payload = Notification.failure("Failed to fetch products").to_dict()
        assert payload["title"] == "Error"
        assert payload["description"] == "Failed to fetch products"
        assert payload["variant"] == "destructive"
        assert "created_at" in payload


class TestNotificationChannel:
    def test_drain_returns_pending_once(self):
        channel = NotificationChannel()
        channel.emit(Notification.success("one"))
        channel.emit(Notification.success("two"))

        assert [n.description for n in channel.drain()] == ["one", "two"]
        assert channel.drain() == []
        assert len(channel.history) == 2

    def test_history_is_bounded(self):
        channel = NotificationChannel(history_size=3)
        for i in range(5):
            channel.emit(Notification.success(str(i)))
        assert [n.description for n in channel.history] == ["2", "3", "4"]

    def test_history_size_must_be_positive(self):
        with pytest.raises(ValueError, match="history_size"):
            NotificationChannel(history_size=0)

    def test_subscribe_and_unsubscribe(self):
        channel = NotificationChannel()
        received: list[str] = []
        unsubscribe = channel.subscribe(lambda n: received.append(n.description))

        channel.emit(Notification.success("first"))
        unsubscribe()
        channel.emit(Notification.success("second"))

        assert received == ["first"]

    def test_failing_listener_does_not_block_delivery(self):
        channel = NotificationChannel()
        received: list[str] = []

        def broken(notification: Notification) -> None:
            raise RuntimeError("listener crashed")

        channel.subscribe(broken)
        channel.subscribe(lambda n: received.append(n.description))
        channel.emit(Notification.success("still delivered"))

        assert received == ["still delivered"]
        assert [n.description for n in channel.drain()] == ["still delivered"]
