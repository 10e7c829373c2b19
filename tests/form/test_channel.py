"""Tests for NotificationChannel and Subscription."""

from __future__ import annotations

import pytest

from regform.domain.fields import FieldName
from regform.form.channel import NotificationChannel


class TestNotificationChannel:
    def test_delivers_field_to_subscriber(self) -> None:
        channel = NotificationChannel("value_changed")
        received: list[FieldName] = []
        channel.subscribe(received.append)
        channel.emit(FieldName.EMAIL)
        assert received == [FieldName.EMAIL]

    def test_registration_order(self) -> None:
        channel = NotificationChannel("c")
        calls: list[str] = []
        channel.subscribe(lambda f: calls.append("first"))
        channel.subscribe(lambda f: calls.append("second"))
        channel.subscribe(lambda f: calls.append("third"))
        channel.emit(FieldName.NAME)
        assert calls == ["first", "second", "third"]

    def test_same_callback_twice(self) -> None:
        channel = NotificationChannel("c")
        received: list[FieldName] = []
        channel.subscribe(received.append)
        channel.subscribe(received.append)
        channel.emit(FieldName.PHONE)
        assert received == [FieldName.PHONE, FieldName.PHONE]
        assert len(channel) == 2

    def test_cancel(self) -> None:
        channel = NotificationChannel("c")
        received: list[FieldName] = []
        sub = channel.subscribe(received.append)
        sub.cancel()
        sub.cancel()
        channel.emit(FieldName.NAME)
        assert received == []
        assert not sub.active
        assert len(channel) == 0

    def test_context_manager_cancels(self) -> None:
        channel = NotificationChannel("c")
        received: list[FieldName] = []
        with channel.subscribe(received.append):
            channel.emit(FieldName.NAME)
        channel.emit(FieldName.EMAIL)
        assert received == [FieldName.NAME]

    def test_unsubscribe_by_callback(self) -> None:
        channel = NotificationChannel("c")
        received: list[FieldName] = []
        channel.subscribe(received.append)
        channel.unsubscribe(received.append)
        channel.emit(FieldName.NAME)
        assert received == []

    def test_unsubscribe_unknown_raises(self) -> None:
        channel = NotificationChannel("c")
        with pytest.raises(ValueError, match="not subscribed"):
            channel.unsubscribe(print)

    def test_subscribe_during_emit_applies_next_time(self) -> None:
        channel = NotificationChannel("c")
        late: list[FieldName] = []

        def add_late(field: FieldName) -> None:
            channel.subscribe(late.append)

        channel.subscribe(add_late)
        channel.emit(FieldName.NAME)
        assert late == []
        channel.emit(FieldName.EMAIL)
        assert late == [FieldName.EMAIL]

    def test_subscriber_exception_propagates(self) -> None:
        channel = NotificationChannel("c")
        after: list[FieldName] = []

        def boom(field: FieldName) -> None:
            raise RuntimeError("observer failed")

        channel.subscribe(boom)
        channel.subscribe(after.append)
        with pytest.raises(RuntimeError, match="observer failed"):
            channel.emit(FieldName.NAME)
        assert after == []
