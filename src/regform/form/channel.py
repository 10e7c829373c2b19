"""Synchronous notification channels.

A channel is a publish point a UI (or test) subscribes to.  Emitting
delivers only the changed field's identifier; subscribers pull the new
state back through the form's accessors.

Delivery is synchronous and in registration order.  A subscriber that
raises stops delivery and the exception reaches whoever emitted.
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

from regform.domain.fields import FieldName

Listener = Callable[[FieldName], object]


class Subscription:
    """Handle returned by :meth:`NotificationChannel.subscribe`.

    ``cancel()`` is idempotent.  Also usable as a context manager that
    cancels on exit.
    """

    __slots__ = ("_active", "_channel", "callback")

    def __init__(self, channel: NotificationChannel, callback: Listener) -> None:
        self._channel = channel
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop receiving notifications."""
        if not self._active:
            return
        self._active = False
        self._channel._remove(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.cancel()


class NotificationChannel:
    """Ordered list of listeners for one kind of change."""

    __slots__ = ("_subscriptions", "name")

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscriptions: list[Subscription] = []

    def subscribe(self, callback: Listener) -> Subscription:
        """Register *callback*; it is called after all earlier subscribers."""
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, callback: Listener) -> None:
        """Cancel the earliest active subscription of *callback*.

        Raises:
            ValueError: If *callback* is not subscribed.
        """
        for subscription in self._subscriptions:
            if subscription.callback == callback:
                subscription.cancel()
                return
        raise ValueError(f"{callback!r} is not subscribed to {self.name!r}")

    def emit(self, field: FieldName) -> None:
        """Deliver *field* to every subscriber.

        Iterates a snapshot, so subscriptions changed during delivery take
        effect from the next emit.
        """
        for subscription in list(self._subscriptions):
            subscription.callback(field)

    def _remove(self, subscription: Subscription) -> None:
        self._subscriptions.remove(subscription)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def __repr__(self) -> str:
        return f"NotificationChannel({self.name!r}, subscribers={len(self)})"
