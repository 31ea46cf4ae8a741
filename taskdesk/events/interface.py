from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from taskdesk.models.task import Channel, ChangeEvent

EventObserver = Callable[[ChangeEvent], None]


@dataclass(slots=True, eq=False)
class Subscription:
    """Handle returned by `Notifier.subscribe`.

    Calling `unsubscribe()` removes exactly this registration; repeated calls are no-ops.
    """

    channel: Channel
    observer: EventObserver
    _notifier: Notifier | None = field(default=None, repr=False)

    @property
    def active(self) -> bool:
        return self._notifier is not None

    def unsubscribe(self) -> bool:
        notifier = self._notifier
        if notifier is None:
            return False
        self._notifier = None
        return notifier.unsubscribe(self)


class Notifier(Protocol):
    """Minimal synchronous change-notification interface."""

    def subscribe(self, channel: Channel, observer: EventObserver) -> Subscription:
        """Register an observer on a channel. Returns a handle for unregistration."""

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove one registration. Returns False if it was already gone."""

    def fire(self, event: ChangeEvent) -> None:
        """Invoke every observer on `event.channel`, in registration order."""


__all__ = ["EventObserver", "Notifier", "Subscription"]
