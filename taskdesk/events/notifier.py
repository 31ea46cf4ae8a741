from __future__ import annotations

from taskdesk.models.task import CHANNELS, Channel, ChangeEvent
from taskdesk.observability import get_json_logger, get_metrics

from .interface import EventObserver, Notifier, Subscription


def _observer_name(observer: EventObserver) -> str:
    name = getattr(observer, "__qualname__", None) or getattr(observer, "__name__", None)
    return str(name) if name else type(observer).__name__


class ChangeNotifier(Notifier):
    """In-process notifier with one ordered observer list per channel.

    Observers selected for a firing are fixed when `fire` starts, so
    subscribing or unsubscribing from inside an observer only affects later firings.

    With `isolate_observers=True` (default) an exception from one observer is
    logged and counted, and the remaining observers still run. Otherwise the
    exception propagates to whoever fired the event.
    """

    def __init__(self, *, isolate_observers: bool = True) -> None:
        self._channels: dict[str, list[Subscription]] = {c: [] for c in CHANNELS}
        self._isolate = isolate_observers
        self._logger = get_json_logger("taskdesk.events")

    @property
    def isolate_observers(self) -> bool:
        return self._isolate

    def _require_channel(self, channel: str) -> list[Subscription]:
        subs = self._channels.get(channel)
        if subs is None:
            raise ValueError(f"unknown channel: {channel!r} (expected one of {', '.join(CHANNELS)})")
        return subs

    def subscribe(self, channel: Channel, observer: EventObserver) -> Subscription:
        if not callable(observer):
            raise ValueError("observer must be callable")
        subs = self._require_channel(channel)
        sub = Subscription(channel=channel, observer=observer, _notifier=self)
        subs.append(sub)
        self._logger.debug(
            "observer subscribed",
            extra={
                "event": "observer_subscribed",
                "channel": channel,
                "observer": _observer_name(observer),
            },
        )
        return sub

    def unsubscribe(self, subscription: Subscription) -> bool:
        subs = self._require_channel(subscription.channel)
        for i, existing in enumerate(subs):
            if existing is subscription:
                del subs[i]
                subscription._notifier = None
                return True
        return False

    def observer_count(self, channel: Channel) -> int:
        return len(self._require_channel(channel))

    def fire(self, event: ChangeEvent) -> None:
        for sub in list(self._require_channel(event.channel)):
            if not self._isolate:
                sub.observer(event)
                continue
            try:
                sub.observer(event)
            except Exception:
                self._logger.exception(
                    "observer failed",
                    extra={
                        "event": "observer_error",
                        "channel": event.channel,
                        "task_id": event.task.id,
                        "observer": _observer_name(sub.observer),
                    },
                )
                get_metrics().increment("observer_errors", {"channel": event.channel})


__all__ = ["ChangeNotifier"]
