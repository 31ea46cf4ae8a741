from __future__ import annotations

from .interface import EventObserver, Notifier, Subscription
from .notifier import ChangeNotifier

__all__ = ["ChangeNotifier", "EventObserver", "Notifier", "Subscription"]
