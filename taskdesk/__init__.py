from __future__ import annotations

from .events import ChangeNotifier, Subscription
from .models import Channel, ChangeEvent, Task
from .store import InMemoryTaskStore, TaskStore

__all__ = [
    "ChangeEvent",
    "ChangeNotifier",
    "Channel",
    "InMemoryTaskStore",
    "Subscription",
    "Task",
    "TaskStore",
]
