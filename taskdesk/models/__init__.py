from __future__ import annotations

from .task import CHANNELS, Channel, ChangeEvent, Task

__all__ = ["CHANNELS", "Channel", "ChangeEvent", "Task"]
