from __future__ import annotations

from .task_store import InMemoryTaskStore, TaskObserver, TaskStore

__all__ = ["InMemoryTaskStore", "TaskObserver", "TaskStore"]
