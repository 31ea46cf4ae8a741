from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager
from typing import TypeVar

from taskdesk.events import ChangeNotifier, Subscription
from taskdesk.models.task import Channel, ChangeEvent, Task
from taskdesk.observability import get_json_logger, get_metrics

R = TypeVar("R")

TaskObserver = Callable[[Task], None]


class TaskStore:
    """Pluggable task store interface.

    Concrete implementations keep tasks in insertion order, assign ids, and
    notify observers after every successful create/update/delete.
    """

    def create(self, description: str) -> Task:  # pragma: no cover - interface only
        raise NotImplementedError

    def get(self, task_id: int) -> Task | None:  # pragma: no cover - interface only
        raise NotImplementedError

    def update(
        self, task_id: int, description: str, completed: bool
    ) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError

    def delete(self, task_id: int) -> bool:  # pragma: no cover - interface only
        raise NotImplementedError

    def list_tasks(self) -> list[Task]:  # pragma: no cover - interface only
        raise NotImplementedError

    def for_each(self, action: Callable[[Task], object]) -> None:  # pragma: no cover
        raise NotImplementedError

    def map(self, selector: Callable[[Task], R]) -> list[R]:  # pragma: no cover
        raise NotImplementedError

    def on_created(self, observer: TaskObserver) -> Subscription:  # pragma: no cover
        raise NotImplementedError

    def on_updated(self, observer: TaskObserver) -> Subscription:  # pragma: no cover
        raise NotImplementedError

    def on_deleted(self, observer: TaskObserver) -> Subscription:  # pragma: no cover
        raise NotImplementedError


class InMemoryTaskStore(TaskStore):
    """Process-local task store.

    Data structures:
    - `_tasks`: list of frozen `Task` records in insertion order
    - `_next_id`: next id to issue; only ever grows, so deleted ids are never reused

    Every operation runs inside `lock` (a no-op context by default). Pass a
    `threading.RLock()` to share the store between threads; it must be re-entrant
    if observers call back into the store.
    """

    def __init__(
        self,
        *,
        notifier: ChangeNotifier | None = None,
        first_id: int = 1,
        lock: AbstractContextManager[object] | None = None,
    ) -> None:
        if first_id < 1:
            raise ValueError("first_id must be >= 1")
        self._tasks: list[Task] = []
        self._next_id = first_id
        self._notifier = notifier if notifier is not None else ChangeNotifier()
        self._lock: AbstractContextManager[object] = (
            lock if lock is not None else contextlib.nullcontext()
        )
        self._logger = get_json_logger("taskdesk.store")

    @property
    def notifier(self) -> ChangeNotifier:
        return self._notifier

    @property
    def next_id(self) -> int:
        return self._next_id

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.list_tasks())

    # helpers
    def _index_of(self, task_id: int) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def _committed(self, op: str, event: ChangeEvent) -> None:
        self._logger.debug(
            "task %s",
            event.channel,
            extra={"event": f"task_{event.channel}", "op": op, "task_id": event.task.id},
        )
        get_metrics().increment("task_ops", {"op": op})
        self._notifier.fire(event)

    # operations
    def create(self, description: str) -> Task:
        with self._lock:
            task = Task(id=self._next_id, description=description, completed=False)
            self._next_id += 1
            self._tasks.append(task)
            self._committed("create", ChangeEvent(channel="created", task=task))
            return task

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            idx = self._index_of(task_id)
            return self._tasks[idx] if idx is not None else None

    def update(self, task_id: int, description: str, completed: bool) -> bool:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return False
            updated = self._tasks[idx].model_copy(
                update={"description": description, "completed": bool(completed)}
            )
            self._tasks[idx] = updated
            self._committed("update", ChangeEvent(channel="updated", task=updated))
            return True

    def delete(self, task_id: int) -> bool:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return False
            removed = self._tasks.pop(idx)
            self._committed("delete", ChangeEvent(channel="deleted", task=removed))
            return True

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def for_each(self, action: Callable[[Task], object]) -> None:
        for task in self.list_tasks():
            action(task)

    def map(self, selector: Callable[[Task], R]) -> list[R]:
        return [selector(task) for task in self.list_tasks()]

    # subscriptions
    def _subscribe(self, channel: Channel, observer: TaskObserver) -> Subscription:
        if not callable(observer):
            raise ValueError("observer must be callable")

        def _deliver(event: ChangeEvent) -> None:
            observer(event.task)

        _deliver.__qualname__ = getattr(observer, "__qualname__", _deliver.__qualname__)
        return self._notifier.subscribe(channel, _deliver)

    def on_created(self, observer: TaskObserver) -> Subscription:
        return self._subscribe("created", observer)

    def on_updated(self, observer: TaskObserver) -> Subscription:
        return self._subscribe("updated", observer)

    def on_deleted(self, observer: TaskObserver) -> Subscription:
        return self._subscribe("deleted", observer)


__all__ = ["InMemoryTaskStore", "TaskObserver", "TaskStore"]
