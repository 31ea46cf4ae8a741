from __future__ import annotations

import threading

import pytest

from taskdesk.models.task import Task
from taskdesk.observability import get_metrics
from taskdesk.store import InMemoryTaskStore


def test_create_assigns_increasing_unique_ids(store: InMemoryTaskStore) -> None:
    ids = [store.create(f"task {i}").id for i in range(5)]
    assert ids == [1, 2, 3, 4, 5]
    assert len(set(ids)) == len(ids)


def test_create_then_list_ends_with_new_task(store: InMemoryTaskStore) -> None:
    store.create("first")
    created = store.create("")

    last = store.list_tasks()[-1]
    assert last == created
    assert last.description == ""
    assert last.completed is False


def test_list_preserves_insertion_order(store: InMemoryTaskStore) -> None:
    for name in ("c", "a", "b"):
        store.create(name)
    assert [t.description for t in store.list_tasks()] == ["c", "a", "b"]


def test_list_is_a_snapshot(store: InMemoryTaskStore) -> None:
    store.create("keep me")
    snapshot = store.list_tasks()
    snapshot.clear()
    snapshot.append(Task(id=99, description="intruder"))

    assert [t.id for t in store.list_tasks()] == [1]
    assert store.get(99) is None


def test_update_changes_only_target(store: InMemoryTaskStore) -> None:
    a = store.create("a")
    b = store.create("b")

    assert store.update(a.id, "a2", True) is True

    tasks = store.list_tasks()
    assert len(tasks) == 2
    assert tasks[0] == Task(id=a.id, description="a2", completed=True)
    assert tasks[1] == b
    # previously returned instance is unaffected
    assert a.description == "a"


def test_update_and_delete_unknown_id_are_noops(store: InMemoryTaskStore) -> None:
    store.create("only")
    before = store.list_tasks()

    assert store.update(42, "x", True) is False
    assert store.delete(42) is False

    assert store.list_tasks() == before
    assert get_metrics().value("task_ops", {"op": "update"}) == 0
    assert get_metrics().value("task_ops", {"op": "delete"}) == 0


def test_delete_retires_id(store: InMemoryTaskStore) -> None:
    store.create("a")
    b = store.create("b")

    assert store.delete(b.id) is True
    assert len(store) == 1
    assert store.get(b.id) is None

    c = store.create("c")
    assert c.id == 3
    assert store.next_id == 4


def test_ids_not_reused_after_deleting_everything(store: InMemoryTaskStore) -> None:
    for i in range(3):
        store.create(str(i))
    for t in store.list_tasks():
        store.delete(t.id)
    assert store.list_tasks() == []
    assert store.create("again").id == 4


def test_get_returns_optional(store: InMemoryTaskStore) -> None:
    t = store.create("find me")
    assert store.get(t.id) == t
    assert store.get(t.id + 1) is None


def test_for_each_visits_in_order(store: InMemoryTaskStore) -> None:
    for name in ("x", "y", "z"):
        store.create(name)
    seen: list[int] = []
    store.for_each(lambda t: seen.append(t.id))
    assert seen == [1, 2, 3]


def test_for_each_tolerates_mutation_from_action(store: InMemoryTaskStore) -> None:
    store.create("x")
    store.create("y")
    store.for_each(lambda t: store.delete(t.id))
    assert store.list_tasks() == []


def test_map_projects_in_order(store: InMemoryTaskStore) -> None:
    store.create("buy milk")
    store.create("write docs")
    assert store.map(lambda t: t.description) == ["buy milk", "write docs"]
    assert store.map(lambda t: (t.id, t.completed)) == [(1, False), (2, False)]


def test_map_on_empty_store(store: InMemoryTaskStore) -> None:
    assert store.map(lambda t: t.id) == []


def test_first_id_is_configurable() -> None:
    s = InMemoryTaskStore(first_id=100)
    assert s.create("a").id == 100
    assert s.create("b").id == 101


def test_first_id_must_be_positive() -> None:
    with pytest.raises(ValueError):
        InMemoryTaskStore(first_id=0)


def test_successful_ops_are_counted(store: InMemoryTaskStore) -> None:
    t = store.create("a")
    store.update(t.id, "b", False)
    store.delete(t.id)
    m = get_metrics()
    assert m.value("task_ops", {"op": "create"}) == 1
    assert m.value("task_ops", {"op": "update"}) == 1
    assert m.value("task_ops", {"op": "delete"}) == 1


def test_reference_scenario(store: InMemoryTaskStore) -> None:
    milk = store.create("buy milk")
    assert (milk.id, milk.completed) == (1, False)
    draft = store.create("write spec")
    assert draft.id == 2

    assert store.update(1, "buy milk and eggs", True) is True
    assert store.list_tasks()[0] == Task(id=1, description="buy milk and eggs", completed=True)

    assert store.delete(2) is True
    assert [t.id for t in store.list_tasks()] == [1]

    before = store.list_tasks()
    assert store.delete(2) is False
    assert store.list_tasks() == before


class _CountingLock:
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.entered = 0
        self.depth = 0

    def __enter__(self) -> _CountingLock:
        self._lock.acquire()
        self.entered += 1
        self.depth += 1
        return self

    def __exit__(self, *exc: object) -> None:
        self.depth -= 1
        self._lock.release()


def test_lock_held_through_notification() -> None:
    lock = _CountingLock()
    s = InMemoryTaskStore(lock=lock)
    depths: list[int] = []
    s.on_created(lambda t: depths.append(lock.depth))

    s.create("a")

    assert depths == [1]
    assert lock.depth == 0
    assert lock.entered >= 1


def test_reentrant_lock_allows_observer_to_read_store() -> None:
    s = InMemoryTaskStore(lock=threading.RLock())
    seen: list[int] = []
    s.on_created(lambda t: seen.append(len(s.list_tasks())))
    s.create("a")
    s.create("b")
    assert seen == [1, 2]


def test_concurrent_creates_with_lock_keep_ids_unique() -> None:
    s = InMemoryTaskStore(lock=threading.RLock())

    def worker() -> None:
        for _ in range(50):
            s.create("w")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    ids = s.map(lambda t: t.id)
    assert len(ids) == 200
    assert len(set(ids)) == 200
    assert ids == sorted(ids)
