from __future__ import annotations

from collections.abc import Generator

import pytest

from taskdesk.observability import reset_metrics
from taskdesk.store import InMemoryTaskStore


@pytest.fixture(autouse=True)
def _fresh_metrics() -> Generator[None, None, None]:
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer shell settings out of config and logging tests."""
    for name in (
        "TASKDESK_COLOR",
        "TASKDESK_ISOLATE_OBSERVERS",
        "TASKDESK_FIRST_ID",
        "NO_COLOR",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "LOG_MODULE_LEVELS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def store() -> InMemoryTaskStore:
    return InMemoryTaskStore()
