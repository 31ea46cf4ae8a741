from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(slots=True)
class AppConfig:
    color: bool = True
    isolate_observers: bool = True
    first_id: int = 1
    log_level: str = "info"


def _read_bool(raw: str | None, default: bool) -> bool:
    value = (raw or "").strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default


def _read_first_id(raw: str | None) -> int:
    value = (raw or "").strip()
    try:
        parsed = int(value) if value else 1
    except ValueError:
        parsed = 1
    return parsed if parsed >= 1 else 1


def load_config(env: dict[str, str] | None = None) -> AppConfig:
    e: dict[str, Any] = dict(os.environ)
    if env:
        e.update(env)
    # NO_COLOR (https://no-color.org) wins over TASKDESK_COLOR when set to anything
    color = _read_bool(e.get("TASKDESK_COLOR"), True) and not e.get("NO_COLOR")
    return AppConfig(
        color=color,
        isolate_observers=_read_bool(e.get("TASKDESK_ISOLATE_OBSERVERS"), True),
        first_id=_read_first_id(e.get("TASKDESK_FIRST_ID")),
        log_level=(e.get("LOG_LEVEL") or "info").strip().lower() or "info",
    )


__all__ = ["AppConfig", "load_config"]
