from __future__ import annotations

from .app import MENU, TaskConsole, format_task
from .parsing import parse_completed, parse_task_id

__all__ = ["MENU", "TaskConsole", "format_task", "parse_completed", "parse_task_id"]
