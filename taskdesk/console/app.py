from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from taskdesk.events import Subscription
from taskdesk.models.task import Task
from taskdesk.store import TaskStore

from .parsing import parse_completed, parse_task_id

MENU = (
    "Enter 'A' to add a task, 'U' to update a task, 'D' to delete a task, "
    "'V' to view tasks, or 'E' to exit:"
)

ANSI_RESET = "\033[0m"
ANSI_COLORS = {
    "green": "\033[32m",
    "blue": "\033[34m",
    "cyan": "\033[96m",
    "dark_cyan": "\033[36m",
    "yellow": "\033[33m",
    "red": "\033[31m",
}


def format_task(task: Task) -> str:
    return f"ID: {task.id}, Description: {task.description}, Completed: {task.completed}"


class TaskConsole:
    """Interactive A/U/D/V/E menu over a task store.

    Reads one line per prompt from `stdin` (end of input behaves like `E`) and
    writes prompts, listings and change notifications to `stdout`. Change
    notifications are printed by observers registered in `attach()`, in the
    colour of the command that triggered them.
    """

    def __init__(
        self,
        store: TaskStore,
        *,
        stdin: Iterable[str] | None = None,
        stdout: TextIO | None = None,
        color: bool = False,
    ) -> None:
        self._store = store
        self._lines: Iterator[str] = iter(stdin if stdin is not None else sys.stdin)
        self._out = stdout if stdout is not None else sys.stdout
        self._color = color
        self._tint: str | None = None
        self._subscriptions: list[Subscription] = []

    # ----- output helpers -----
    def _println(self, text: str, color: str | None = None) -> None:
        tint = color or self._tint
        if self._color and tint:
            text = f"{ANSI_COLORS[tint]}{text}{ANSI_RESET}"
        self._out.write(text + "\n")
        self._out.flush()

    def _readline(self) -> str | None:
        line = next(self._lines, None)
        if line is None:
            return None
        return line.rstrip("\r\n")

    # ----- observers -----
    def _on_created(self, task: Task) -> None:
        self._println(f"Task created: {task.description}")

    def _on_updated(self, task: Task) -> None:
        self._println(f"Task updated: {task.description}, Completed: {task.completed}")

    def _on_deleted(self, task: Task) -> None:
        self._println(f"Task deleted: {task.description}")

    def attach(self) -> None:
        if self._subscriptions:
            return
        self._subscriptions = [
            self._store.on_created(self._on_created),
            self._store.on_updated(self._on_updated),
            self._store.on_deleted(self._on_deleted),
        ]

    def detach(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions = []

    # ----- commands -----
    def _add(self) -> bool:
        self._println("Enter task description:", "green")
        description = self._readline()
        if description is None:
            return False
        self._tint = "cyan"
        self._store.create(description)
        return True

    def _update(self) -> bool:
        self._println("Enter task ID to update:", "yellow")
        raw_id = self._readline()
        if raw_id is None:
            return False
        task_id = parse_task_id(raw_id)
        if task_id is None:
            self._println("Invalid task ID.", "red")
            return True
        self._println("Enter new task description:", "yellow")
        description = self._readline()
        if description is None:
            return False
        self._println("Enter new task completion status (true/false):", "yellow")
        raw_completed = self._readline()
        if raw_completed is None:
            return False
        completed = parse_completed(raw_completed)
        if completed is None:
            self._println("Invalid completion status.", "red")
            return True
        self._tint = "green"
        if not self._store.update(task_id, description, completed):
            self._println(f"Task {task_id} not found.", "red")
        return True

    def _delete(self) -> bool:
        self._println("Enter task ID to delete:")
        raw_id = self._readline()
        if raw_id is None:
            return False
        task_id = parse_task_id(raw_id)
        if task_id is None:
            self._println("Invalid task ID.")
            return True
        self._tint = "red"
        if not self._store.delete(task_id):
            self._println(f"Task {task_id} not found.", "red")
        return True

    def _view(self) -> bool:
        self._tint = "dark_cyan"
        self._println("Tasks:")
        self._store.for_each(lambda task: self._println(format_task(task)))
        return True

    def handle(self, command: str) -> bool:
        """Run one menu command. Returns False when the loop should stop."""
        cmd = command.strip().upper()
        try:
            if cmd == "A":
                return self._add()
            if cmd == "U":
                return self._update()
            if cmd == "D":
                return self._delete()
            if cmd == "V":
                return self._view()
            if cmd == "E":
                return False
            self._println("Invalid input.")
            return True
        finally:
            self._tint = None

    def run(self) -> int:
        self.attach()
        try:
            while True:
                self._println(MENU)
                line = self._readline()
                if line is None or not self.handle(line):
                    break
        finally:
            self.detach()
        return 0


__all__ = ["ANSI_COLORS", "ANSI_RESET", "MENU", "TaskConsole", "format_task"]
