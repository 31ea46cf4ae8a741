from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Channel = Literal["created", "updated", "deleted"]

CHANNELS: tuple[Channel, ...] = ("created", "updated", "deleted")


class Task(BaseModel):
    """A single task owned by a task store.

    - `id` is assigned by the store and never changes
    - Instances are frozen; the store swaps in a new instance on update
    """

    model_config = ConfigDict(frozen=True)

    id: int
    description: str
    completed: bool = False


class ChangeEvent(BaseModel):
    """What changed: the channel that fired and the task involved.

    For `deleted` the task carries its data as it was before removal.
    """

    model_config = ConfigDict(frozen=True)

    channel: Channel
    task: Task


__all__ = ["CHANNELS", "Channel", "ChangeEvent", "Task"]
