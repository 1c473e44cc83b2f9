# src/cron_table/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.ports import RecurrencePattern


@dataclass(slots=True, frozen=True)
class TaskEntry:
    """
    One row of the task table.

    Frozen on purpose: a pattern update swaps the whole row, so a reader
    can never see an id paired with somebody else's pattern or body.
    """

    task_id: str
    pattern: RecurrencePattern
    task: Any


@dataclass(slots=True, frozen=True)
class CronTask:
    """
    Dispatch record handed to the executor when a pattern matches.

    The table decides *whether* a task is due.
    The executor decides *when/where* run() is called.
    """

    task_id: str
    pattern: RecurrencePattern
    task: Any

    @classmethod
    def from_entry(cls, entry: TaskEntry) -> CronTask:
        return cls(task_id=entry.task_id, pattern=entry.pattern, task=entry.task)

    def run(self) -> None:
        """Invoke the body: task.execute() if present, else task()."""
        execute = getattr(self.task, "execute", None)
        if callable(execute):
            execute()
            return
        if callable(self.task):
            self.task()
            return
        raise TypeError(f"Task [{self.task_id}] body is neither callable nor has execute()")
