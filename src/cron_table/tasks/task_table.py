# src/cron_table/tasks/task_table.py

from __future__ import annotations

"""
Task table.

Associates a task id, a recurrence pattern and a task body, and on every
tick scans all rows to hand the due ones to the executor.

Concurrency:
- one reader/writer lock guards the whole row list
- register / unregister / update_pattern take the write side
- lookups, listings, render and evaluate_and_dispatch take the read side
- evaluate_and_dispatch holds the read side for the full scan, spawn calls included,
  so every tick sees one consistent table; spawn must therefore never block
"""

import logging
from collections.abc import Iterator
from dataclasses import replace
from typing import Any

from ..core.errors import TaskAlreadyExistsError
from ..core.ports import RecurrencePattern, TaskSpawner, TimeZoneLike
from ..core.rwlock import ReadWriteLock
from .task_models import CronTask, TaskEntry

logger = logging.getLogger(__name__)


class TaskTable:
    """Thread-safe, insertion-ordered table of (id, pattern, task) rows."""

    def __init__(self, executor: TaskSpawner) -> None:
        self._executor = executor
        self._lock = ReadWriteLock()
        self._entries: list[TaskEntry] = []

    # ---- low-level helpers (caller holds the lock) ----

    def _index_of(self, task_id: str) -> int:
        for i, entry in enumerate(self._entries):
            if entry.task_id == task_id:
                return i
        return -1

    def _entry_at(self, index: int) -> TaskEntry:
        # Negative positions are out of range, not "from the end".
        if index < 0 or index >= len(self._entries):
            raise IndexError(f"task position {index} out of range [0, {len(self._entries)})")
        return self._entries[index]

    # ---- write side ----

    def register(self, task_id: str, pattern: RecurrencePattern, task: Any) -> TaskTable:
        """
        Append a new row.

        Raises TaskAlreadyExistsError if task_id is already registered;
        the table is left untouched in that case.
        """
        with self._lock.write_locked():
            if self._index_of(task_id) >= 0:
                logger.warning("Task id [%s] already registered", task_id)
                raise TaskAlreadyExistsError(task_id)
            self._entries.append(TaskEntry(task_id=task_id, pattern=pattern, task=task))
            size = len(self._entries)
        logger.debug("Registered task [%s] pattern=[%s] size=%d", task_id, pattern, size)
        return self

    def unregister(self, task_id: str) -> bool:
        """Remove the row for task_id. Returns False if there was none."""
        with self._lock.write_locked():
            index = self._index_of(task_id)
            if index < 0:
                return False
            del self._entries[index]
            size = len(self._entries)
        logger.debug("Unregistered task [%s] size=%d", task_id, size)
        return True

    def update_pattern(self, task_id: str, pattern: RecurrencePattern) -> bool:
        """Replace the pattern of task_id, keeping id and body. Returns False if not found."""
        with self._lock.write_locked():
            index = self._index_of(task_id)
            if index < 0:
                return False
            self._entries[index] = replace(self._entries[index], pattern=pattern)
        logger.debug("Updated pattern of task [%s] to [%s]", task_id, pattern)
        return True

    # ---- read side: listings ----

    def list_ids(self) -> tuple[str, ...]:
        with self._lock.read_locked():
            return tuple(e.task_id for e in self._entries)

    def list_patterns(self) -> tuple[RecurrencePattern, ...]:
        with self._lock.read_locked():
            return tuple(e.pattern for e in self._entries)

    def list_tasks(self) -> tuple[Any, ...]:
        with self._lock.read_locked():
            return tuple(e.task for e in self._entries)

    def snapshot(self) -> tuple[tuple[str, ...], tuple[RecurrencePattern, ...], tuple[Any, ...]]:
        """ids, patterns and tasks taken under one read acquisition."""
        with self._lock.read_locked():
            entries = tuple(self._entries)
        return (
            tuple(e.task_id for e in entries),
            tuple(e.pattern for e in entries),
            tuple(e.task for e in entries),
        )

    # ---- read side: point lookups ----

    def get_task(self, task_id: str) -> Any | None:
        with self._lock.read_locked():
            index = self._index_of(task_id)
            return self._entries[index].task if index >= 0 else None

    def get_pattern(self, task_id: str) -> RecurrencePattern | None:
        with self._lock.read_locked():
            index = self._index_of(task_id)
            return self._entries[index].pattern if index >= 0 else None

    def get_task_at(self, index: int) -> Any:
        """Task at position index. Positions are only stable between writes."""
        with self._lock.read_locked():
            return self._entry_at(index).task

    def get_pattern_at(self, index: int) -> RecurrencePattern:
        with self._lock.read_locked():
            return self._entry_at(index).pattern

    def size(self) -> int:
        # list length is read atomically; writers change it in a single step.
        return len(self._entries)

    def is_empty(self) -> bool:
        return self.size() == 0

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, task_id: object) -> bool:
        with self._lock.read_locked():
            return isinstance(task_id, str) and self._index_of(task_id) >= 0

    # ---- evaluation ----

    def evaluate_and_dispatch(
        self,
        instant_ms: int,
        *,
        timezone: TimeZoneLike = None,
        match_second: bool = False,
    ) -> int:
        """
        Spawn every task whose pattern matches instant_ms, in insertion order.

        Holds the read lock for the whole pass. A matcher or spawn failure is
        logged and the scan moves on to the next row.
        Returns the number of dispatch records the executor accepted.
        """
        dispatched = 0
        with self._lock.read_locked():
            for entry in self._entries:
                try:
                    due = entry.pattern.match(timezone, instant_ms, match_second)
                except Exception:
                    logger.exception("Pattern match failed task_id=%s pattern=%s", entry.task_id, entry.pattern)
                    continue

                if not due:
                    continue

                try:
                    self._executor.spawn(CronTask.from_entry(entry))
                    dispatched += 1
                except Exception:
                    logger.exception("Dispatch failed task_id=%s", entry.task_id)

            scanned = len(self._entries)

        logger.debug("Tick at %d: scanned=%d dispatched=%d", instant_ms, scanned, dispatched)
        return dispatched

    # ---- diagnostics ----

    def render(self) -> str:
        """Human-readable dump, one "[id] [pattern] [task]" line per row. Not a stable format."""
        with self._lock.read_locked():
            entries = tuple(self._entries)
        return "".join(f"[{e.task_id}] [{e.pattern}] [{e.task}]\n" for e in entries)

    def __str__(self) -> str:
        return self.render()

    def __iter__(self) -> Iterator[TaskEntry]:
        """Iterate over a snapshot of the rows."""
        with self._lock.read_locked():
            entries = tuple(self._entries)
        return iter(entries)
