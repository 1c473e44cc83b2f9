# src/cron_table/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task table.

The table depends on Protocols instead of concrete implementations.
This keeps the cron parser and the executor swappable and makes testing easier.
"""

from datetime import tzinfo
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import CronTask

TimeZoneLike = tzinfo | str | None
# None means "matcher default" (UTC for CronPattern), str is an IANA zone name.


class RecurrencePattern(Protocol):
    """Opaque schedule descriptor: decides whether an instant is due."""

    def match(self, timezone: TimeZoneLike, instant_ms: int, match_second: bool) -> bool: ...


class TaskBody(Protocol):
    """Unit of work. Plain callables are accepted as well (see CronTask.run)."""

    def execute(self) -> None: ...


class TaskSpawner(Protocol):
    """
    Executor-side port: accepts a dispatch record and runs it elsewhere.

    spawn() must not block. If it can not accept the record right away it must
    raise (DispatchRejectedError) instead of waiting.
    """

    def spawn(self, task: CronTask) -> None: ...
