# src/cron_table/tasks/task_api.py

from __future__ import annotations

import logging
import time
from typing import Any

from ..core.state import AppState
from ..pattern.cron_pattern import CronPattern

logger = logging.getLogger(__name__)


def schedule(state: AppState, task_id: str, expression: str, task: Any) -> CronPattern:
    """
    Convenience helper: parse a cron expression and register task under task_id.
    Raises ValueError for a bad expression, TaskAlreadyExistsError for a taken id.
    """
    pattern = CronPattern(expression)
    state.table.register(task_id, pattern, task)
    logger.info("Scheduled task [%s] at [%s]", task_id, pattern)
    return pattern


def reschedule(state: AppState, task_id: str, expression: str) -> bool:
    """Replace the pattern of task_id. Returns False if the task is not registered."""
    pattern = CronPattern(expression)
    updated = state.table.update_pattern(task_id, pattern)
    if updated:
        logger.info("Rescheduled task [%s] to [%s]", task_id, pattern)
    return updated


def run_due_tasks(state: AppState, now_ms: int | None = None) -> int:
    """
    One tick: dispatch every task due at now_ms (default: wall clock),
    using the timezone and granularity from settings.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    return state.table.evaluate_and_dispatch(
        now_ms,
        timezone=getattr(state.settings, "timezone", None),
        match_second=bool(getattr(state.settings, "match_second", False)),
    )
