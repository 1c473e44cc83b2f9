# src/cron_table/bootstrap.py

"""
Bootstrap helpers.

This module is the "composition root":
- loads settings once,
- optionally configures logging from settings,
- checks the configured timezone before anything starts,
- builds the executor from settings and starts it,
- wires the task table to that executor,
- shuts everything down best-effort.
"""

from __future__ import annotations

import logging
from zoneinfo import ZoneInfoNotFoundError

from .config import get_settings
from .core.state import AppState
from .logging_setup import setup_logging
from .pattern.cron_pattern import resolve_timezone
from .tasks.task_executor import TaskExecutor
from .tasks.task_table import TaskTable

logger = logging.getLogger(__name__)


def _configure_logging(settings) -> None:
    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    if not isinstance(console_level, int):
        console_level = logging.INFO

    log_dir = getattr(settings, "log_dir", ".local/cron_table")
    setup_logging(log_dir=log_dir, console_level=console_level)


def _check_timezone(settings) -> None:
    """Fail fast on a bad zone name instead of failing every match on every tick."""
    name = getattr(settings, "timezone", None)
    try:
        resolve_timezone(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone '{name}' (set CRON_TABLE_TIMEZONE to an IANA zone name)") from e


def create_initial_state(
    *,
    settings=None,
    start_executor: bool = True,
    configure_logging: bool = False,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the package easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    configure_logging=True installs handlers from settings.log_level / settings.log_dir;
    leave it off when the host process owns logging.
    Raises ValueError if settings.timezone is not a known zone.
    """
    if settings is None:
        settings = get_settings()

    if configure_logging:
        _configure_logging(settings)

    _check_timezone(settings)

    executor = TaskExecutor(
        workers=getattr(settings, "executor_workers", 4),
        max_pending=getattr(settings, "executor_max_pending", 0),
        name=f"{getattr(settings, 'app_name', 'cron-table')}-executor",
    )
    if start_executor:
        executor.start()

    state = AppState(
        settings=settings,
        executor=executor,
        table=TaskTable(executor),
    )
    logger.info(
        "Task table ready (timezone=%s, match_second=%s).",
        getattr(settings, "timezone", "UTC"),
        getattr(settings, "match_second", False),
    )
    return state


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.executor.shutdown()
    except Exception:
        logger.exception("Executor shutdown failed.")
