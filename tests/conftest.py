# tests/conftest.py

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from cron_table.core.state import AppState
from cron_table.tasks.task_table import TaskTable

from .fakes import RecordingExecutor


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and task_api.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="cron-table-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        timezone="UTC",
        match_second=False,
        executor_workers=2,
        executor_max_pending=0,
    )


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def table(executor: RecordingExecutor) -> TaskTable:
    """TaskTable wired to a recording executor (nothing actually runs)."""
    return TaskTable(executor)


@pytest.fixture()
def state(settings: SimpleNamespace, executor: RecordingExecutor) -> AppState:
    """
    AppState wired with a recording executor.

    Both state.executor and the table's executor are the same fake,
    so dispatches are recorded instead of run.
    """
    return AppState(
        settings=settings,
        executor=executor,  # type: ignore[arg-type]
        table=TaskTable(executor),
    )


@pytest.fixture()
def restore_root_logging() -> Iterator[None]:
    """setup_logging replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        yield
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
        logging.captureWarnings(False)
