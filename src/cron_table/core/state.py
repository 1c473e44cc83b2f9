# src/cron_table/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_executor import TaskExecutor
from ..tasks.task_table import TaskTable


@dataclass
class AppState:
    # Settings kept on the state so helpers do not re-read global config.
    settings: Any

    executor: TaskExecutor
    table: TaskTable
