"""
cron_table: the task table of a cron-style scheduler.

Register (id, pattern, task) rows, and on every tick hand the rows whose
pattern matches to an executor.
"""

from .core.errors import DispatchRejectedError, TaskAlreadyExistsError
from .pattern.cron_pattern import CronPattern
from .tasks.task_executor import TaskExecutor
from .tasks.task_models import CronTask, TaskEntry
from .tasks.task_table import TaskTable

__all__ = [
    "CronPattern",
    "CronTask",
    "DispatchRejectedError",
    "TaskAlreadyExistsError",
    "TaskEntry",
    "TaskExecutor",
    "TaskTable",
]
