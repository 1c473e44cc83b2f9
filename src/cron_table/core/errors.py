# src/cron_table/core/errors.py

from __future__ import annotations


class TaskAlreadyExistsError(ValueError):
    """register() was called with an id that already names a live task."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task id [{task_id}] already exists")
        self.task_id = task_id


class DispatchRejectedError(RuntimeError):
    """The executor could not accept a dispatch record without blocking."""
