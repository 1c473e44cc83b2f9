# src/cron_table/tasks/task_executor.py

from __future__ import annotations

import logging
import queue
import threading

from ..core.errors import DispatchRejectedError
from .task_models import CronTask

logger = logging.getLogger(__name__)


class TaskExecutor:
    """
    Default executor: a work channel drained by worker threads.

    Design goals:
    - spawn() never blocks, so the table can call it while holding its read lock.
    - A bounded channel rejects instead of applying backpressure.
    - A failing task body is logged and does not take its worker down.

    Notes:
    - max_pending=0 means an unbounded channel.
    - Records spawned before start() wait in the channel until workers run.
    """

    def __init__(self, *, workers: int = 4, max_pending: int = 0, name: str = "cron-executor") -> None:
        self._workers_count = max(1, int(workers))
        self._name = name

        self._queue: "queue.Queue[CronTask | None]" = queue.Queue(maxsize=max(0, int(max_pending)))
        self._workers: list[threading.Thread] = []

        self._state_lock = threading.Lock()
        self._started = False
        self._stop_requested = False

    def _work(self) -> None:
        logger.debug("Executor worker started.")

        while True:
            item = self._queue.get()
            try:
                if item is None:
                    logger.debug("Executor worker received stop signal.")
                    return

                try:
                    item.run()
                except Exception:
                    logger.exception("Task execution failed task_id=%s", item.task_id)

            finally:
                self._queue.task_done()

    def start(self) -> None:
        """Start the worker threads (no-op if already started or shut down)."""
        with self._state_lock:
            if self._started or self._stop_requested:
                return
            self._started = True

            for i in range(self._workers_count):
                t = threading.Thread(target=self._work, daemon=True, name=f"{self._name}-{i}")
                t.start()
                self._workers.append(t)

        logger.info("Executor started (workers=%d, max_pending=%d).", self._workers_count, self._queue.maxsize)

    def spawn(self, task: CronTask) -> None:
        """Queue a dispatch record. Raises DispatchRejectedError instead of blocking."""
        # Under the state lock so nothing lands behind the shutdown sentinels.
        with self._state_lock:
            if self._stop_requested:
                raise DispatchRejectedError(f"executor is shut down, task [{task.task_id}] rejected")
            try:
                self._queue.put_nowait(task)
            except queue.Full:
                raise DispatchRejectedError(
                    f"executor channel is full ({self._queue.maxsize}), task [{task.task_id}] rejected"
                ) from None

    def pending(self) -> int:
        """Records queued and not yet picked up by a worker (approximate)."""
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._started and not self._stop_requested

    def wait_all(self) -> None:
        """Block until all queued records are processed (no-op if never started)."""
        if not self._started:
            return
        self._queue.join()

    def shutdown(self, timeout: float = 2.0) -> None:
        """Drain the channel, then stop the workers. Safe to call more than once."""
        with self._state_lock:
            if self._stop_requested:
                return
            self._stop_requested = True
            started = self._started

        if not started:
            logger.info("Executor shut down before start (%d records dropped).", self._queue.qsize())
            return

        logger.info("Stopping executor...")
        # Blocking put is fine here: workers keep draining until they see a sentinel.
        for _ in self._workers:
            self._queue.put(None)
        self._queue.join()

        for t in self._workers:
            t.join(timeout=timeout)
            if t.is_alive():
                logger.warning("Executor worker %s did not stop cleanly", t.name)

        logger.info("Executor stopped.")
