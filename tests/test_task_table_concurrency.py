# tests/test_task_table_concurrency.py

from __future__ import annotations

import threading
import time

from cron_table.tasks.task_models import CronTask
from cron_table.tasks.task_table import TaskTable

from .fakes import FakePattern


class OwnedPattern:
    """Always-due pattern that remembers which task id it was created for."""

    def __init__(self, owner: str, generation: int = 0) -> None:
        self.owner = owner
        self.generation = generation

    def match(self, timezone, instant_ms: int, match_second: bool) -> bool:
        return True

    def __str__(self) -> str:
        return f"{self.owner}#{self.generation}"


class CheckingExecutor:
    """Records alignment violations seen in dispatch records."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.count = 0
        self.violations: list[CronTask] = []

    def spawn(self, task: CronTask) -> None:
        ok = task.pattern.owner == task.task_id and task.task == f"body-{task.task_id}"
        with self.lock:
            self.count += 1
            if not ok:
                self.violations.append(task)


def test_concurrent_writers_and_evaluators_keep_rows_aligned() -> None:
    executor = CheckingExecutor()
    table = TaskTable(executor)
    errors: list[BaseException] = []
    stop = threading.Event()

    def writer(prefix: str) -> None:
        try:
            for i in range(200):
                tid = f"{prefix}-{i % 7}"
                if tid in table:
                    if i % 2:
                        table.update_pattern(tid, OwnedPattern(tid, i))
                    else:
                        table.unregister(tid)
                else:
                    # Each writer owns its prefix, so this id is free.
                    table.register(tid, OwnedPattern(tid), f"body-{tid}")
        except BaseException as e:  # pragma: no cover - surfaced via errors
            errors.append(e)

    def evaluator() -> None:
        try:
            while not stop.is_set():
                table.evaluate_and_dispatch(0)
        except BaseException as e:  # pragma: no cover
            errors.append(e)

    def lister() -> None:
        try:
            while not stop.is_set():
                ids, patterns, tasks = table.snapshot()
                assert len(ids) == len(patterns) == len(tasks)
                assert len(set(ids)) == len(ids)
                for tid, pattern, body in zip(ids, patterns, tasks):
                    assert pattern.owner == tid
                    assert body == f"body-{tid}"
        except BaseException as e:
            errors.append(e)

    writers = [threading.Thread(target=writer, args=(f"w{n}",)) for n in range(4)]
    readers = [threading.Thread(target=evaluator) for _ in range(2)] + [
        threading.Thread(target=lister) for _ in range(2)
    ]

    for t in readers + writers:
        t.start()
    for t in writers:
        t.join(timeout=30)
    stop.set()
    for t in readers:
        t.join(timeout=30)

    assert not errors, errors
    assert executor.violations == []
    ids = table.list_ids()
    assert len(set(ids)) == len(ids)
    assert table.size() == len(ids)


def test_writer_waits_for_running_scan() -> None:
    """A register issued during a tick is not seen by that tick."""
    entered = threading.Event()
    release = threading.Event()

    class BlockingOnceExecutor:
        def __init__(self) -> None:
            self.spawned: list[str] = []

        def spawn(self, task: CronTask) -> None:
            self.spawned.append(task.task_id)
            if task.task_id == "a":
                entered.set()
                release.wait(timeout=5)

    executor = BlockingOnceExecutor()
    table = TaskTable(executor)
    table.register("a", FakePattern("a", due=True), "ta")

    tick = threading.Thread(target=table.evaluate_and_dispatch, args=(0,))
    tick.start()
    assert entered.wait(timeout=5)

    registered = threading.Event()

    def add_b() -> None:
        table.register("b", FakePattern("b", due=True), "tb")
        registered.set()

    w = threading.Thread(target=add_b)
    w.start()

    # Writer is blocked while the scan holds the read lock.
    assert not registered.wait(timeout=0.2)
    release.set()

    tick.join(timeout=5)
    w.join(timeout=5)
    assert registered.is_set()
    assert executor.spawned == ["a"]
    assert table.list_ids() == ("a", "b")


def test_update_during_scan_never_mixes_rows() -> None:
    """Dispatch records always carry the pattern that belonged to their own id."""
    executor = CheckingExecutor()
    table = TaskTable(executor)
    for i in range(20):
        tid = f"t{i}"
        table.register(tid, OwnedPattern(tid), f"body-{tid}")

    stop = threading.Event()

    def updater() -> None:
        gen = 0
        while not stop.is_set():
            gen += 1
            for i in range(20):
                tid = f"t{i}"
                table.update_pattern(tid, OwnedPattern(tid, gen))
            # Let the ticking thread in between rounds.
            time.sleep(0.001)

    t = threading.Thread(target=updater)
    t.start()
    try:
        for _ in range(200):
            table.evaluate_and_dispatch(0)
    finally:
        stop.set()
        t.join(timeout=10)

    assert executor.count == 200 * 20
    assert executor.violations == []
