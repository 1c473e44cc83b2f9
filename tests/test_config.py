# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from cron_table.config import Settings, get_settings


def test_defaults_when_environment_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APP_NAME",
        "LOG_LEVEL",
        "LOG_DIR",
        "TIMEZONE",
        "MATCH_SECOND",
        "EXECUTOR_WORKERS",
        "EXECUTOR_MAX_PENDING",
    ):
        monkeypatch.delenv(f"CRON_TABLE_{name}", raising=False)

    s = Settings.from_env()

    assert s.app_name == "cron-table"
    assert s.log_level == "INFO"
    assert s.log_dir == Path(".local/cron_table")
    assert s.timezone == "UTC"
    assert s.match_second is False
    assert s.executor_workers == 4
    assert s.executor_max_pending == 0


def test_values_are_read_from_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CRON_TABLE_APP_NAME", "billing-cron")
    monkeypatch.setenv("CRON_TABLE_LOG_DIR", str(tmp_path))
    monkeypatch.setenv("CRON_TABLE_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("CRON_TABLE_MATCH_SECOND", "yes")
    monkeypatch.setenv("CRON_TABLE_EXECUTOR_WORKERS", "8")
    monkeypatch.setenv("CRON_TABLE_EXECUTOR_MAX_PENDING", "100")

    s = Settings.from_env()

    assert s.app_name == "billing-cron"
    assert s.log_dir == tmp_path
    assert s.timezone == "Europe/Berlin"
    assert s.match_second is True
    assert s.executor_workers == 8
    assert s.executor_max_pending == 100


def test_malformed_and_out_of_range_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRON_TABLE_EXECUTOR_WORKERS", "lots")
    monkeypatch.setenv("CRON_TABLE_EXECUTOR_MAX_PENDING", "-5")
    monkeypatch.setenv("CRON_TABLE_MATCH_SECOND", "nope")

    s = Settings.from_env()

    assert s.executor_workers == 4
    assert s.executor_max_pending == 0
    assert s.match_second is False


def test_zero_workers_is_clamped(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CRON_TABLE_EXECUTOR_WORKERS", "0")
    assert Settings.from_env().executor_workers == 1


def test_get_settings_returns_process_instance() -> None:
    assert get_settings() is get_settings()
