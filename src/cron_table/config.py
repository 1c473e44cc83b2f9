# src/cron_table/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole package (normal "settings layer").
- Nothing required at import time; every variable has a default.
- Consumers accept an injected settings object, get_settings() is only the fallback.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "CRON_TABLE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Matching ----
    timezone: str
    match_second: bool

    # ---- Executor ----
    executor_workers: int
    executor_max_pending: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "cron-table").strip() or "cron-table"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/cron_table"))

        timezone = _env(_k("TIMEZONE"), "UTC").strip() or "UTC"
        match_second = _env_bool(_k("MATCH_SECOND"), False)

        # At least one worker, otherwise nothing would ever drain the channel.
        executor_workers = max(1, _env_int(_k("EXECUTOR_WORKERS"), 4))
        # 0 means unbounded.
        executor_max_pending = max(0, _env_int(_k("EXECUTOR_MAX_PENDING"), 0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            timezone=timezone,
            match_second=match_second,
            executor_workers=executor_workers,
            executor_max_pending=executor_max_pending,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
