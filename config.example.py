# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/cron_table/config.py for parsing rules and defaults.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "CRON_TABLE_APP_NAME": "Name used for executor thread names (default: cron-table).",
    "CRON_TABLE_LOG_LEVEL": "Console logging level (default: INFO).",
    "CRON_TABLE_LOG_DIR": "Directory for cron_table.log (default: .local/cron_table).",
    # Matching
    "CRON_TABLE_TIMEZONE": "IANA timezone cron patterns are evaluated in (default: UTC).",
    "CRON_TABLE_MATCH_SECOND": "Match at second granularity (true/false, default: false).",
    # Executor
    "CRON_TABLE_EXECUTOR_WORKERS": "Worker threads running dispatched tasks (default: 4, minimum 1).",
    "CRON_TABLE_EXECUTOR_MAX_PENDING": "Work channel capacity; 0 = unbounded (default: 0).",
}
