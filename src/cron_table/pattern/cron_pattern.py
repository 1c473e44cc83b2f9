# src/cron_table/pattern/cron_pattern.py

from __future__ import annotations

"""
Cron expression pattern backed by croniter.

Accepted forms:
- 5 fields: minute hour day-of-month month day-of-week
- 6 fields: the above + seconds as the sixth field (croniter convention)

Matching granularity is chosen per call (match_second), not per pattern:
- minute granularity ignores a seconds field entirely
- second granularity treats a 5-field expression as "at second 0"
"""

from datetime import UTC, datetime, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

from croniter import croniter  # type: ignore[import-untyped]

from ..core.ports import TimeZoneLike


@lru_cache(maxsize=64)
def _zone(name: str) -> tzinfo:
    return ZoneInfo(name)


def resolve_timezone(timezone: TimeZoneLike) -> tzinfo:
    """None -> UTC, str -> IANA zone, tzinfo -> as is."""
    if timezone is None:
        return UTC
    if isinstance(timezone, str):
        name = timezone.strip()
        if not name or name.upper() == "UTC":
            return UTC
        return _zone(name)
    return timezone


class CronPattern:
    """Immutable cron expression usable as a RecurrencePattern."""

    __slots__ = ("_expression", "_minute_expr", "_second_expr")

    def __init__(self, expression: str) -> None:
        expr = " ".join((expression or "").split())
        if not expr:
            raise ValueError("cron expression is required")

        fields = expr.split(" ")
        if len(fields) not in (5, 6):
            raise ValueError(f"Invalid cron expression '{expression}': expected 5 or 6 fields, got {len(fields)}")
        if not croniter.is_valid(expr):
            raise ValueError(f"Invalid cron expression '{expression}'")

        self._expression = expr
        self._minute_expr = " ".join(fields[:5])
        self._second_expr = expr if len(fields) == 6 else f"{expr} 0"

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def has_seconds(self) -> bool:
        return self._expression != self._minute_expr

    def match(self, timezone: TimeZoneLike, instant_ms: int, match_second: bool) -> bool:
        dt = datetime.fromtimestamp(int(instant_ms) / 1000.0, tz=resolve_timezone(timezone))
        if match_second:
            return bool(croniter.match(self._second_expr, dt.replace(microsecond=0)))
        return bool(croniter.match(self._minute_expr, dt.replace(second=0, microsecond=0)))

    def __str__(self) -> str:
        return self._expression

    def __repr__(self) -> str:
        return f"CronPattern({self._expression!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CronPattern):
            return NotImplemented
        return self._expression == other._expression

    def __hash__(self) -> int:
        return hash(self._expression)
