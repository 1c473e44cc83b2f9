"""Recurrence patterns (croniter-backed CronPattern)."""
