"""Session metrics: weight parsing, volume, completion and streaks.

Pure functions over plain data. Every place that needs a session total or a
streak goes through here.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from grove.core.constants import BODYWEIGHT_MARKERS

_NON_NUMERIC = re.compile(r"[^0-9.]")


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC (SQLite drops tzinfo on the way back)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_timezone(name: str) -> tzinfo:
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def parse_weight(weight_used: str | None) -> float | None:
    """
    Parse a free-text weight ("10kg", "22.5 kg") into kilograms.
    Returns None for missing values, bodyweight markers and unparsable text.
    """
    if not weight_used:
        return None
    if weight_used.strip().lower() in BODYWEIGHT_MARKERS:
        return None
    cleaned = _NON_NUMERIC.sub("", weight_used)
    try:
        return float(cleaned)
    except ValueError:
        return None


def set_volume(set_data: Mapping[str, Any]) -> float:
    """Weight x reps for one set. Missing reps or unparsable weight contribute 0."""
    weight = parse_weight(set_data.get("weight_used"))
    reps = set_data.get("reps_completed") or 0
    if weight is None:
        return 0.0
    return weight * reps


def _sets(exercises_performed: Iterable[Mapping[str, Any]]):
    for entry in exercises_performed:
        yield from entry.get("sets_completed") or []


def session_totals(exercises_performed: Iterable[Mapping[str, Any]]) -> tuple[float, int]:
    """(total_volume_kg, total_reps) over every recorded set."""
    volume = 0.0
    reps = 0
    for s in _sets(exercises_performed):
        volume += set_volume(s)
        reps += s.get("reps_completed") or 0
    return volume, reps


def total_rest_seconds(exercises_performed: Iterable[Mapping[str, Any]]) -> int:
    return sum(s.get("rest_after_seconds") or 0 for s in _sets(exercises_performed))


def completion_percentage(exercises_performed: Iterable[Mapping[str, Any]]) -> float:
    """100 x completed / planned sets, rounded to 2 decimals. 0 when nothing is planned."""
    total = 0
    completed = 0
    for entry in exercises_performed:
        total += entry.get("total_sets") or 0
        completed += entry.get("completed_sets") or 0
    if total == 0:
        return 0.0
    return round(100 * completed / total, 2)


def to_local_date(value: datetime, tz: tzinfo) -> date:
    return as_utc(value).astimezone(tz).date()


def week_start(now: datetime, tz: tzinfo) -> datetime:
    """Most recent Sunday 00:00 in tz, returned in UTC."""
    local = as_utc(now).astimezone(tz)
    # weekday(): Monday=0 .. Sunday=6
    days_since_sunday = (local.weekday() + 1) % 7
    sunday = local.date() - timedelta(days=days_since_sunday)
    return datetime.combine(sunday, time.min, tzinfo=tz).astimezone(timezone.utc)


def current_streak(days: Iterable[date], today: date) -> int:
    """
    Consecutive-day streak ending today.

    Walk days newest first: a day exactly `streak` days back extends the streak,
    a day further back ends it. Repeats of a counted day (and future days) are skipped.
    """
    streak = 0
    for day in sorted(days, reverse=True):
        gap = (today - day).days
        if gap == streak:
            streak += 1
        elif gap > streak:
            break
    return streak


def longest_streak(days: Iterable[date]) -> int:
    """Longest run of consecutive calendar days."""
    ordered = sorted(set(days))
    if not ordered:
        return 0
    longest = 1
    run = 1
    for prev, cur in zip(ordered, ordered[1:]):
        if cur - prev == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest
