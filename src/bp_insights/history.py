"""History helpers: recent averages, time-period sections and list filters."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, tzinfo

from bp_insights.circadian import local_hour, reference_time
from bp_insights.classifier import is_high_alert
from bp_insights.guidelines import DEFAULT_GUIDELINE, resolve_guideline
from bp_insights.metrics import rounded_mean
from bp_insights.models import Guideline, Reading, WeeklyAverage

WEEK_SECONDS = 7 * 86400

# Section keys in display order
TODAY = "today"
YESTERDAY = "yesterday"
LAST_WEEK = "last_week"
OLDER = "older"

# Filter kinds
FILTER_ALL = "all"
FILTER_MORNING = "morning"
FILTER_EVENING = "evening"
FILTER_HIGH_ALERT = "high_alert"


def weekly_average(readings: Iterable[Reading], now: datetime | None = None) -> WeeklyAverage:
    """Average of readings taken in the seven days before now."""
    now_ts = (now or datetime.now()).timestamp()
    recent = [r for r in readings if r.timestamp >= now_ts - WEEK_SECONDS]
    if not recent:
        return WeeklyAverage(systolic=0, diastolic=0, has_data=False)
    return WeeklyAverage(
        systolic=rounded_mean(r.systolic for r in recent),
        diastolic=rounded_mean(r.diastolic for r in recent),
        has_data=True,
    )


def group_by_time_period(
    readings: Iterable[Reading],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> list[tuple[str, list[Reading]]]:
    """Group readings into today / yesterday / last week / older sections.

    Input order is kept within each section and empty sections are left out.

    Args:
        readings: Readings, usually newest first
        now: Reference moment; current time if None
        tz: Zone defining local midnight; the zone of an aware now if None,
            else the host local zone

    Returns:
        List of (section_key, readings) tuples
    """
    now, tz = reference_time(now, tz)

    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    boundaries = (
        (TODAY, today_start.timestamp()),
        (YESTERDAY, (today_start - timedelta(days=1)).timestamp()),
        (LAST_WEEK, (today_start - timedelta(days=7)).timestamp()),
    )

    sections: dict[str, list[Reading]] = {TODAY: [], YESTERDAY: [], LAST_WEEK: [], OLDER: []}
    for reading in readings:
        for key, start in boundaries:
            if reading.timestamp >= start:
                sections[key].append(reading)
                break
        else:
            sections[OLDER].append(reading)

    return [(key, items) for key, items in sections.items() if items]


def filter_readings(
    readings: Iterable[Reading],
    kind: str = FILTER_ALL,
    guideline: Guideline | str = DEFAULT_GUIDELINE,
    tz: tzinfo | None = None,
) -> list[Reading]:
    """Filter readings for the history list.

    morning keeps readings before noon, evening from noon on, high_alert
    keeps stage_2 and crisis readings. Unknown kinds return everything.
    """
    items = list(readings)
    if kind == FILTER_MORNING:
        return [r for r in items if local_hour(r.timestamp, tz) < 12]
    if kind == FILTER_EVENING:
        return [r for r in items if local_hour(r.timestamp, tz) >= 12]
    if kind == FILTER_HIGH_ALERT:
        resolved, _ = resolve_guideline(guideline)
        return [r for r in items if is_high_alert(r.systolic, r.diastolic, resolved)]
    return items
