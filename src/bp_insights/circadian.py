"""Time-of-day windowing of readings.

Day-parts come from the local wall-clock hour of the reading:

    morning  06:00 - 09:59
    day      10:00 - 17:59
    evening  18:00 - 21:59
    night    22:00 - 05:59 (wraps midnight)

Timestamps are epoch seconds. ``tz`` selects the zone used to read the
hour; None means the host's local zone.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, tzinfo

from bp_insights.metrics import rounded_mean
from bp_insights.models import (
    AmPmComparison,
    CircadianAverage,
    CircadianBreakdown,
    DayPart,
    Reading,
)


def local_datetime(timestamp: float, tz: tzinfo | None = None) -> datetime:
    """Wall-clock datetime of an epoch timestamp in the given zone."""
    return datetime.fromtimestamp(timestamp, tz)


def local_hour(timestamp: float, tz: tzinfo | None = None) -> int:
    """Wall-clock hour (0-23) of an epoch timestamp."""
    return local_datetime(timestamp, tz).hour


def reference_time(
    now: datetime | None = None, tz: tzinfo | None = None
) -> tuple[datetime, tzinfo | None]:
    """Reference moment and the zone used to read both it and reading hours.

    An aware ``now`` without ``tz`` supplies the zone. A naive ``now`` with
    ``tz`` is taken as wall-clock time in that zone. Naive ``now`` without
    ``tz`` stays in the host's local zone.
    """
    if now is None:
        return datetime.now(tz), tz
    if tz is None:
        return now, now.tzinfo
    if now.tzinfo is None:
        return now.replace(tzinfo=tz), tz
    return now.astimezone(tz), tz


def day_part_for_hour(hour: int) -> DayPart:
    """Map an hour of day onto its window."""
    if 6 <= hour < 10:
        return DayPart.MORNING
    if 10 <= hour < 18:
        return DayPart.DAY
    if 18 <= hour < 22:
        return DayPart.EVENING
    return DayPart.NIGHT


def day_part(timestamp: float, tz: tzinfo | None = None) -> DayPart:
    """Day-part of a reading taken at the given epoch timestamp."""
    return day_part_for_hour(local_hour(timestamp, tz))


def average_window(readings: Iterable[Reading]) -> CircadianAverage | None:
    """Rounded systolic/diastolic averages, None for an empty window."""
    items = list(readings)
    if not items:
        return None
    return CircadianAverage(
        systolic=rounded_mean(r.systolic for r in items),
        diastolic=rounded_mean(r.diastolic for r in items),
        count=len(items),
    )


def breakdown(readings: Iterable[Reading], tz: tzinfo | None = None) -> CircadianBreakdown:
    """Partition readings into the four day-parts in a single pass.

    Args:
        readings: Readings in any order; order within each window is kept
        tz: Zone used to derive the hour, host local zone if None

    Returns:
        CircadianBreakdown with per-window readings and averages
    """
    groups: dict[DayPart, list[Reading]] = {part: [] for part in DayPart}
    for reading in readings:
        groups[day_part(reading.timestamp, tz)].append(reading)

    return CircadianBreakdown(
        morning=tuple(groups[DayPart.MORNING]),
        day=tuple(groups[DayPart.DAY]),
        evening=tuple(groups[DayPart.EVENING]),
        night=tuple(groups[DayPart.NIGHT]),
        morning_avg=average_window(groups[DayPart.MORNING]),
        day_avg=average_window(groups[DayPart.DAY]),
        evening_avg=average_window(groups[DayPart.EVENING]),
        night_avg=average_window(groups[DayPart.NIGHT]),
    )


compute_circadian_breakdown = breakdown


def am_pm_comparison(readings: Iterable[Reading], tz: tzinfo | None = None) -> AmPmComparison:
    """Compare readings taken before noon with those taken from noon on."""
    am: list[Reading] = []
    pm: list[Reading] = []
    for reading in readings:
        (am if local_hour(reading.timestamp, tz) < 12 else pm).append(reading)

    return AmPmComparison(
        am_systolic=rounded_mean(r.systolic for r in am),
        am_diastolic=rounded_mean(r.diastolic for r in am),
        pm_systolic=rounded_mean(r.systolic for r in pm),
        pm_diastolic=rounded_mean(r.diastolic for r in pm),
        has_am_data=bool(am),
        has_pm_data=bool(pm),
    )
