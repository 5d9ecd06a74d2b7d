"""Morning surge detection.

Compares today's first morning reading against the average systolic of
the previous night (yesterday 22:00 up to today 06:00). Only the most
recent night/morning pair is evaluated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, tzinfo
from fractions import Fraction

from bp_insights.circadian import day_part, reference_time
from bp_insights.metrics import round_half_away
from bp_insights.models import DayPart, MorningSurgeResult, Reading

logger = logging.getLogger(__name__)

# Systolic rise (mmHg) over the prior-night average that counts as a surge
SURGE_THRESHOLD = 20

NO_SURGE = MorningSurgeResult(has_surge=False, delta=0, surge_reading_id=None)


def _day_bounds(now: datetime) -> tuple[float, float, float, float]:
    """Epoch seconds for yesterday 22:00, today 00:00, today 06:00, tomorrow 00:00."""
    today_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    night_start = (today_start - timedelta(days=1)).replace(hour=22)
    morning_start = today_start.replace(hour=6)
    tomorrow_start = today_start + timedelta(days=1)
    return (
        night_start.timestamp(),
        today_start.timestamp(),
        morning_start.timestamp(),
        tomorrow_start.timestamp(),
    )


def detect_surge(
    readings: Iterable[Reading],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> MorningSurgeResult:
    """Detect a morning surge in today's readings.

    Args:
        readings: All available readings, in any order
        now: Reference moment defining "today"; current time if None
        tz: Zone used for day boundaries and day-parts; the zone of an aware
            now if None, else the host local zone

    Returns:
        MorningSurgeResult; delta is 0 unless a surge is flagged
    """
    now, tz = reference_time(now, tz)

    night_start, today_start, morning_start, tomorrow_start = _day_bounds(now)
    items = list(readings)

    todays_morning = sorted(
        (
            r
            for r in items
            if today_start <= r.timestamp < tomorrow_start
            and day_part(r.timestamp, tz) is DayPart.MORNING
        ),
        key=lambda r: r.timestamp,
    )
    if not todays_morning:
        return NO_SURGE
    first_morning = todays_morning[0]

    prior_night = [
        r
        for r in items
        if night_start <= r.timestamp < morning_start and day_part(r.timestamp, tz) is DayPart.NIGHT
    ]
    if not prior_night:
        return NO_SURGE

    night_avg = Fraction(sum(r.systolic for r in prior_night), len(prior_night))
    delta = round_half_away(first_morning.systolic - night_avg)

    if delta >= SURGE_THRESHOLD:
        logger.debug(
            f"Morning surge: reading {first_morning.id} is {delta} mmHg above "
            f"the average of {len(prior_night)} night readings"
        )
        return MorningSurgeResult(has_surge=True, delta=delta, surge_reading_id=first_morning.id)
    return NO_SURGE
