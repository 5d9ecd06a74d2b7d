"""Time-in-range: share of readings per category, overall and per day-part.

Each category's percentage is rounded on its own, so the five values of
a window can add up to 99 or 101.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import tzinfo

from bp_insights.circadian import breakdown
from bp_insights.classifier import classify
from bp_insights.guidelines import resolve_guideline
from bp_insights.models import CATEGORY_ORDER, Category, Guideline, Reading, TimeInRangeResult
from bp_insights.metrics import rounded_percent


def empty_window() -> dict[Category, int]:
    """All-zero percentages in category order."""
    return {category: 0 for category in CATEGORY_ORDER}


def count_categories(readings: Iterable[Reading], guideline: Guideline | str) -> Counter[Category]:
    """Number of readings per category."""
    return Counter(classify(r.systolic, r.diastolic, guideline) for r in readings)


def window_percents(readings: Sequence[Reading], guideline: Guideline | str) -> dict[Category, int]:
    """Percent of the given readings in each category (all zero when empty)."""
    if not readings:
        return empty_window()

    counts = count_categories(readings, guideline)
    total = len(readings)
    return {category: rounded_percent(counts[category], total) for category in CATEGORY_ORDER}


def time_in_range(
    readings: Iterable[Reading],
    guideline: Guideline | str,
    tz: tzinfo | None = None,
) -> TimeInRangeResult:
    """Compute time-in-range percentages overall and per day-part.

    Args:
        readings: Readings to analyse
        guideline: Guideline used to classify every reading
        tz: Zone used to derive day-parts, host local zone if None

    Returns:
        TimeInRangeResult with one category->percent map per window
    """
    resolved, _ = resolve_guideline(guideline)
    items = list(readings)
    parts = breakdown(items, tz)
    return TimeInRangeResult(
        overall=window_percents(items, resolved),
        morning=window_percents(parts.morning, resolved),
        day=window_percents(parts.day, resolved),
        evening=window_percents(parts.evening, resolved),
        night=window_percents(parts.night, resolved),
    )
