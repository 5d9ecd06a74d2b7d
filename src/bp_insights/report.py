"""Summary statistics for reports."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bp_insights.guidelines import category_range, resolve_guideline
from bp_insights.metrics import (
    mean_arterial_pressure,
    pulse_pressure,
    rounded_mean,
    rounded_percent,
)
from bp_insights.models import CATEGORY_ORDER, CategoryStat, Guideline, Reading, ReportStats
from bp_insights.time_in_range import count_categories

logger = logging.getLogger(__name__)


def aggregate(readings: Iterable[Reading], guideline: Guideline | str) -> ReportStats:
    """Aggregate a reading set into report statistics.

    Args:
        readings: Readings to summarise
        guideline: Guideline used for the category breakdown

    Returns:
        ReportStats; all zeros with an empty breakdown when there are no readings
    """
    items = list(readings)
    if not items:
        return ReportStats()

    resolved, _ = resolve_guideline(guideline)
    systolics = [r.systolic for r in items]
    diastolics = [r.diastolic for r in items]
    pulses = [r.pulse for r in items if r.pulse is not None]

    counts = count_categories(items, resolved)
    breakdown = tuple(
        CategoryStat(
            category=category,
            range=category_range(category, resolved),
            count=counts[category],
            percent=rounded_percent(counts[category], len(items)),
        )
        for category in CATEGORY_ORDER
        if counts[category]
    )

    stats = ReportStats(
        total=len(items),
        avg_systolic=rounded_mean(systolics),
        avg_diastolic=rounded_mean(diastolics),
        avg_pulse=rounded_mean(pulses),
        avg_pulse_pressure=rounded_mean(pulse_pressure(r.systolic, r.diastolic) for r in items),
        avg_map=rounded_mean(mean_arterial_pressure(r.systolic, r.diastolic) for r in items),
        min_systolic=min(systolics),
        max_systolic=max(systolics),
        min_diastolic=min(diastolics),
        max_diastolic=max(diastolics),
        category_breakdown=breakdown,
    )
    logger.debug(f"Aggregated {stats.total} readings under {resolved.value}")
    return stats
