"""Blood pressure classification and temporal insights.

Classifies readings against AHA/ACC, ESC/ESH, JSH and WHO thresholds and
derives time-of-day, time-in-range, morning surge and lifestyle tag
insights from a reading history. The analysis functions are pure over
their arguments; file loading lives in bp_insights.loader.
"""

from bp_insights.circadian import (
    am_pm_comparison,
    breakdown,
    compute_circadian_breakdown,
    day_part,
)
from bp_insights.classifier import classify, is_crisis, is_high_alert
from bp_insights.correlation import correlate
from bp_insights.history import filter_readings, group_by_time_period, weekly_average
from bp_insights.loader import load_export, load_readings, load_tags
from bp_insights.metrics import (
    interpret_map,
    interpret_pulse_pressure,
    mean_arterial_pressure,
    pulse_pressure,
)
from bp_insights.models import Band, Category, DayPart, Guideline, Reading
from bp_insights.report import aggregate
from bp_insights.surge import detect_surge
from bp_insights.time_in_range import time_in_range
from bp_insights.units import convert_bp_unit
from bp_insights.validator import validate

__all__ = [
    "Band",
    "Category",
    "DayPart",
    "Guideline",
    "Reading",
    "aggregate",
    "am_pm_comparison",
    "breakdown",
    "classify",
    "compute_circadian_breakdown",
    "convert_bp_unit",
    "correlate",
    "day_part",
    "detect_surge",
    "filter_readings",
    "group_by_time_period",
    "interpret_map",
    "interpret_pulse_pressure",
    "is_crisis",
    "is_high_alert",
    "load_export",
    "load_readings",
    "load_tags",
    "mean_arterial_pressure",
    "pulse_pressure",
    "time_in_range",
    "validate",
    "weekly_average",
]
