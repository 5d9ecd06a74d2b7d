"""Blood pressure category classification.

Checks run crisis -> stage_2 -> stage_1 -> elevated -> normal and the
first match wins. The bands overlap by construction, so the order is
what decides a reading that satisfies more than one of them.
"""

from __future__ import annotations

from bp_insights.guidelines import DEFAULT_GUIDELINE, get_thresholds
from bp_insights.models import HIGH_ALERT_CATEGORIES, Category, Guideline


def classify(
    systolic: float,
    diastolic: float,
    guideline: Guideline | str = DEFAULT_GUIDELINE,
) -> Category:
    """Classify a reading under the given guideline.

    Total over any numeric input: physiologically implausible values still
    get a category. Validation is a separate concern (see validator).

    Args:
        systolic: Systolic pressure in mmHg
        diastolic: Diastolic pressure in mmHg
        guideline: Guideline identifier; unknown ones fall back to AHA/ACC

    Returns:
        Category of the reading
    """
    t = get_thresholds(guideline)

    if systolic >= t.crisis.systolic or diastolic >= t.crisis.diastolic:
        return Category.CRISIS
    if systolic >= t.stage_2.systolic or diastolic >= t.stage_2.diastolic:
        return Category.STAGE_2
    if systolic >= t.stage_1.systolic or diastolic >= t.stage_1.diastolic:
        return Category.STAGE_1
    if t.elevated.matches(systolic, diastolic):
        return Category.ELEVATED
    return Category.NORMAL


def is_crisis(
    systolic: float,
    diastolic: float,
    guideline: Guideline | str = DEFAULT_GUIDELINE,
) -> bool:
    """True if the reading is a hypertensive crisis under the guideline."""
    return classify(systolic, diastolic, guideline) is Category.CRISIS


def is_high_alert(
    systolic: float,
    diastolic: float,
    guideline: Guideline | str = DEFAULT_GUIDELINE,
) -> bool:
    """True for stage_2 and crisis readings."""
    return classify(systolic, diastolic, guideline) in HIGH_ALERT_CATEGORIES
