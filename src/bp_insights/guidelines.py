"""Classification thresholds for all supported guidelines.

Every classification goes through the tables in this module. The
"elevated" band comes in two shapes and each keeps its own rule type:

- AHA/ACC: systolic >= X AND diastolic < Y
- ESC/ESH, JSH, WHO: systolic in range OR diastolic in range

WHO additionally caps the systolic range explicitly (< 140).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bp_insights.models import Category, Guideline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThresholdPair:
    """Systolic/diastolic boundary; either value reaching it triggers the band."""

    systolic: int
    diastolic: int


@dataclass(frozen=True)
class AhaElevatedRule:
    """Elevated when systolic >= systolic_min AND diastolic < diastolic_below."""

    systolic_min: int
    diastolic_below: int

    def matches(self, systolic: float, diastolic: float) -> bool:
        return systolic >= self.systolic_min and diastolic < self.diastolic_below


@dataclass(frozen=True)
class RangeElevatedRule:
    """Elevated when systolic OR diastolic falls inside its range.

    systolic_below is only set where the guideline states the upper
    systolic bound explicitly (WHO). Elsewhere the stage_1 check already
    caps systolic before this rule is reached.
    """

    systolic_min: int
    diastolic_min: int
    diastolic_below: int
    systolic_below: int | None = None

    def matches(self, systolic: float, diastolic: float) -> bool:
        systolic_in_range = systolic >= self.systolic_min and (
            self.systolic_below is None or systolic < self.systolic_below
        )
        diastolic_in_range = self.diastolic_min <= diastolic < self.diastolic_below
        return systolic_in_range or diastolic_in_range


ElevatedRule = AhaElevatedRule | RangeElevatedRule


@dataclass(frozen=True)
class GuidelineThresholds:
    """Five-category rule set for one guideline."""

    crisis: ThresholdPair
    stage_2: ThresholdPair
    stage_1: ThresholdPair
    elevated: ElevatedRule
    normal_below: ThresholdPair


# AHA/ACC 2025 - USA
AHA_ACC = GuidelineThresholds(
    crisis=ThresholdPair(systolic=180, diastolic=120),
    stage_2=ThresholdPair(systolic=140, diastolic=90),
    stage_1=ThresholdPair(systolic=130, diastolic=80),
    elevated=AhaElevatedRule(systolic_min=120, diastolic_below=80),
    normal_below=ThresholdPair(systolic=120, diastolic=80),
)

# ESC/ESH - Europe
ESC_ESH = GuidelineThresholds(
    crisis=ThresholdPair(systolic=180, diastolic=110),
    stage_2=ThresholdPair(systolic=160, diastolic=100),
    stage_1=ThresholdPair(systolic=140, diastolic=90),
    elevated=RangeElevatedRule(systolic_min=130, diastolic_min=85, diastolic_below=90),
    normal_below=ThresholdPair(systolic=130, diastolic=85),
)

# JSH 2025 - Japan (diastolic 80, not 85 like ESC)
JSH = GuidelineThresholds(
    crisis=ThresholdPair(systolic=180, diastolic=110),
    stage_2=ThresholdPair(systolic=160, diastolic=100),
    stage_1=ThresholdPair(systolic=140, diastolic=90),
    elevated=RangeElevatedRule(systolic_min=130, diastolic_min=80, diastolic_below=90),
    normal_below=ThresholdPair(systolic=130, diastolic=80),
)

# WHO/ISH 1999 - international
WHO = GuidelineThresholds(
    crisis=ThresholdPair(systolic=180, diastolic=110),
    stage_2=ThresholdPair(systolic=160, diastolic=100),
    stage_1=ThresholdPair(systolic=140, diastolic=90),
    elevated=RangeElevatedRule(
        systolic_min=130, systolic_below=140, diastolic_min=85, diastolic_below=90
    ),
    normal_below=ThresholdPair(systolic=130, diastolic=85),
)

BP_THRESHOLDS: dict[Guideline, GuidelineThresholds] = {
    Guideline.AHA_ACC: AHA_ACC,
    Guideline.ESC_ESH: ESC_ESH,
    Guideline.JSH: JSH,
    Guideline.WHO: WHO,
}

DEFAULT_GUIDELINE = Guideline.AHA_ACC

_ESC_STYLE_RANGES = {
    Category.NORMAL: "<130 / <85 mmHg",
    Category.ELEVATED: "130–139 / 85–89 mmHg",
    Category.STAGE_1: "140–159 / 90–99 mmHg",
    Category.STAGE_2: "160–179 / 100–109 mmHg",
    Category.CRISIS: "≥180 / ≥110 mmHg",
}

CATEGORY_RANGES: dict[Guideline, dict[Category, str]] = {
    Guideline.AHA_ACC: {
        Category.NORMAL: "<120 / <80 mmHg",
        Category.ELEVATED: "120–129 / <80 mmHg",
        Category.STAGE_1: "130–139 / 80–89 mmHg",
        Category.STAGE_2: "≥140 / ≥90 mmHg",
        Category.CRISIS: "≥180 / ≥120 mmHg",
    },
    Guideline.ESC_ESH: _ESC_STYLE_RANGES,
    Guideline.JSH: {
        Category.NORMAL: "<130 / <80 mmHg",
        Category.ELEVATED: "130–139 / 80–89 mmHg",
        Category.STAGE_1: "140–159 / 90–99 mmHg",
        Category.STAGE_2: "160–179 / 100–109 mmHg",
        Category.CRISIS: "≥180 / ≥110 mmHg",
    },
    Guideline.WHO: _ESC_STYLE_RANGES,
}


def resolve_guideline(guideline: Guideline | str | None) -> tuple[Guideline, bool]:
    """Map a guideline identifier onto a supported guideline.

    Args:
        guideline: Guideline enum member or its string token

    Returns:
        Tuple of (guideline, fell_back). Unknown or missing identifiers
        resolve to AHA/ACC with fell_back set to True.
    """
    if isinstance(guideline, Guideline):
        return guideline, False

    try:
        return Guideline(guideline), False
    except ValueError:
        logger.warning(f"Unknown guideline {guideline!r}, falling back to {DEFAULT_GUIDELINE.value}")
        return DEFAULT_GUIDELINE, True


def get_thresholds(guideline: Guideline | str | None) -> GuidelineThresholds:
    """Threshold table for a guideline, AHA/ACC for unknown identifiers."""
    resolved, _ = resolve_guideline(guideline)
    return BP_THRESHOLDS[resolved]


def category_range(category: Category, guideline: Guideline | str | None) -> str:
    """Display range for a category under a guideline, e.g. "<120 / <80 mmHg"."""
    resolved, _ = resolve_guideline(guideline)
    return CATEGORY_RANGES[resolved][Category(category)]
