"""Lifestyle tag correlation.

For every tag, compares the average pressure of readings carrying the tag
with readings that don't. This is a plain difference of means with no
significance testing; callers decide which deltas are worth showing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from fractions import Fraction

from bp_insights.metrics import round_half_up
from bp_insights.models import Reading, TagCorrelation

# Both the tagged and the untagged side need at least this many readings
MIN_SAMPLE_SIZE = 3

CUSTOM_TAG_PREFIX = "custom:"

LIFESTYLE_TAGS = (
    "salt",
    "stress",
    "alcohol",
    "exercise",
    "medication",
    "caffeine",
    "poor_sleep",
)


def make_custom_tag_key(tag_id: str) -> str:
    """Tag key for a user-defined tag: "custom:<id>"."""
    return f"{CUSTOM_TAG_PREFIX}{tag_id}"


def is_custom_tag_key(tag: str) -> bool:
    return tag.startswith(CUSTOM_TAG_PREFIX)


def _mean(values: list[int]) -> Fraction:
    return Fraction(sum(values), len(values))


def correlate(
    readings: Iterable[Reading],
    tags_by_reading_id: Mapping[str, Iterable[str]],
    min_sample_size: int = MIN_SAMPLE_SIZE,
) -> list[TagCorrelation]:
    """Compute per-tag average deltas against untagged readings.

    Args:
        readings: Readings to analyse
        tags_by_reading_id: Tags attached to each reading, keyed by reading id
        min_sample_size: Minimum readings required on each side

    Returns:
        Qualifying correlations, largest absolute systolic delta first
    """
    items = list(readings)
    if not items:
        return []

    # Insertion-ordered; ties keep first-seen tag order
    all_tags = dict.fromkeys(tag for tags in tags_by_reading_id.values() for tag in tags)
    tag_sets = {rid: frozenset(tags) for rid, tags in tags_by_reading_id.items()}

    correlations = []
    for tag in all_tags:
        tagged = [r for r in items if tag in tag_sets.get(r.id, ())]
        untagged = [r for r in items if tag not in tag_sets.get(r.id, ())]

        if len(tagged) < min_sample_size or len(untagged) < min_sample_size:
            continue

        systolic_delta = _mean([r.systolic for r in tagged]) - _mean([r.systolic for r in untagged])
        diastolic_delta = _mean([r.diastolic for r in tagged]) - _mean(
            [r.diastolic for r in untagged]
        )
        correlations.append(
            TagCorrelation(
                tag=tag,
                avg_systolic_delta=round_half_up(systolic_delta),
                avg_diastolic_delta=round_half_up(diastolic_delta),
                tagged_count=len(tagged),
                untagged_count=len(untagged),
            )
        )

    correlations.sort(key=lambda c: abs(c.avg_systolic_delta), reverse=True)
    return correlations
