"""Tests for bp_insights/correlation.py - lifestyle tag correlation."""

import pytest

from bp_insights.correlation import (
    LIFESTYLE_TAGS,
    MIN_SAMPLE_SIZE,
    correlate,
    is_custom_tag_key,
    make_custom_tag_key,
)
from bp_insights.models import TagCorrelation


@pytest.fixture
def tagged_readings(make_reading):
    """Three salt readings, three exercise readings and six untagged ones."""
    salt = [make_reading(140, 90, hour=8 + i, id=f"salt{i}") for i in range(3)]
    exercise = [make_reading(130, 80, hour=12 + i, id=f"ex{i}") for i in range(3)]
    plain = [make_reading(110, 70, hour=15 + i, id=f"plain{i}") for i in range(6)]
    return salt + exercise + plain


@pytest.fixture
def tag_map():
    """Exercise listed first so ranking has to reorder."""
    return {
        "ex0": ["exercise"],
        "ex1": ["exercise"],
        "ex2": ["exercise"],
        "salt0": ["salt"],
        "salt1": ["salt", "alcohol"],
        "salt2": ["salt", "alcohol"],
    }


class TestCorrelate:
    """Test suite for correlate()."""

    def test_min_sample_size(self):
        """Both sides need at least three readings."""
        assert MIN_SAMPLE_SIZE == 3

    def test_ranked_by_systolic_delta(self, tagged_readings, tag_map):
        """Larger absolute systolic delta comes first."""
        result = correlate(tagged_readings, tag_map)
        assert [c.tag for c in result] == ["salt", "exercise"]

    def test_delta_values(self, tagged_readings, tag_map):
        """Deltas are rounded differences of the exact means."""
        salt, exercise = correlate(tagged_readings, tag_map)
        # 140 - (3*130 + 6*110)/9 = 23.33, 90 - (3*80 + 6*70)/9 = 16.67
        assert salt == TagCorrelation(
            tag="salt",
            avg_systolic_delta=23,
            avg_diastolic_delta=17,
            tagged_count=3,
            untagged_count=9,
        )
        # 130 - (3*140 + 6*110)/9 = 10, 80 - (3*90 + 6*70)/9 = 3.33
        assert exercise.avg_systolic_delta == 10
        assert exercise.avg_diastolic_delta == 3

    def test_excludes_small_tagged_sample(self, tagged_readings, tag_map):
        """A tag on only two readings is skipped even with many untagged."""
        result = correlate(tagged_readings, tag_map)
        assert "alcohol" not in [c.tag for c in result]

    def test_excludes_small_untagged_sample(self, make_reading):
        """A tag on all but two readings is skipped too."""
        readings = [make_reading(120, 80, id=f"r{i}") for i in range(6)]
        tags = {f"r{i}": ["medication"] for i in range(4)}
        assert correlate(readings, tags) == []

    def test_negative_delta_ranked_by_magnitude(self, make_reading):
        """A -30 delta outranks a +10 delta."""
        readings = [make_reading(100, 70, id=f"low{i}") for i in range(3)] + [
            make_reading(130, 85, id=f"high{i}") for i in range(3)
        ]
        tags = {
            "high0": ["stress"],
            "high1": ["stress"],
            "low0": ["stress", "medication"],
            "low1": ["medication"],
            "low2": ["medication"],
        }
        result = correlate(readings, tags)
        assert [c.tag for c in result] == ["medication", "stress"]
        assert result[0].avg_systolic_delta == -30
        assert result[1].avg_systolic_delta == 10

    def test_ties_keep_first_seen_order(self, make_reading):
        """Equal magnitudes keep the order tags first appear in the map."""
        readings = [make_reading(130, 80, id=f"x{i}") for i in range(3)] + [
            make_reading(120, 80, id=f"y{i}") for i in range(3)
        ]
        tags = {"y0": ["y"], "y1": ["y"], "y2": ["y"], "x0": ["x"], "x1": ["x"], "x2": ["x"]}
        first = correlate(readings, tags)
        assert [c.tag for c in first] == ["y", "x"]
        assert correlate(readings, tags) == first

    def test_empty_readings(self, tag_map):
        """No readings, no correlations."""
        assert correlate([], tag_map) == []

    def test_empty_tag_map(self, tagged_readings):
        """No tags, no correlations."""
        assert correlate(tagged_readings, {}) == []

    def test_unknown_reading_ids_ignored(self, tagged_readings):
        """Tags on readings outside the set count as nothing."""
        tags = {"ghost1": ["salt"], "ghost2": ["salt"], "ghost3": ["salt"]}
        assert correlate(tagged_readings, tags) == []

    def test_custom_min_sample_size(self, tagged_readings, tag_map):
        """Lowering the minimum lets smaller samples through."""
        result = correlate(tagged_readings, tag_map, min_sample_size=2)
        assert "alcohol" in [c.tag for c in result]

    def test_to_dict(self, tagged_readings, tag_map):
        """Correlation serialises all fields."""
        data = correlate(tagged_readings, tag_map)[0].to_dict()
        assert data == {
            "tag": "salt",
            "avg_systolic_delta": 23,
            "avg_diastolic_delta": 17,
            "tagged_count": 3,
            "untagged_count": 9,
        }

    def test_negative_half_delta_rounds_up(self, make_reading):
        """-2.5 rounds to -2, keeping it under a display threshold of 3."""
        readings = [make_reading(120, 80, id=f"t{i}") for i in range(3)] + [
            make_reading(122 + i % 2, 80, id=f"u{i}") for i in range(4)
        ]
        tags = {f"t{i}": ["caffeine"] for i in range(3)}
        result = correlate(readings, tags)
        # 120 - (122 + 123 + 122 + 123) / 4 = -2.5
        assert result[0].avg_systolic_delta == -2
        assert result[0].avg_diastolic_delta == 0


class TestTagKeys:
    """Tests for the tag vocabulary helpers."""

    def test_builtin_tags(self):
        """Built-in lifestyle tags."""
        assert "salt" in LIFESTYLE_TAGS
        assert "poor_sleep" in LIFESTYLE_TAGS

    def test_custom_tag_key(self):
        """Custom tags are prefixed."""
        key = make_custom_tag_key("1234")
        assert key == "custom:1234"
        assert is_custom_tag_key(key) is True
        assert is_custom_tag_key("salt") is False

    def test_custom_tags_correlate(self, make_reading):
        """Custom tag keys are treated like any other tag."""
        key = make_custom_tag_key("abc")
        readings = [make_reading(140, 90, id=f"t{i}") for i in range(3)] + [
            make_reading(120, 80, id=f"u{i}") for i in range(3)
        ]
        tags = {f"t{i}": [key] for i in range(3)}
        assert correlate(readings, tags)[0].tag == key
