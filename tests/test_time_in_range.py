"""Tests for bp_insights/time_in_range.py - category percentages."""

from bp_insights.models import Category, Guideline
from bp_insights.time_in_range import count_categories, time_in_range, window_percents

ZERO = {
    Category.NORMAL: 0,
    Category.ELEVATED: 0,
    Category.STAGE_1: 0,
    Category.STAGE_2: 0,
    Category.CRISIS: 0,
}


class TestTimeInRange:
    """Test suite for time_in_range()."""

    def test_empty_input(self, tz):
        """Every window is all zeros for no readings."""
        result = time_in_range([], Guideline.AHA_ACC, tz)
        for window in (result.overall, result.morning, result.day, result.evening, result.night):
            assert window == ZERO

    def test_one_per_category(self, tz, one_per_category):
        """Four readings in four categories are 25% each overall."""
        result = time_in_range(one_per_category, Guideline.AHA_ACC, tz)
        assert result.overall == {
            Category.NORMAL: 25,
            Category.ELEVATED: 25,
            Category.STAGE_1: 25,
            Category.STAGE_2: 25,
            Category.CRISIS: 0,
        }

    def test_per_window(self, tz, one_per_category):
        """Each day-part is computed over its own readings."""
        result = time_in_range(one_per_category, Guideline.AHA_ACC, tz)
        assert result.morning[Category.NORMAL] == 100
        assert result.day[Category.ELEVATED] == 100
        assert result.evening[Category.STAGE_1] == 100
        assert result.night[Category.STAGE_2] == 100
        assert result.morning[Category.STAGE_2] == 0

    def test_independent_rounding(self, tz, make_reading):
        """Thirds round to 33 each, summing to 99."""
        readings = [
            make_reading(110, 70, hour=12),
            make_reading(125, 75, hour=13),
            make_reading(135, 85, hour=14),
        ]
        result = time_in_range(readings, Guideline.AHA_ACC, tz)
        assert result.overall[Category.NORMAL] == 33
        assert result.overall[Category.ELEVATED] == 33
        assert result.overall[Category.STAGE_1] == 33
        assert sum(result.overall.values()) == 99

    def test_guideline_changes_result(self, tz, make_reading):
        """The same reading counts differently per guideline."""
        readings = [make_reading(125, 75, hour=12)]
        assert time_in_range(readings, Guideline.AHA_ACC, tz).overall[Category.ELEVATED] == 100
        assert time_in_range(readings, Guideline.ESC_ESH, tz).overall[Category.NORMAL] == 100

    def test_unknown_guideline_uses_aha(self, tz, make_reading):
        """Unknown guideline tokens classify as AHA/ACC."""
        readings = [make_reading(125, 75, hour=12)]
        assert time_in_range(readings, "bogus", tz) == time_in_range(
            readings, Guideline.AHA_ACC, tz
        )

    def test_to_dict(self, tz, one_per_category):
        """Serialised windows use string tokens."""
        data = time_in_range(one_per_category, Guideline.AHA_ACC, tz).to_dict()
        assert data["overall"]["stage_2"] == 25
        assert data["night"] == {
            "normal": 0,
            "elevated": 0,
            "stage_1": 0,
            "stage_2": 100,
            "crisis": 0,
        }


class TestHelpers:
    """Tests for the per-window helpers."""

    def test_window_percents_empty(self):
        """No readings gives zeros, not a division error."""
        assert window_percents([], Guideline.WHO) == ZERO

    def test_count_categories(self, one_per_category):
        """Counts per category."""
        counts = count_categories(one_per_category, Guideline.AHA_ACC)
        assert counts[Category.NORMAL] == 1
        assert counts[Category.CRISIS] == 0
