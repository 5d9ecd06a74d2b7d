"""Tests for the bp_insights package exports."""

import pytest

import bp_insights
from bp_insights.history import filter_readings, group_by_time_period, weekly_average
from bp_insights.units import convert_bp_unit


class TestPublicApi:
    """Tests for names exported from bp_insights."""

    @pytest.mark.parametrize("name", bp_insights.__all__)
    def test_all_names_resolve(self, name):
        """Every name in __all__ exists on the package."""
        assert getattr(bp_insights, name) is not None

    @pytest.mark.parametrize(
        "name",
        [
            "weekly_average",
            "group_by_time_period",
            "filter_readings",
            "am_pm_comparison",
            "convert_bp_unit",
            "load_export",
        ],
    )
    def test_history_and_unit_helpers_exported(self, name):
        """History, unit and loader helpers are part of the public API."""
        assert name in bp_insights.__all__

    def test_exports_are_module_functions(self):
        """Package names are the module functions themselves."""
        assert bp_insights.weekly_average is weekly_average
        assert bp_insights.group_by_time_period is group_by_time_period
        assert bp_insights.filter_readings is filter_readings
        assert bp_insights.convert_bp_unit is convert_bp_unit
