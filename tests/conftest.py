"""Shared pytest fixtures for bp-insights tests."""

from collections.abc import Callable
from datetime import UTC, datetime
from itertools import count

import pytest

from bp_insights.models import Reading

ReadingFactory = Callable[..., Reading]


def epoch(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> int:
    """Epoch seconds of a UTC wall-clock moment."""
    return int(datetime(year, month, day, hour, minute, tzinfo=UTC).timestamp())


@pytest.fixture
def tz():
    """Zone used by time-dependent tests."""
    return UTC


@pytest.fixture
def now() -> datetime:
    """Reference "now": 15 Jan 2025, noon UTC."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_reading() -> ReadingFactory:
    """Factory for readings on 15 Jan 2025 (UTC) with sequential ids."""
    ids = count(1)

    def _make(
        systolic: int,
        diastolic: int,
        hour: int = 10,
        minute: int = 0,
        day: int = 15,
        month: int = 1,
        pulse: int | None = None,
        id: str | None = None,
    ) -> Reading:
        return Reading(
            id=id or f"r{next(ids)}",
            systolic=systolic,
            diastolic=diastolic,
            timestamp=epoch(2025, month, day, hour, minute),
            pulse=pulse,
        )

    return _make


@pytest.fixture
def sample_reading() -> Reading:
    """Create a sample blood pressure reading for testing."""
    return Reading(
        id="sample",
        systolic=120,
        diastolic=80,
        timestamp=epoch(2025, 1, 15, 10, 30),
        pulse=72,
        location="home",
        posture="sitting",
        notes="after coffee",
        weight=78.5,
    )


@pytest.fixture
def one_per_category(make_reading) -> list[Reading]:
    """One reading per AHA/ACC category below crisis, one per day-part."""
    return [
        make_reading(110, 70, hour=8),  # normal, morning
        make_reading(125, 75, hour=12),  # elevated, day
        make_reading(135, 85, hour=19),  # stage_1, evening
        make_reading(150, 95, hour=23),  # stage_2, night
    ]
