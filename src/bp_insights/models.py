"""Data models for blood pressure insights.

All models are immutable value objects. Engine functions build them from
their arguments and never mutate readings handed in by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Guideline(str, Enum):
    """Regional classification guidelines (persisted tokens)."""

    AHA_ACC = "aha_acc"  # American Heart Association / ACC
    ESC_ESH = "esc_esh"  # European Society of Cardiology / ESH
    JSH = "jsh"  # Japanese Society of Hypertension
    WHO = "who"  # WHO/ISH 1999


class Category(str, Enum):
    """Blood pressure category, ordered from lowest to highest risk."""

    NORMAL = "normal"
    ELEVATED = "elevated"
    STAGE_1 = "stage_1"
    STAGE_2 = "stage_2"
    CRISIS = "crisis"


CATEGORY_ORDER: tuple[Category, ...] = (
    Category.NORMAL,
    Category.ELEVATED,
    Category.STAGE_1,
    Category.STAGE_2,
    Category.CRISIS,
)

HIGH_ALERT_CATEGORIES = frozenset({Category.STAGE_2, Category.CRISIS})


class DayPart(str, Enum):
    """Time-of-day window derived from the local hour of a reading."""

    MORNING = "morning"  # 06:00 - 09:59
    DAY = "day"  # 10:00 - 17:59
    EVENING = "evening"  # 18:00 - 21:59
    NIGHT = "night"  # 22:00 - 05:59


DAY_PARTS: tuple[DayPart, ...] = (
    DayPart.MORNING,
    DayPart.DAY,
    DayPart.EVENING,
    DayPart.NIGHT,
)


class Band(str, Enum):
    """Low/normal/high band for a derived metric."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


@dataclass(frozen=True)
class Reading:
    """Single blood pressure measurement.

    Contextual metadata (location, posture, notes, weight) is carried
    through untouched; the engine only looks at the pressures, the pulse
    and the timestamp.
    """

    id: str
    systolic: int  # mmHg
    diastolic: int  # mmHg
    timestamp: int  # epoch seconds
    pulse: int | None = None  # bpm
    location: str | None = None
    posture: str | None = None
    notes: str | None = None
    weight: float | None = None  # kg

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reading:
        """Build a reading from a storage row."""
        pulse = data.get("pulse")
        weight = data.get("weight")
        return cls(
            id=str(data["id"]),
            systolic=int(data["systolic"]),
            diastolic=int(data["diastolic"]),
            timestamp=int(data["timestamp"]),
            pulse=int(pulse) if pulse is not None else None,
            location=data.get("location"),
            posture=data.get("posture"),
            notes=data.get("notes"),
            weight=float(weight) if weight is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "systolic": self.systolic,
            "diastolic": self.diastolic,
            "pulse": self.pulse,
            "timestamp": self.timestamp,
            "location": self.location,
            "posture": self.posture,
            "notes": self.notes,
            "weight": self.weight,
        }

    def __str__(self) -> str:
        """Human-readable representation."""
        pulse = f"{self.pulse} bpm" if self.pulse is not None else "no pulse"
        return f"BP: {self.systolic}/{self.diastolic} mmHg, Pulse: {pulse}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating raw input values."""

    is_valid: bool
    errors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


@dataclass(frozen=True)
class CircadianAverage:
    """Rounded average pressure for one day-part."""

    systolic: int
    diastolic: int
    count: int

    def to_dict(self) -> dict[str, int]:
        return {"systolic": self.systolic, "diastolic": self.diastolic, "count": self.count}


@dataclass(frozen=True)
class CircadianBreakdown:
    """Readings partitioned into the four day-parts with per-part averages."""

    morning: tuple[Reading, ...]
    day: tuple[Reading, ...]
    evening: tuple[Reading, ...]
    night: tuple[Reading, ...]
    morning_avg: CircadianAverage | None
    day_avg: CircadianAverage | None
    evening_avg: CircadianAverage | None
    night_avg: CircadianAverage | None

    def readings(self, part: DayPart) -> tuple[Reading, ...]:
        """Readings falling in the given day-part."""
        return getattr(self, part.value)

    def average(self, part: DayPart) -> CircadianAverage | None:
        """Average for the given day-part, None when it has no readings."""
        return getattr(self, f"{part.value}_avg")

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for part in DAY_PARTS:
            avg = self.average(part)
            result[part.value] = [r.id for r in self.readings(part)]
            result[f"{part.value}_avg"] = avg.to_dict() if avg else None
        return result


@dataclass(frozen=True)
class TimeInRangeResult:
    """Percent of readings per category, overall and per day-part."""

    overall: dict[Category, int]
    morning: dict[Category, int]
    day: dict[Category, int]
    evening: dict[Category, int]
    night: dict[Category, int]

    def window(self, part: DayPart) -> dict[Category, int]:
        return getattr(self, part.value)

    def to_dict(self) -> dict[str, dict[str, int]]:
        windows = {"overall": self.overall}
        windows.update({part.value: self.window(part) for part in DAY_PARTS})
        return {
            name: {cat.value: percent for cat, percent in percents.items()}
            for name, percents in windows.items()
        }


@dataclass(frozen=True)
class MorningSurgeResult:
    """Result of comparing the first morning reading against the prior night."""

    has_surge: bool
    delta: int
    surge_reading_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_surge": self.has_surge,
            "delta": self.delta,
            "surge_reading_id": self.surge_reading_id,
        }


@dataclass(frozen=True)
class TagCorrelation:
    """Average pressure difference between tagged and untagged readings."""

    tag: str
    avg_systolic_delta: int
    avg_diastolic_delta: int
    tagged_count: int
    untagged_count: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "avg_systolic_delta": self.avg_systolic_delta,
            "avg_diastolic_delta": self.avg_diastolic_delta,
            "tagged_count": self.tagged_count,
            "untagged_count": self.untagged_count,
        }


@dataclass(frozen=True)
class CategoryStat:
    """Count and percentage of one category within a report."""

    category: Category
    range: str
    count: int
    percent: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.category.value,
            "range": self.range,
            "count": self.count,
            "percent": self.percent,
        }


@dataclass(frozen=True)
class ReportStats:
    """Summary statistics for a set of readings under one guideline."""

    total: int = 0
    avg_systolic: int = 0
    avg_diastolic: int = 0
    avg_pulse: int = 0
    avg_pulse_pressure: int = 0
    avg_map: int = 0
    min_systolic: int = 0
    max_systolic: int = 0
    min_diastolic: int = 0
    max_diastolic: int = 0
    category_breakdown: tuple[CategoryStat, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "avg_systolic": self.avg_systolic,
            "avg_diastolic": self.avg_diastolic,
            "avg_pulse": self.avg_pulse,
            "avg_pulse_pressure": self.avg_pulse_pressure,
            "avg_map": self.avg_map,
            "min_systolic": self.min_systolic,
            "max_systolic": self.max_systolic,
            "min_diastolic": self.min_diastolic,
            "max_diastolic": self.max_diastolic,
            "category_breakdown": [stat.to_dict() for stat in self.category_breakdown],
        }


@dataclass(frozen=True)
class WeeklyAverage:
    """Rounded average over the trailing seven days."""

    systolic: int
    diastolic: int
    has_data: bool

    def to_dict(self) -> dict[str, Any]:
        return {"systolic": self.systolic, "diastolic": self.diastolic, "has_data": self.has_data}


@dataclass(frozen=True)
class AmPmComparison:
    """Rounded averages for readings taken before and after noon."""

    am_systolic: int
    am_diastolic: int
    pm_systolic: int
    pm_diastolic: int
    has_am_data: bool
    has_pm_data: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "am": {"systolic": self.am_systolic, "diastolic": self.am_diastolic},
            "pm": {"systolic": self.pm_systolic, "diastolic": self.pm_diastolic},
            "has_am_data": self.has_am_data,
            "has_pm_data": self.has_pm_data,
        }
