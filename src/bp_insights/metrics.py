"""Derived hemodynamic metrics and shared rounding helpers."""

from __future__ import annotations

import math
from collections.abc import Iterable
from fractions import Fraction

from bp_insights.models import Band

# Pulse pressure bands (mmHg): narrow < 40, normal 40-60, wide > 60
PULSE_PRESSURE_LOW = 40
PULSE_PRESSURE_HIGH = 60

# MAP bands (mmHg): low < 70, normal 70-100, high > 100
MAP_LOW = 70
MAP_HIGH = 100


def round_half_away(value: float | Fraction) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = math.floor(abs(value) + Fraction(1, 2))
    return int(magnitude) if value >= 0 else -int(magnitude)


def round_half_up(value: float | Fraction) -> int:
    """Round to the nearest integer, halves toward +inf (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + Fraction(1, 2))


def rounded_mean(values: Iterable[float]) -> int:
    """Exact mean of the values rounded once at the end; 0 for no values."""
    items = list(values)
    if not items:
        return 0
    return round_half_away(Fraction(sum(items)) / len(items))


def rounded_percent(count: int, total: int) -> int:
    """count/total as an integer percentage; 0 when total is 0."""
    if total == 0:
        return 0
    return round_half_away(Fraction(count * 100, total))


def pulse_pressure(systolic: int, diastolic: int) -> int:
    """Pulse pressure: systolic - diastolic."""
    return systolic - diastolic


def mean_arterial_pressure(systolic: int, diastolic: int) -> int:
    """Mean arterial pressure: (systolic + 2 * diastolic) / 3, rounded.

    120/80 -> 93.33 -> 93, 140/90 -> 106.67 -> 107.
    """
    return round_half_away(Fraction(systolic + 2 * diastolic) / 3)


def interpret_pulse_pressure(pp: float) -> Band:
    """Band a pulse pressure value: low < 40 <= normal <= 60 < high."""
    if pp < PULSE_PRESSURE_LOW:
        return Band.LOW
    if pp <= PULSE_PRESSURE_HIGH:
        return Band.NORMAL
    return Band.HIGH


def interpret_map(map_value: float) -> Band:
    """Band a mean arterial pressure value: low < 70 <= normal <= 100 < high."""
    if map_value < MAP_LOW:
        return Band.LOW
    if map_value <= MAP_HIGH:
        return Band.NORMAL
    return Band.HIGH
