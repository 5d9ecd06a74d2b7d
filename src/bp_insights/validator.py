"""Range and consistency checks on raw blood pressure input.

Every rule is checked independently and all violations are returned
together, so a form can highlight every bad field at once. Validation
never blocks classification; validity and category are separate outputs.
"""

from __future__ import annotations

from bp_insights.models import ValidationResult

BP_LIMITS = {
    "systolic": {"min": 60, "max": 300},
    "diastolic": {"min": 40, "max": 200},
    "pulse": {"min": 30, "max": 250},
}

# Error codes; the presentation layer owns the wording
SYSTOLIC_REQUIRED = "systolic_required"
SYSTOLIC_OUT_OF_RANGE = "systolic_out_of_range"
DIASTOLIC_REQUIRED = "diastolic_required"
DIASTOLIC_OUT_OF_RANGE = "diastolic_out_of_range"
SYSTOLIC_NOT_ABOVE_DIASTOLIC = "systolic_not_above_diastolic"
PULSE_OUT_OF_RANGE = "pulse_out_of_range"


def _out_of_range(value: float, field: str) -> bool:
    limits = BP_LIMITS[field]
    return value < limits["min"] or value > limits["max"]


def validate(
    systolic: float | None,
    diastolic: float | None,
    pulse: float | None = None,
) -> ValidationResult:
    """Validate raw input values.

    Args:
        systolic: Systolic pressure in mmHg (required)
        diastolic: Diastolic pressure in mmHg (required)
        pulse: Heart rate in bpm (optional)

    Returns:
        ValidationResult with every violated rule's error code
    """
    errors: list[str] = []

    if systolic is None:
        errors.append(SYSTOLIC_REQUIRED)
    elif _out_of_range(systolic, "systolic"):
        errors.append(SYSTOLIC_OUT_OF_RANGE)

    if diastolic is None:
        errors.append(DIASTOLIC_REQUIRED)
    elif _out_of_range(diastolic, "diastolic"):
        errors.append(DIASTOLIC_OUT_OF_RANGE)

    if systolic is not None and diastolic is not None and systolic <= diastolic:
        errors.append(SYSTOLIC_NOT_ABOVE_DIASTOLIC)

    if pulse is not None and _out_of_range(pulse, "pulse"):
        errors.append(PULSE_OUT_OF_RANGE)

    return ValidationResult(is_valid=not errors, errors=tuple(errors))
