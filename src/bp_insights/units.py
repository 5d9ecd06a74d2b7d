"""Blood pressure unit conversion (mmHg <-> kPa)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

MMHG = "mmHg"
KPA = "kPa"

MMHG_PER_KPA = Decimal("7.5")


def convert_bp_unit(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a pressure between mmHg and kPa.

    mmHg -> kPa is rounded to one decimal, kPa -> mmHg to a whole number.

    Raises:
        ValueError: If either unit is not mmHg or kPa
    """
    for unit in (from_unit, to_unit):
        if unit not in (MMHG, KPA):
            raise ValueError(f"Unsupported unit: {unit}")

    if from_unit == to_unit:
        return value

    exact = Decimal(str(value))
    if from_unit == MMHG:
        return float((exact / MMHG_PER_KPA).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
    return int((exact * MMHG_PER_KPA).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
