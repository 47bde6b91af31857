"""
core/calorie_calc.py
────────────────────────────────────────────────────────────────────────
Daily calorie estimate for the calculator page:

1. BMR  (Mifflin–St Jeor)
2. TDEE (fixed activity multiplier)
3. max calories = TDEE

Rounding happens once, at the end, on the unrounded BMR / TDEE.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

Logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────
#  Errors
# ──────────────────────────────────────────────────────────────────────
class ValidationError(ValueError):
    """Input missing, non-positive or outside its documented range."""


class InvalidArgument(ValidationError):
    """Value not in a closed enum (sex / activity level)."""


# ──────────────────────────────────────────────────────────────────────
#  Enums + dataclasses
# ──────────────────────────────────────────────────────────────────────
class Sex(str, Enum):
    male = "male"
    female = "female"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"


ACTIVITY_MULTIPLIERS = MappingProxyType(
    {
        ActivityLevel.sedentary: 1.2,
        ActivityLevel.light: 1.375,
        ActivityLevel.moderate: 1.55,
        ActivityLevel.active: 1.725,
        ActivityLevel.very_active: 1.9,
    }
)

_SEX_OFFSET = MappingProxyType({Sex.male: 5, Sex.female: -161})

AGE_MAX = 120
HEIGHT_RANGE_CM = (100, 250)
WEIGHT_RANGE_KG = (20, 300)


@dataclass(frozen=True)
class CalorieInput:
    """Enum fields also take their string values; age may be fractional."""
    sex: Sex | str
    age: float             # years
    height: float          # cm
    weight: float          # kg
    activity_level: ActivityLevel | str


@dataclass(frozen=True)
class CalorieResult:
    bmr: int
    tdee: int
    max_calories: int

    def as_dict(self) -> dict[str, int]:
        return {"bmr": self.bmr, "tdee": self.tdee, "max_calories": self.max_calories}


# ──────────────────────────────────────────────────────────────────────
#  Helpers
# ──────────────────────────────────────────────────────────────────────
def _coerce(enum_cls: type[Enum], value: object, label: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidArgument(f"{label} must be one of: {allowed} (got {value!r})") from None


def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def round_half_up(value: float) -> int:
    """Round half away from zero (2594.5 -> 2595, -0.5 -> -1)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _validate(inp: CalorieInput) -> None:
    for label in ("age", "height", "weight"):
        value = getattr(inp, label)
        if not _is_number(value) or value <= 0:
            raise ValidationError(f"Age, height, and weight must be positive ({label}={value!r})")

    if inp.age > AGE_MAX:
        raise ValidationError(f"age out of range: must be <= {AGE_MAX} years")

    lo, hi = HEIGHT_RANGE_CM
    if not lo <= inp.height <= hi:
        raise ValidationError(f"height out of range: must be between {lo}-{hi} cm")

    lo, hi = WEIGHT_RANGE_KG
    if not lo <= inp.weight <= hi:
        raise ValidationError(f"weight out of range: must be between {lo}-{hi} kg")


# ──────────────────────────────────────────────────────────────────────
#  Public entrypoints
# ──────────────────────────────────────────────────────────────────────
def bmr_raw(sex: Sex, age: float, height: float, weight: float) -> float:
    base = 10 * weight + 6.25 * height - 5 * age
    return base + _SEX_OFFSET[sex]


def calculate_calories(inp: CalorieInput) -> CalorieResult:
    """Validate `inp` and return rounded BMR / TDEE / max calories.

    Raises ValidationError (or its InvalidArgument subclass) and never
    returns a partial result.
    """
    _validate(inp)
    sex = _coerce(Sex, inp.sex, "sex")
    level = _coerce(ActivityLevel, inp.activity_level, "activity level")

    bmr = bmr_raw(sex, inp.age, inp.height, inp.weight)
    tdee = bmr * ACTIVITY_MULTIPLIERS[level]
    result = CalorieResult(
        bmr=round_half_up(bmr),
        tdee=round_half_up(tdee),
        max_calories=round_half_up(tdee),
    )
    Logger.debug("calories %s/%s -> %s", sex.value, level.value, result)
    return result
