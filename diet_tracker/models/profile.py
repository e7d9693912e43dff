"""
User profile models: static attributes and per-date measurements.
"""
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum

from diet_tracker.errors import ValidationError


class Gender(Enum):
    """Gender used by BMR formulas. Values are the stored codes."""
    MALE = "M"
    FEMALE = "F"
    OTHER = "O"

    @classmethod
    def parse(cls, text: str) -> 'Gender':
        """
        Parse user input like "f", "female" or "O".

        Raises:
            ValidationError: If text is not a known gender
        """
        key = (text or "").strip().upper()
        for gender in cls:
            if key in (gender.value, gender.name):
                return gender
        raise ValidationError(f"Unknown gender: '{text}' (use M, F or O)")

    @property
    def label(self) -> str:
        return self.name.capitalize()


class ActivityLevel(Enum):
    """
    Activity levels in increasing order.

    Each value is (stored code, multiplier, description).
    """
    SEDENTARY = ("S", 1.2, "little or no exercise")
    LIGHTLY_ACTIVE = ("L", 1.375, "light exercise/sports 1-3 days/week")
    MODERATELY_ACTIVE = ("M", 1.55, "moderate exercise/sports 3-5 days/week")
    VERY_ACTIVE = ("V", 1.725, "hard exercise/sports 6-7 days a week")
    EXTREMELY_ACTIVE = ("E", 1.9, "very hard exercise & physical job")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def multiplier(self) -> float:
        return self.value[1]

    @property
    def description(self) -> str:
        return self.value[2]

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").capitalize()

    @classmethod
    def parse(cls, text: str) -> 'ActivityLevel':
        """
        Parse a code ("M"), a 1-based level ("3") or a name prefix ("moderate").

        Raises:
            ValidationError: If text matches no level
        """
        key = (text or "").strip().upper().replace(" ", "_")
        levels = list(cls)
        if key.isdigit() and 1 <= int(key) <= len(levels):
            return levels[int(key) - 1]
        for level in levels:
            if key == level.code or (key and level.name.startswith(key)):
                return level
        raise ValidationError(f"Unknown activity level: '{text}'")


def age_on(birth_date: date, as_of: date) -> int:
    """
    Age in whole years on a given date.

    Example:
        >>> age_on(date(1990, 6, 15), date(2024, 6, 14))
        33
    """
    years = as_of.year - birth_date.year
    if (as_of.month, as_of.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


@dataclass
class UserProfile:
    """
    Static user attributes.

    Attributes:
        gender: Gender used by BMR formulas
        height_cm: Height in centimetres (> 0)
        birth_date: Date of birth; age is derived, never stored
        calculation_method: Key of the selected calorie strategy
    """
    gender: Gender
    height_cm: float
    birth_date: date
    calculation_method: str = "harris_benedict"

    def __post_init__(self):
        self.height_cm = _positive(self.height_cm, "Height")

    def age(self, as_of: date) -> int:
        """Age on the evaluation date."""
        return age_on(self.birth_date, as_of)


@dataclass
class DailyProfile:
    """
    Per-date measurements.

    Attributes:
        date: Date the measurement applies to
        weight_kg: Body weight in kilograms (> 0)
        activity_level: Activity level for the day
    """
    date: date
    weight_kg: float
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY

    def __post_init__(self):
        self.weight_kg = _positive(self.weight_kg, "Weight")


def _positive(value, label: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a number (got {value})")
    if not math.isfinite(number):
        raise ValidationError(f"{label} must be a finite number (got {value})")
    if not number > 0:
        raise ValidationError(f"{label} must be greater than 0 (got {value})")
    return number
