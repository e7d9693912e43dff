"""
Pluggable BMR formulas.

Strategies are pure functions of (gender, weight, height, age). Applying
the activity multiplier (TDEE) is done by the statistics layer.
"""
import math
from abc import ABC, abstractmethod
from typing import Dict, List

from diet_tracker.errors import InvalidInput, UnknownStrategy
from diet_tracker.models.profile import Gender


class CalorieStrategy(ABC):
    """
    Base class for BMR formulas.

    Each strategy should override:
    - key: Selection key stored in the user profile
    - description: Human-readable name
    - _male() / _female(): The formula for each gender
    """

    key: str = ""
    description: str = ""

    def compute_bmr(self, gender: Gender, weight_kg: float, height_cm: float,
                    age_years: float) -> float:
        """
        Compute basal metabolic rate in kcal/day.

        Gender.OTHER uses the mean of the male and female equations.

        Raises:
            InvalidInput: If weight, height or age is not a positive finite number
        """
        for label, value in (("weight", weight_kg), ("height", height_cm), ("age", age_years)):
            if value is None or not (math.isfinite(value) and value > 0):
                raise InvalidInput(f"BMR {label} must be a finite number greater than 0 (got {value})")

        if gender is Gender.MALE:
            return self._male(weight_kg, height_cm, age_years)
        if gender is Gender.FEMALE:
            return self._female(weight_kg, height_cm, age_years)
        return (self._male(weight_kg, height_cm, age_years)
                + self._female(weight_kg, height_cm, age_years)) / 2.0

    @abstractmethod
    def _male(self, w: float, h: float, a: float) -> float:
        pass

    @abstractmethod
    def _female(self, w: float, h: float, a: float) -> float:
        pass


class HarrisBenedictStrategy(CalorieStrategy):
    """Harris-Benedict equation, revised by Roza and Shizgal (1984)."""

    key = "harris_benedict"
    description = "Harris-Benedict Equation (Revised 1984)"

    def _male(self, w, h, a):
        return 88.362 + 13.397 * w + 4.799 * h - 5.677 * a

    def _female(self, w, h, a):
        return 447.593 + 9.247 * w + 3.098 * h - 4.330 * a


class MifflinStJeorStrategy(CalorieStrategy):
    """Mifflin-St Jeor equation (1990)."""

    key = "mifflin_st_jeor"
    description = "Mifflin-St Jeor Equation"

    def _male(self, w, h, a):
        return 10.0 * w + 6.25 * h - 5.0 * a + 5.0

    def _female(self, w, h, a):
        return 10.0 * w + 6.25 * h - 5.0 * a - 161.0


class CalculatorFactory:
    """
    Maps selection keys to strategy instances.

    Example:
        >>> factory = CalculatorFactory()
        >>> factory.get("mifflin_st_jeor").description
        'Mifflin-St Jeor Equation'
    """

    def __init__(self, register_defaults: bool = True):
        self._strategies: Dict[str, CalorieStrategy] = {}
        if register_defaults:
            self.register(HarrisBenedictStrategy())
            self.register(MifflinStJeorStrategy())

    def register(self, strategy: CalorieStrategy) -> None:
        """Register a strategy under its key (replacing any existing one)."""
        self._strategies[strategy.key.lower()] = strategy

    def get(self, key: str) -> CalorieStrategy:
        """
        Look up a strategy.

        Raises:
            UnknownStrategy: If no strategy is registered under key
        """
        strategy = self._strategies.get((key or "").strip().lower())
        if strategy is None:
            raise UnknownStrategy(key, self.available())
        return strategy

    def available(self) -> List[str]:
        """Registered keys, sorted."""
        return sorted(self._strategies)

    def __contains__(self, key: str) -> bool:
        return (key or "").strip().lower() in self._strategies


# Global factory
_factory = CalculatorFactory()


def get_factory() -> CalculatorFactory:
    """Get the global calculator factory."""
    return _factory
