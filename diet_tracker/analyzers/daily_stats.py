"""
Daily calorie statistics: target (BMR x activity) versus consumption.
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

import pandas as pd

from diet_tracker.errors import NotFound
from diet_tracker.strategies import get_factory


@dataclass
class DailyStats:
    """
    Calorie summary for one date.

    Target fields are None when there is no user profile or no daily
    profile on or before the date.

    Attributes:
        date: Evaluated date
        consumed: Calories logged for the date
        strategy: Key of the calculation method used
        age: Age on the date
        weight_kg: Weight from the daily profile used
        activity_label: Activity level from the daily profile used
        bmr: Basal metabolic rate
        multiplier: Activity multiplier
        target: BMR x multiplier (TDEE)
    """
    date: date
    consumed: float
    strategy: Optional[str] = None
    age: Optional[int] = None
    weight_kg: Optional[float] = None
    activity_label: Optional[str] = None
    bmr: Optional[float] = None
    multiplier: Optional[float] = None
    target: Optional[float] = None

    @property
    def has_target(self) -> bool:
        return self.target is not None

    @property
    def remaining(self) -> Optional[float]:
        """Calories left to reach the target (negative when over)."""
        if self.target is None:
            return None
        return self.target - self.consumed

    @property
    def percent_of_target(self) -> Optional[float]:
        if not self.target:
            return None
        return 100.0 * self.consumed / self.target


def compute_daily_stats(profile_repo, log_repo, food_repo, on_date: date,
                        factory=None) -> DailyStats:
    """
    Compute consumption and target calories for a date.

    The target uses the most recent daily profile dated on or before
    on_date and the profile's selected calculation method.

    Args:
        profile_repo: ProfileRepository
        log_repo: LogRepository
        food_repo: FoodRepository (resolves calories at query time)
        on_date: Date to evaluate
        factory: CalculatorFactory (defaults to the global one)

    Returns:
        DailyStats for the date

    Raises:
        UnknownFood: If a logged food no longer resolves
        UnknownStrategy: If the profile's method is not registered
    """
    factory = factory or get_factory()
    consumed = log_repo.total_calories(on_date, food_repo.resolve_calories)
    stats = DailyStats(date=on_date, consumed=consumed)

    try:
        user = profile_repo.get_user()
    except NotFound:
        return stats

    strategy = factory.get(user.calculation_method)
    stats.strategy = strategy.key
    stats.age = user.age(on_date)

    daily = profile_repo.latest_daily(on_date)
    if daily is None:
        return stats

    stats.weight_kg = daily.weight_kg
    stats.activity_label = daily.activity_level.label
    stats.bmr = strategy.compute_bmr(user.gender, daily.weight_kg, user.height_cm, stats.age)
    stats.multiplier = daily.activity_level.multiplier
    stats.target = stats.bmr * stats.multiplier
    return stats


def weight_history(profile_repo) -> List[Tuple[date, float]]:
    """(date, weight_kg) for every daily profile, dates ascending."""
    return [(d.date, d.weight_kg) for d in profile_repo.get_all()]


def build_history_frame(profile_repo, log_repo, food_repo, start: date, end: date,
                        factory=None) -> pd.DataFrame:
    """
    Build a per-day DataFrame of consumption, target and weight.

    Args:
        start: First date (inclusive)
        end: Last date (inclusive)

    Returns:
        DataFrame with columns: date, consumed, target, weight_kg.
        Days with nothing logged have consumed = NaN; days without a
        recorded weight have weight_kg = NaN.
    """
    logged = set(log_repo.dates())
    weights = dict(weight_history(profile_repo))

    rows = []
    for day in pd.date_range(start=start, end=end, freq="D"):
        day = day.date()
        stats = compute_daily_stats(profile_repo, log_repo, food_repo, day, factory)
        rows.append({
            "date": day,
            "consumed": stats.consumed if day in logged else float("nan"),
            "target": stats.target if stats.target is not None else float("nan"),
            "weight_kg": weights.get(day, float("nan")),
        })

    return pd.DataFrame(rows, columns=["date", "consumed", "target", "weight_kg"])
