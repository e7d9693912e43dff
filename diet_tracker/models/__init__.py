"""
Data models for the diet tracker.
"""
from .food import Food, BasicFood, CompositeFood, Component, normalize_keywords, validate_servings
from .food_graph import MatchMode, FoodSearch, resolve_calories
from .daily_log import LogEntry, DailyLog
from .profile import Gender, ActivityLevel, UserProfile, DailyProfile, age_on

__all__ = [
    # Food models
    'Food',
    'BasicFood',
    'CompositeFood',
    'Component',
    'normalize_keywords',
    'validate_servings',
    # Food graph
    'MatchMode',
    'FoodSearch',
    'resolve_calories',
    # Log models
    'LogEntry',
    'DailyLog',
    # Profile models
    'Gender',
    'ActivityLevel',
    'UserProfile',
    'DailyProfile',
    'age_on',
]
