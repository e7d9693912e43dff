"""
Data access layer for the diet tracker.

Provides repositories for the food database, daily logs and the user profile.
"""
from .base_repository import Repository
from .food_repository import FoodRepository
from .log_repository import LogRepository
from .profile_repository import ProfileRepository
from .seed import seed_foods

__all__ = [
    'Repository',
    'FoodRepository',
    'LogRepository',
    'ProfileRepository',
    'seed_foods',
]
