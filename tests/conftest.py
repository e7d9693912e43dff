"""
Shared fixtures.
"""
from datetime import date

import pytest

from diet_tracker.data import FoodRepository, LogRepository, ProfileRepository
from diet_tracker.models import BasicFood, CompositeFood

DAY = date(2025, 1, 15)


@pytest.fixture
def foods():
    """In-memory food repository with a few basics and nested composites."""
    repo = FoodRepository()
    repo.upsert(BasicFood("apple", "Apple", {"fruit"}, 52))
    repo.upsert(BasicFood("banana", "Banana", {"fruit", "sweet"}, 105))
    repo.upsert(BasicFood("bread", "Bread", {"grain"}, 80))
    repo.upsert(BasicFood("pb", "Peanut Butter", {"spread"}, 190))
    repo.upsert(BasicFood("jelly", "Jelly", {"spread", "sweet"}, 50))
    repo.upsert(CompositeFood("pb_sandwich", "PB Sandwich", {"sandwich"},
                              [("bread", 2), ("pb", 1)]))
    repo.upsert(CompositeFood("pbj", "PB&J", {"sandwich", "sweet"},
                              [("pb_sandwich", 1), ("jelly", 1)]))
    return repo


@pytest.fixture
def logs():
    return LogRepository()


@pytest.fixture
def profiles():
    return ProfileRepository()
