"""
Food entities: basic foods with fixed calories and composite foods
built from other foods.
"""
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Set, Tuple

from diet_tracker.errors import InvalidServings, ValidationError


def normalize_keywords(keywords: Iterable[str]) -> Set[str]:
    """
    Normalize keywords to a set of lowercase, trimmed tokens.

    Args:
        keywords: Raw keyword strings

    Returns:
        Set of non-empty lowercase keywords

    Example:
        >>> sorted(normalize_keywords([" Fruit", "SWEET", ""]))
        ['fruit', 'sweet']
    """
    return {k.strip().lower() for k in keywords if k and k.strip()}


def validate_servings(servings) -> float:
    """Return servings as float, raising InvalidServings unless > 0."""
    try:
        value = float(servings)
    except (TypeError, ValueError):
        raise InvalidServings(servings)
    if not (math.isfinite(value) and value > 0):
        raise InvalidServings(servings)
    return value


@dataclass
class Food:
    """
    Common attributes of every food.

    Attributes:
        id: Unique identifier shared by basic and composite foods
        name: Display name
        keywords: Search keywords (stored lowercase)
    """
    id: str
    name: str
    keywords: Set[str] = field(default_factory=set)

    def __post_init__(self):
        """Validate id and normalize keywords."""
        self.id = (self.id or "").strip()
        if not self.id:
            raise ValidationError("Food ID cannot be empty")
        if "|" in self.name:
            raise ValidationError("Food name cannot contain '|'")
        if any(c in self.id for c in "|, "):
            raise ValidationError(f"Food ID cannot contain '|', ',' or spaces (got '{self.id}')")
        self.keywords = normalize_keywords(self.keywords)

    @property
    def is_composite(self) -> bool:
        return False

    def matches_keywords(self, query: Set[str], match_all: bool) -> bool:
        """
        Check keyword match against a normalized query set.

        Args:
            query: Lowercase query tokens
            match_all: True for ALL semantics, False for ANY

        Returns:
            True if the food matches
        """
        if not query:
            return False
        if match_all:
            return query <= self.keywords
        return bool(query & self.keywords)


@dataclass
class BasicFood(Food):
    """
    Leaf food with a fixed calorie value per serving.

    Example:
        >>> apple = BasicFood("apple", "Apple", {"fruit"}, 52)
        >>> apple.calories
        52.0
    """
    calories: float = 0.0

    def __post_init__(self):
        """Validate calories."""
        super().__post_init__()
        try:
            self.calories = float(self.calories)
        except (TypeError, ValueError):
            raise ValidationError(f"Calories must be a number (got {self.calories})")
        if not math.isfinite(self.calories):
            raise ValidationError(f"Calories must be a finite number (got {self.calories})")
        if self.calories < 0:
            raise ValidationError(f"Calories cannot be negative (got {self.calories})")


@dataclass
class Component:
    """A (food id, servings) pair inside a composite food."""
    food_id: str
    servings: float

    def __post_init__(self):
        self.servings = validate_servings(self.servings)


@dataclass
class CompositeFood(Food):
    """
    Food defined as a weighted combination of other foods.

    Calories are not stored; they are resolved against the food
    database on every query.

    Example:
        >>> pb = CompositeFood("pb_sandwich", "PB Sandwich", set(),
        ...                    [Component("bread", 2), Component("pb", 1)])
        >>> pb.component_ids()
        ['bread', 'pb']
    """
    components: List[Component] = field(default_factory=list)

    def __post_init__(self):
        """Coerce (id, servings) tuples into Component objects."""
        super().__post_init__()
        self.components = [
            c if isinstance(c, Component) else Component(*c)
            for c in self.components
        ]

    @property
    def is_composite(self) -> bool:
        return True

    def component_ids(self) -> List[str]:
        """Component food ids in order."""
        return [c.food_id for c in self.components]

    def component_pairs(self) -> List[Tuple[str, float]]:
        """Components as plain (food_id, servings) tuples."""
        return [(c.food_id, c.servings) for c in self.components]
