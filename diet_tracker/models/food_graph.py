"""
Graph operations over the food arena (a mapping of id -> Food).

Composite foods reference their components by id, so every walk here
goes through the arena and guards against revisiting an ancestor.
"""
import copy
from enum import Enum
from typing import Iterable, Iterator, Mapping, Optional, Set

from diet_tracker.errors import (
    CycleDetected,
    CycleWouldForm,
    UnknownFood,
    ValidationError,
)
from diet_tracker.models.food import (
    Component,
    CompositeFood,
    Food,
    normalize_keywords,
    validate_servings,
)


class MatchMode(Enum):
    """Keyword search semantics."""
    ALL = "all"
    ANY = "any"


def resolve_calories(foods: Mapping[str, Food], food_id: str) -> float:
    """
    Resolve calories per serving for a food.

    Basic foods return their stored value. Composite foods sum
    component calories x servings, recursively.

    Args:
        foods: Food arena keyed by id
        food_id: Food to resolve

    Returns:
        Calories per serving

    Raises:
        UnknownFood: If any id on the way is absent
        CycleDetected: If recursion revisits an ancestor
    """
    return _resolve(foods, food_id, [])


def _resolve(foods: Mapping[str, Food], food_id: str, path: list) -> float:
    if food_id in path:
        raise CycleDetected(path + [food_id])

    food = foods.get(food_id)
    if food is None:
        raise UnknownFood(food_id)

    if not food.is_composite:
        return food.calories

    path.append(food_id)
    total = 0.0
    for component in food.components:
        total += _resolve(foods, component.food_id, path) * component.servings
    path.pop()
    return total


def contains(foods: Mapping[str, Food], root_id: str, target_id: str) -> bool:
    """
    Check whether root_id is target_id or transitively contains it.

    Unknown ids are treated as leaves.
    """
    stack = [root_id]
    visited: Set[str] = set()
    while stack:
        current = stack.pop()
        if current == target_id:
            return True
        if current in visited:
            continue
        visited.add(current)
        food = foods.get(current)
        if food is not None and food.is_composite:
            stack.extend(food.component_ids())
    return False


def check_component(foods: Mapping[str, Food], composite_id: str,
                    component_id: str, servings) -> float:
    """
    Validate adding component_id to composite_id without changing anything.

    Returns:
        Validated servings as float

    Raises:
        UnknownFood: If either id is absent
        ValidationError: If composite_id is not a composite food
        InvalidServings: If servings <= 0
        CycleWouldForm: If the component is or contains the composite
    """
    composite = foods.get(composite_id)
    if composite is None:
        raise UnknownFood(composite_id)
    if component_id not in foods:
        raise UnknownFood(component_id)
    if not composite.is_composite:
        raise ValidationError(f"'{composite_id}' is a basic food and cannot have components")

    servings = validate_servings(servings)

    if contains(foods, component_id, composite_id):
        raise CycleWouldForm(composite_id, component_id)

    return servings


def with_component(foods: Mapping[str, Food], composite_id: str,
                   component_id: str, servings) -> CompositeFood:
    """
    Build a copy of a composite food with one more component.

    The arena is not modified; callers store the result.
    """
    servings = check_component(foods, composite_id, component_id, servings)
    composite = foods[composite_id]
    return CompositeFood(
        composite.id,
        composite.name,
        set(composite.keywords),
        list(composite.components) + [Component(component_id, servings)],
    )


def validate_food(foods: Mapping[str, Food], food: Food) -> None:
    """
    Check that storing food in the arena keeps every invariant.

    Raises:
        UnknownFood: If a component id is absent
        CycleWouldForm: If the food would (transitively) contain itself
    """
    if not food.is_composite:
        return
    for component in food.components:
        if component.food_id not in foods and component.food_id != food.id:
            raise UnknownFood(component.food_id)
        if contains(foods, component.food_id, food.id):
            raise CycleWouldForm(food.id, component.food_id)


def find_dependents(foods: Mapping[str, Food], food_id: str) -> list:
    """Ids of composite foods that list food_id as a direct component."""
    return [
        f.id for f in foods.values()
        if f.is_composite and food_id in f.component_ids()
    ]


class FoodSearch:
    """
    Restartable keyword search over a food arena.

    Each iteration walks the arena afresh, so the same search object
    reflects later repository changes. Yielded foods are copies.

    Example:
        >>> results = FoodSearch(foods, ["fruit", "sweet"], MatchMode.ALL)
        >>> [f.id for f in results]
        ['banana']
    """

    def __init__(self, foods: Mapping[str, Food], keywords: Iterable[str],
                 mode: MatchMode = MatchMode.ANY):
        self._foods = foods
        self.keywords = normalize_keywords(keywords)
        self.mode = MatchMode(mode)

    def __iter__(self) -> Iterator[Food]:
        match_all = self.mode is MatchMode.ALL
        for food in list(self._foods.values()):
            if food.matches_keywords(self.keywords, match_all):
                yield copy.deepcopy(food)

    def first(self) -> Optional[Food]:
        return next(iter(self), None)
