"""
Food database repository.

Store format, one food per line:
    B|id|name|kw1,kw2|calories
    C|id|name|kw1,kw2|component:servings,component:servings
"""
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Optional

from diet_tracker.errors import DietTrackerError
from diet_tracker.models.food import BasicFood, Component, CompositeFood, Food
from diet_tracker.models.food_graph import (
    FoodSearch,
    MatchMode,
    contains,
    find_dependents,
    resolve_calories,
    validate_food,
    with_component,
)

from .base_repository import Repository
from .storage import format_number, parse_number, read_records, write_records

FIELDS = 5


class FoodRepository(Repository):
    """
    Authoritative collection of basic and composite foods.

    Basic and composite foods share one id namespace. Every upsert
    re-checks the component graph, so the stored graph is always acyclic
    and every component id exists.
    """

    entity_label = "Food"

    def _key(self, food: Food) -> str:
        return food.id

    def _validate(self, food: Food) -> None:
        validate_food(self._items, food)

    @property
    def arena(self):
        """Read-only view of the food arena."""
        return MappingProxyType(self._items)

    def load(self) -> None:
        """
        Load foods from the store in file order.

        Composite foods may reference foods defined later in the file.
        Malformed lines are skipped; composites with unknown components
        or cycles are dropped. Both are recorded in load_warnings.
        """
        self._items = {}
        self.load_warnings = []
        if self.filepath is None:
            return

        for line_no, record in enumerate(read_records(self.filepath, FIELDS), 1):
            try:
                food = self._from_record(record)
            except (DietTrackerError, ValueError) as e:
                self._warn(f"{self.filepath.name} line {line_no}: {e}")
                continue
            if food is None:
                self._warn(f"{self.filepath.name} line {line_no}: unrecognized record")
                continue
            self._items[food.id] = food

        self._drop_invalid_composites()

    def _drop_invalid_composites(self) -> None:
        changed = True
        while changed:
            changed = False
            for food in list(self._items.values()):
                if not food.is_composite:
                    continue
                for comp_id in food.component_ids():
                    if comp_id not in self._items:
                        problem = f"unknown component '{comp_id}'"
                    elif contains(self._items, comp_id, food.id):
                        problem = f"component '{comp_id}' forms a cycle"
                    else:
                        continue
                    self._warn(f"Dropped composite food '{food.id}': {problem}")
                    del self._items[food.id]
                    changed = True
                    break

    def save(self) -> None:
        """Write all foods to the store in insertion order."""
        if self.filepath is None:
            return
        write_records(self.filepath, [self._to_record(f) for f in self._items.values()])

    @staticmethod
    def _from_record(record: List[str]) -> Optional[Food]:
        kind, food_id, name, keywords, value = record[:FIELDS]
        keyword_list = keywords.split(",") if keywords else []

        if kind == "B":
            calories = parse_number(value)
            if calories is None:
                raise ValueError(f"invalid calories '{value}'")
            return BasicFood(food_id, name, set(keyword_list), calories)

        if kind == "C":
            components = []
            for part in filter(None, (p.strip() for p in value.split(","))):
                comp_id, sep, servings = part.rpartition(":")
                if not sep:
                    raise ValueError(f"invalid component '{part}'")
                components.append(Component(comp_id.strip(), servings))
            return CompositeFood(food_id, name, set(keyword_list), components)

        return None

    @staticmethod
    def _to_record(food: Food) -> List[str]:
        keywords = ",".join(sorted(food.keywords))
        if food.is_composite:
            value = ",".join(
                f"{c.food_id}:{format_number(c.servings)}" for c in food.components
            )
            return ["C", food.id, food.name, keywords, value]
        return ["B", food.id, food.name, keywords, format_number(food.calories)]

    # Food model operations

    def resolve_calories(self, food_id: str) -> float:
        """
        Calories per serving, resolved through composite components.

        Raises:
            UnknownFood: If the food or one of its components is absent
            CycleDetected: If the stored graph contains a cycle
        """
        return resolve_calories(self._items, food_id)

    def add_component(self, composite_id: str, component_id: str, servings) -> CompositeFood:
        """
        Append a component to a composite food.

        Raises:
            UnknownFood: If either id is absent
            InvalidServings: If servings <= 0
            CycleWouldForm: If the component is or contains the composite

        Returns:
            Copy of the updated composite
        """
        updated = with_component(self._items, composite_id, component_id, servings)
        self.upsert(updated)
        return updated

    def search(self, keywords: Iterable[str], mode=MatchMode.ANY) -> FoodSearch:
        """
        Keyword search.

        Args:
            keywords: Query tokens (case-insensitive)
            mode: MatchMode.ALL (every token) or MatchMode.ANY (at least one)

        Returns:
            Restartable iterable of matching foods (copies)
        """
        return FoodSearch(self._items, keywords, mode)

    def dependents_of(self, food_id: str) -> List[str]:
        """Ids of composites that use food_id directly as a component."""
        return find_dependents(self._items, food_id)

    def counts(self) -> dict:
        """Number of basic and composite foods."""
        composite = sum(1 for f in self._items.values() if f.is_composite)
        return {"basic": len(self._items) - composite, "composite": composite}
