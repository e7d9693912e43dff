"""
Undoable commands that change the food database.
"""
from typing import Optional

from diet_tracker.errors import OverwriteRejected, UndoBlocked, UnknownFood
from diet_tracker.models.food import Food

from .base import UndoableCommand


class AddFoodCommand(UndoableCommand):
    """
    Add a basic or composite food.

    With overwrite=True an existing food with the same id is replaced
    and undo restores it; otherwise an existing id is rejected.
    """

    def __init__(self, food_repo, food: Food, overwrite: bool = False, log_repo=None):
        """
        Args:
            food_repo: FoodRepository to add to
            food: Food to add
            overwrite: Replace an existing food with the same id
            log_repo: LogRepository consulted before undo removes the food
        """
        super().__init__()
        self.food_repo = food_repo
        self.log_repo = log_repo
        self.food = food
        self.overwrite = overwrite
        self._replaced: Optional[Food] = None

    def execute(self) -> str:
        replaced = None
        if self.food.id in self.food_repo:
            if not self.overwrite:
                raise OverwriteRejected(self.food.id)
            replaced = self.food_repo.get(self.food.id)

        self.food_repo.upsert(self.food)
        self._replaced = replaced

        calories = self.food_repo.resolve_calories(self.food.id)
        verb = "Replaced" if self._replaced is not None else "Added"
        return f"{verb} food '{self.food.id}' ({calories:g} cal/serving)"

    def undo(self) -> None:
        if self._replaced is not None:
            self.food_repo.upsert(self._replaced)
            return

        dependents = self.food_repo.dependents_of(self.food.id)
        if dependents:
            raise UndoBlocked(
                f"Cannot remove '{self.food.id}': used as a component of "
                + ", ".join(dependents)
            )
        if self.log_repo is not None:
            refs = self.log_repo.references_to(self.food.id)
            if refs:
                raise UndoBlocked(
                    f"Cannot remove '{self.food.id}': referenced by {len(refs)} log entr"
                    + ("y" if len(refs) == 1 else "ies")
                )

        self.food_repo.remove(self.food.id)

    def describe(self) -> str:
        kind = "composite" if self.food.is_composite else "basic"
        return f"Add {kind} food: {self.food.name} ({self.food.id})"


class UpdateFoodCommand(UndoableCommand):
    """Replace an existing food; undo restores the previous definition."""

    def __init__(self, food_repo, food: Food):
        super().__init__()
        self.food_repo = food_repo
        self.food = food
        self._previous: Optional[Food] = None

    def execute(self) -> str:
        if self.food.id not in self.food_repo:
            raise UnknownFood(self.food.id)
        previous = self.food_repo.get(self.food.id)
        before = self.food_repo.resolve_calories(self.food.id)

        self.food_repo.upsert(self.food)
        self._previous = previous

        after = self.food_repo.resolve_calories(self.food.id)
        return f"Updated food '{self.food.id}' ({before:g} -> {after:g} cal/serving)"

    def undo(self) -> None:
        self.food_repo.upsert(self._previous)

    def describe(self) -> str:
        return f"Update food: {self.food.name} ({self.food.id})"


class AddComponentCommand(UndoableCommand):
    """Append a component to a composite food; undo restores the old component list."""

    def __init__(self, food_repo, composite_id: str, component_id: str, servings):
        super().__init__()
        self.food_repo = food_repo
        self.composite_id = composite_id
        self.component_id = component_id
        self.servings = servings
        self._previous: Optional[Food] = None

    def execute(self) -> str:
        previous = self.food_repo.get(self.composite_id) if self.composite_id in self.food_repo else None

        updated = self.food_repo.add_component(self.composite_id, self.component_id, self.servings)
        self._previous = previous

        calories = self.food_repo.resolve_calories(updated.id)
        servings = updated.components[-1].servings
        return (f"Added {servings:g} x '{self.component_id}' to '{self.composite_id}' "
                f"(now {calories:g} cal/serving)")

    def undo(self) -> None:
        self.food_repo.upsert(self._previous)

    def describe(self) -> str:
        return f"Add component: {self.servings} x {self.component_id} to {self.composite_id}"
