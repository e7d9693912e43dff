"""
Exception types for the diet tracker.

Repository, food model and command errors propagate unchanged to the
REPL, which prints them verbatim.
"""


class DietTrackerError(Exception):
    """Base class for all diet tracker errors."""


class NotFound(DietTrackerError, LookupError):
    """A requested key is absent from a repository."""


class UnknownFood(NotFound):
    """A food identifier does not exist in the food database."""

    def __init__(self, food_id: str):
        super().__init__(f"Unknown food: '{food_id}'")
        self.food_id = food_id


class ValidationError(DietTrackerError, ValueError):
    """An entity or input violates a model invariant."""


class InvalidServings(ValidationError):
    """Serving amount is not a positive number."""

    def __init__(self, servings):
        super().__init__(f"Servings must be greater than 0 (got {servings})")
        self.servings = servings


class OverwriteRejected(ValidationError):
    """A food with the same identifier already exists."""

    def __init__(self, food_id: str):
        super().__init__(f"Food with ID '{food_id}' already exists")
        self.food_id = food_id


class CycleWouldForm(ValidationError):
    """Adding a component would make a composite food contain itself."""

    def __init__(self, composite_id: str, component_id: str):
        super().__init__(
            f"Adding '{component_id}' to '{composite_id}' would create a cycle"
        )
        self.composite_id = composite_id
        self.component_id = component_id


class CycleDetected(DietTrackerError):
    """Calorie resolution revisited a food already on the current path."""

    def __init__(self, path):
        self.path = list(path)
        super().__init__("Cycle detected in food components: " + " -> ".join(self.path))


class UndoBlocked(DietTrackerError):
    """Undo would break a reference held by another entity."""


class NothingToUndo(DietTrackerError):
    """The undo stack is empty."""

    def __init__(self):
        super().__init__("No commands to undo")


class UnknownStrategy(DietTrackerError, LookupError):
    """No calorie calculation strategy is registered under this key."""

    def __init__(self, key: str, available=()):
        message = f"Unknown calculation method: '{key}'"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message)
        self.key = key


class InvalidInput(DietTrackerError, ValueError):
    """Calculation inputs are out of range."""


class CommandStateError(DietTrackerError):
    """A command was run or undone outside its single-use lifecycle."""
