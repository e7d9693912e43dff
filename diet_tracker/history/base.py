"""
Base class for undoable commands.
"""
from abc import ABC, abstractmethod
from enum import Enum


class CommandState(Enum):
    """Lifecycle of an undoable command."""
    PENDING = "pending"
    EXECUTED = "executed"
    UNDONE = "undone"


class UndoableCommand(ABC):
    """
    A single reversible mutation of the repositories.

    Each command should override:
    - execute(): Validate, capture what undo() needs, then mutate
    - undo(): Reverse the mutation using only the captured data
    - describe(): One-line description for history listings

    A command is executed once and undone at most once; the
    CommandManager enforces this through `state`. Commands keep value
    copies of entities, never references into repository collections.
    """

    def __init__(self):
        self.state = CommandState.PENDING

    @abstractmethod
    def execute(self) -> str:
        """
        Apply the mutation.

        Must leave the repositories untouched when it raises.

        Returns:
            Summary of what changed
        """

    @abstractmethod
    def undo(self) -> None:
        """Reverse the mutation applied by execute()."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable description."""

    def __str__(self) -> str:
        return self.describe()
