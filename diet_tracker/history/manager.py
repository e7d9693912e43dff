"""
Command manager with a bounded undo stack.
"""
from dataclasses import dataclass
from typing import List, Optional

from diet_tracker.errors import CommandStateError, NothingToUndo

from .base import CommandState, UndoableCommand

DEFAULT_MAX_HISTORY = 20


@dataclass
class RunResult:
    """
    Outcome of a successful run.

    Attributes:
        summary: Summary returned by the command
        evicted: Oldest command dropped from history to respect the bound
                 (it can no longer be undone), or None
    """
    summary: str
    evicted: Optional[UndoableCommand] = None


class CommandManager:
    """
    Executes commands and keeps the most recent ones for undo.

    The stack holds at most max_history commands. Pushing beyond that
    evicts the oldest, which becomes permanently unrecoverable. There is
    no redo: undone commands are discarded.

    Usage:
        manager = CommandManager(max_history=20)
        result = manager.run(AddLogEntryCommand(logs, foods, day, "apple", 1))
        print(result.summary)
        undone = manager.undo_last()
    """

    def __init__(self, max_history: int = DEFAULT_MAX_HISTORY):
        if max_history < 1:
            raise ValueError(f"max_history must be at least 1 (got {max_history})")
        self.max_history = max_history
        self._stack: List[UndoableCommand] = []

    def run(self, command: UndoableCommand) -> RunResult:
        """
        Execute a command and push it on the undo stack.

        On failure the error propagates and the stack is unchanged.

        Raises:
            CommandStateError: If the command was already executed
        """
        if command.state is not CommandState.PENDING:
            raise CommandStateError(
                f"Command already {command.state.value}: {command.describe()}"
            )

        summary = command.execute()
        command.state = CommandState.EXECUTED

        self._stack.append(command)
        evicted = None
        if len(self._stack) > self.max_history:
            evicted = self._stack.pop(0)

        return RunResult(summary, evicted)

    def undo_last(self) -> UndoableCommand:
        """
        Undo the most recent command.

        The command is popped before undo runs and is not pushed back
        if undo fails; the error propagates to the caller.

        Returns:
            The undone command

        Raises:
            NothingToUndo: If the stack is empty
        """
        if not self._stack:
            raise NothingToUndo()

        command = self._stack.pop()
        command.undo()
        command.state = CommandState.UNDONE
        return command

    @property
    def depth(self) -> int:
        return len(self._stack)

    def can_undo(self) -> bool:
        return bool(self._stack)

    def peek(self) -> Optional[UndoableCommand]:
        """Command that undo_last() would undo, or None."""
        return self._stack[-1] if self._stack else None

    def history(self) -> List[str]:
        """Descriptions of undoable commands, oldest first."""
        return [command.describe() for command in self._stack]

    def clear(self) -> None:
        self._stack.clear()
