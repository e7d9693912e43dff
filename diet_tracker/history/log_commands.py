"""
Undoable commands that change daily logs.

The target date is always passed in explicitly by the caller (the
session's working date), never read from global state.
"""
from datetime import date
from typing import Optional

from diet_tracker.errors import UndoBlocked
from diet_tracker.models.daily_log import LogEntry
from diet_tracker.utils.time_utils import format_date

from .base import UndoableCommand


class AddLogEntryCommand(UndoableCommand):
    """Append a food to a date's log; undo removes it by its captured index."""

    def __init__(self, log_repo, food_repo, log_date: date, food_id: str, servings=1.0):
        super().__init__()
        self.log_repo = log_repo
        self.food_repo = food_repo
        self.log_date = log_date
        self.food_id = food_id
        self.servings = servings
        self._entry: Optional[LogEntry] = None
        self._index: Optional[int] = None

    def execute(self) -> str:
        entry = LogEntry(self.food_id, self.servings)
        calories = self.food_repo.resolve_calories(self.food_id) * entry.servings

        self._index = self.log_repo.append_entry(self.log_date, entry)
        self._entry = entry

        return (f"Logged {entry.servings:g} serving(s) of '{self.food_id}' "
                f"on {format_date(self.log_date)} ({calories:g} cal)")

    def undo(self) -> None:
        entries = self.log_repo.entries_for(self.log_date)
        if self._index >= len(entries) or entries[self._index] != self._entry:
            raise UndoBlocked(
                f"Log for {format_date(self.log_date)} changed; entry #{self._index + 1} "
                f"is no longer '{self.food_id}'"
            )
        self.log_repo.remove_entry(self.log_date, self._index)

    def describe(self) -> str:
        servings = f"{self._entry.servings:g}" if self._entry is not None else self.servings
        return (f"Add log entry: {servings} servings of {self.food_id} "
                f"on {format_date(self.log_date)}")


class DeleteLogEntryCommand(UndoableCommand):
    """Remove the entry at an index; undo re-inserts it at the same index."""

    def __init__(self, log_repo, log_date: date, index: int):
        """
        Args:
            log_repo: LogRepository to change
            log_date: Date of the log
            index: 0-based entry index
        """
        super().__init__()
        self.log_repo = log_repo
        self.log_date = log_date
        self.index = index
        self._removed: Optional[LogEntry] = None

    def execute(self) -> str:
        self._removed = self.log_repo.remove_entry(self.log_date, self.index)
        return (f"Deleted entry #{self.index + 1} ({self._removed.servings:g} x "
                f"'{self._removed.food_id}') from {format_date(self.log_date)}")

    def undo(self) -> None:
        self.log_repo.insert_entry(self.log_date, self.index, self._removed)

    def describe(self) -> str:
        if self._removed is not None:
            return (f"Delete log entry: {self._removed.servings:g} servings of "
                    f"{self._removed.food_id} on {format_date(self.log_date)}")
        return f"Delete log entry #{self.index + 1} on {format_date(self.log_date)}"
