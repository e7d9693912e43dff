"""
Models for daily consumption logs.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, List

from diet_tracker.models.food import validate_servings


@dataclass
class LogEntry:
    """
    A single consumption record.

    Attributes:
        food_id: Food that was eaten
        servings: Number of servings (> 0, fractional allowed)
        timestamp: When the entry was created
    """
    food_id: str
    servings: float
    timestamp: datetime = field(default_factory=lambda: datetime.now().replace(microsecond=0))

    def __post_init__(self):
        self.servings = validate_servings(self.servings)


@dataclass
class DailyLog:
    """
    Ordered log entries for one calendar date.

    Insertion order is the display order and the order used by
    delete indexes.

    Example:
        >>> log = DailyLog(date(2025, 1, 15))
        >>> log.add_entry(LogEntry("apple", 1))
        0
        >>> len(log)
        1
    """
    date: date
    entries: List[LogEntry] = field(default_factory=list)

    def add_entry(self, entry: LogEntry) -> int:
        """
        Append an entry.

        Returns:
            Index of the new entry
        """
        self.entries.append(entry)
        return len(self.entries) - 1

    def insert_entry(self, index: int, entry: LogEntry) -> None:
        """
        Insert an entry at a position.

        Raises:
            IndexError: If index is outside 0..len
        """
        if not 0 <= index <= len(self.entries):
            raise IndexError(f"No position {index} in log for {self.date}")
        self.entries.insert(index, entry)

    def remove_entry(self, index: int) -> LogEntry:
        """
        Remove and return the entry at index.

        Raises:
            IndexError: If index is out of range
        """
        if not 0 <= index < len(self.entries):
            raise IndexError(f"No entry at index {index} in log for {self.date}")
        return self.entries.pop(index)

    def total_calories(self, resolve: Callable[[str], float]) -> float:
        """
        Sum calories for all entries.

        Args:
            resolve: Function mapping food id to calories per serving

        Returns:
            Total calories, computed from the current food database
        """
        return sum(entry.servings * resolve(entry.food_id) for entry in self.entries)

    def is_empty(self) -> bool:
        return len(self.entries) == 0

    def __len__(self) -> int:
        return len(self.entries)
