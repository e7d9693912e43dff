"""
Daily consumption log repository.

Store format, one entry per line, dates ascending, entries in log order:
    YYYY-MM-DD|food_id|servings|YYYY-MM-DDTHH:MM:SS
"""
import copy
from datetime import date, datetime
from typing import Callable, List, Tuple

from diet_tracker.errors import DietTrackerError, NotFound
from diet_tracker.models.daily_log import DailyLog, LogEntry
from diet_tracker.utils.time_utils import format_date, parse_iso_date

from .base_repository import Repository
from .storage import format_number, read_records, write_records

FIELDS = 4
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


class LogRepository(Repository):
    """
    Authoritative collection of daily logs keyed by date.

    A date with no entries has no DailyLog, so adding and then removing
    an entry leaves the repository exactly as it was.
    """

    entity_label = "Log"

    def _key(self, log: DailyLog) -> date:
        return log.date

    def load(self) -> None:
        """Load log entries from the store, skipping malformed lines."""
        self._items = {}
        self.load_warnings = []
        if self.filepath is None:
            return

        for line_no, record in enumerate(read_records(self.filepath, FIELDS), 1):
            day, food_id, servings, stamp = record[:FIELDS]
            try:
                log_date = parse_iso_date(day)
                try:
                    timestamp = datetime.strptime(stamp, TIMESTAMP_FORMAT)
                except ValueError:
                    timestamp = datetime.combine(log_date, datetime.min.time())
                entry = LogEntry(food_id, servings, timestamp)
            except (DietTrackerError, ValueError) as e:
                self._warn(f"{self.filepath.name} line {line_no}: {e}")
                continue
            if not food_id:
                self._warn(f"{self.filepath.name} line {line_no}: missing food id")
                continue
            self._items.setdefault(log_date, DailyLog(log_date)).add_entry(entry)

    def save(self) -> None:
        """Write all logs to the store, dates ascending."""
        if self.filepath is None:
            return
        records = []
        for log_date in sorted(self._items):
            for entry in self._items[log_date].entries:
                records.append([
                    format_date(log_date),
                    entry.food_id,
                    format_number(entry.servings),
                    entry.timestamp.strftime(TIMESTAMP_FORMAT),
                ])
        write_records(self.filepath, records)

    def upsert(self, log: DailyLog) -> None:
        """Insert or replace a day's log; an empty log removes the date."""
        if log.is_empty():
            self._items.pop(log.date, None)
            return
        super().upsert(log)

    def dates(self) -> List[date]:
        """Dates with at least one entry, ascending."""
        return sorted(self._items)

    def entries_for(self, log_date: date) -> List[LogEntry]:
        """Copies of the entries for a date ([] when nothing is logged)."""
        log = self._items.get(log_date)
        return copy.deepcopy(log.entries) if log else []

    def append_entry(self, log_date: date, entry: LogEntry) -> int:
        """
        Append an entry to a date's log.

        Returns:
            Index of the new entry
        """
        log = self._items.setdefault(log_date, DailyLog(log_date))
        return log.add_entry(copy.deepcopy(entry))

    def insert_entry(self, log_date: date, index: int, entry: LogEntry) -> None:
        """
        Insert an entry at index in a date's log.

        Raises:
            NotFound: If index is outside 0..len
        """
        log = self._items.get(log_date) or DailyLog(log_date)
        try:
            log.insert_entry(index, copy.deepcopy(entry))
        except IndexError as e:
            raise NotFound(str(e)) from e
        self._items[log_date] = log

    def remove_entry(self, log_date: date, index: int) -> LogEntry:
        """
        Remove and return the entry at index in a date's log.

        Raises:
            NotFound: If there is no entry at index
        """
        log = self._items.get(log_date)
        if log is None:
            raise NotFound(f"No entries logged for {format_date(log_date)}")
        try:
            entry = log.remove_entry(index)
        except IndexError as e:
            raise NotFound(str(e)) from e
        if log.is_empty():
            del self._items[log_date]
        return entry

    def total_calories(self, log_date: date, resolve: Callable[[str], float]) -> float:
        """
        Total calories for a date, resolved at query time.

        Args:
            log_date: Date to total
            resolve: Food id -> calories per serving (e.g. FoodRepository.resolve_calories)
        """
        log = self._items.get(log_date)
        return log.total_calories(resolve) if log else 0.0

    def references_to(self, food_id: str) -> List[Tuple[date, int]]:
        """(date, index) of every entry that uses food_id."""
        return [
            (log_date, i)
            for log_date, log in sorted(self._items.items())
            for i, entry in enumerate(log.entries)
            if entry.food_id == food_id
        ]
