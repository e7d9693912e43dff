"""
User profile repository.

Store format:
    PROFILE|M/F/O|height_cm|YYYY-MM-DD|calculation_method
    DAILY|YYYY-MM-DD|weight_kg|S/L/M/V/E
"""
import copy
from datetime import date
from typing import List, Optional

from diet_tracker.errors import DietTrackerError, NotFound
from diet_tracker.models.profile import ActivityLevel, DailyProfile, Gender, UserProfile
from diet_tracker.utils.time_utils import format_date, parse_iso_date

from .base_repository import Repository
from .storage import format_number, read_records, write_records

FIELDS = 5


class ProfileRepository(Repository):
    """
    Holds the single user profile and the per-date daily profiles.

    The CRUD contract (get/get_all/upsert/remove) applies to daily
    profiles keyed by date; the user profile has its own accessors.
    """

    entity_label = "Daily profile"

    def __init__(self, filepath=None, default_method: str = "harris_benedict"):
        super().__init__(filepath)
        self.default_method = default_method
        self._user: Optional[UserProfile] = None

    def _key(self, daily: DailyProfile) -> date:
        return daily.date

    def load(self) -> None:
        """Load the profile store, skipping malformed lines."""
        self._user = None
        self._items = {}
        self.load_warnings = []
        if self.filepath is None:
            return

        for line_no, record in enumerate(read_records(self.filepath, FIELDS), 1):
            try:
                self._apply_record(record)
            except (DietTrackerError, ValueError) as e:
                self._warn(f"{self.filepath.name} line {line_no}: {e}")

        self._items = dict(sorted(self._items.items()))

    def _apply_record(self, record: List[str]) -> None:
        kind = record[0]
        if kind == "PROFILE":
            _, gender, height, birth, method = record[:FIELDS]
            self._user = UserProfile(
                Gender.parse(gender),
                height,
                parse_iso_date(birth),
                method or self.default_method,
            )
        elif kind == "DAILY":
            _, day, weight, level = record[:4]
            daily = DailyProfile(parse_iso_date(day), weight, ActivityLevel.parse(level))
            self._items[daily.date] = daily
        else:
            raise ValueError(f"unrecognized record type '{kind}'")

    def save(self) -> None:
        """Write the user profile followed by daily profiles, dates ascending."""
        if self.filepath is None:
            return
        records = []
        if self._user is not None:
            records.append([
                "PROFILE",
                self._user.gender.value,
                format_number(self._user.height_cm),
                format_date(self._user.birth_date),
                self._user.calculation_method,
            ])
        for day in sorted(self._items):
            daily = self._items[day]
            records.append([
                "DAILY",
                format_date(day),
                format_number(daily.weight_kg),
                daily.activity_level.code,
            ])
        write_records(self.filepath, records)

    def get_all(self) -> List[DailyProfile]:
        """Copies of all daily profiles, dates ascending."""
        return [copy.deepcopy(self._items[d]) for d in sorted(self._items)]

    # User profile

    def has_user(self) -> bool:
        return self._user is not None

    def get_user(self) -> UserProfile:
        """
        Get a copy of the user profile.

        Raises:
            NotFound: If no profile has been created
        """
        if self._user is None:
            raise NotFound("No user profile exists")
        return copy.deepcopy(self._user)

    def set_user(self, profile: UserProfile) -> None:
        """Create or replace the user profile."""
        self._user = copy.deepcopy(profile)

    def clear_user(self) -> None:
        self._user = None

    def latest_daily(self, on_or_before: date) -> Optional[DailyProfile]:
        """
        Most recent daily profile dated on or before a date.

        Returns:
            Copy of the daily profile, or None if there is none
        """
        candidates = [d for d in self._items if d <= on_or_before]
        if not candidates:
            return None
        return copy.deepcopy(self._items[max(candidates)])
