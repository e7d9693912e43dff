"""
Undoable commands that change the user profile and daily profiles.

Updates record the prior value of each field they change and undo
restores only those fields.
"""
import dataclasses
from datetime import date
from typing import Any, Dict, Optional

from diet_tracker.errors import ValidationError
from diet_tracker.models.profile import ActivityLevel, DailyProfile, Gender, UserProfile
from diet_tracker.strategies import get_factory
from diet_tracker.utils.time_utils import format_date, parse_iso_date

from .base import UndoableCommand

PROFILE_FIELDS = ("gender", "height_cm", "birth_date", "calculation_method")
DAILY_FIELDS = ("weight_kg", "activity_level")


def _check_fields(fields: Dict[str, Any], allowed) -> None:
    unknown = sorted(set(fields) - set(allowed))
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(unknown)}")
    if not fields:
        raise ValidationError("No fields to update")


def _check_birth_date(birth_date: date) -> None:
    if birth_date >= date.today():
        raise ValidationError(f"Birth date must be in the past (got {format_date(birth_date)})")


def _coerce_profile_fields(fields: Dict[str, Any], factory) -> Dict[str, Any]:
    """Convert user input to typed profile values, validating as it goes."""
    values = dict(fields)
    if "gender" in values and not isinstance(values["gender"], Gender):
        values["gender"] = Gender.parse(values["gender"])
    if "birth_date" in values:
        if not isinstance(values["birth_date"], date):
            values["birth_date"] = parse_iso_date(values["birth_date"])
        _check_birth_date(values["birth_date"])
    if "calculation_method" in values:
        values["calculation_method"] = factory.get(values["calculation_method"]).key
    return values


def _coerce_daily_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    values = dict(fields)
    if "activity_level" in values and not isinstance(values["activity_level"], ActivityLevel):
        values["activity_level"] = ActivityLevel.parse(values["activity_level"])
    return values


class CreateProfileCommand(UndoableCommand):
    """Create the user profile when none exists; undo clears it."""

    def __init__(self, profile_repo, profile: UserProfile, factory=None):
        super().__init__()
        self.profile_repo = profile_repo
        self.profile = profile
        self.factory = factory or get_factory()

    def execute(self) -> str:
        if self.profile_repo.has_user():
            raise ValidationError("A user profile already exists (use 'profile set' to change it)")
        _check_birth_date(self.profile.birth_date)
        self.factory.get(self.profile.calculation_method)
        self.profile_repo.set_user(self.profile)
        return "Created user profile"

    def undo(self) -> None:
        self.profile_repo.clear_user()

    def describe(self) -> str:
        return "Create user profile"


class UpdateProfileCommand(UndoableCommand):
    """
    Change one or more user profile fields.

    Supported fields: gender, height_cm, birth_date, calculation_method.
    """

    def __init__(self, profile_repo, factory=None, **fields):
        super().__init__()
        _check_fields(fields, PROFILE_FIELDS)
        self.profile_repo = profile_repo
        self.factory = factory or get_factory()
        self.fields = fields
        self._prior: Dict[str, Any] = {}

    def execute(self) -> str:
        profile = self.profile_repo.get_user()
        values = _coerce_profile_fields(self.fields, self.factory)

        updated = dataclasses.replace(profile, **values)
        prior = {name: getattr(profile, name) for name in values}

        self.profile_repo.set_user(updated)
        self._prior = prior

        return "Updated profile: " + ", ".join(
            f"{name}={_display(getattr(updated, name))}" for name in values
        )

    def undo(self) -> None:
        current = self.profile_repo.get_user()
        self.profile_repo.set_user(dataclasses.replace(current, **self._prior))

    def describe(self) -> str:
        return "Update profile: " + ", ".join(sorted(self.fields))


class UpdateDailyProfileCommand(UndoableCommand):
    """
    Set weight and/or activity level for a date.

    If the date has no daily profile yet, one is created; missing fields
    are carried forward from the most recent earlier day, and a first-ever
    entry defaults to Sedentary activity. Undo removes a created profile
    or restores the changed fields.
    """

    def __init__(self, profile_repo, log_date: date, **fields):
        super().__init__()
        _check_fields(fields, DAILY_FIELDS)
        self.profile_repo = profile_repo
        self.log_date = log_date
        self.fields = fields
        self._prior: Dict[str, Any] = {}
        self._created = False

    def execute(self) -> str:
        values = _coerce_daily_fields(self.fields)

        if self.log_date in self.profile_repo:
            current = self.profile_repo.get(self.log_date)
            updated = dataclasses.replace(current, **values)
            prior = {name: getattr(current, name) for name in values}
            created = False
        else:
            updated = self._new_daily(values)
            prior = {}
            created = True

        self.profile_repo.upsert(updated)
        self._prior = prior
        self._created = created

        verb = "Recorded" if created else "Updated"
        return (f"{verb} {format_date(self.log_date)}: {updated.weight_kg:g} kg, "
                f"{updated.activity_level.label}")

    def _new_daily(self, values: Dict[str, Any]) -> DailyProfile:
        previous: Optional[DailyProfile] = self.profile_repo.latest_daily(self.log_date)
        merged = {}
        if previous is not None:
            merged = {name: getattr(previous, name) for name in DAILY_FIELDS}
        merged.update(values)
        if "weight_kg" not in merged:
            raise ValidationError(f"First entry for {format_date(self.log_date)} needs a weight")
        return DailyProfile(self.log_date, **merged)

    def undo(self) -> None:
        if self._created:
            self.profile_repo.remove(self.log_date)
            return
        current = self.profile_repo.get(self.log_date)
        self.profile_repo.upsert(dataclasses.replace(current, **self._prior))

    def describe(self) -> str:
        return (f"Update daily profile for {format_date(self.log_date)}: "
                + ", ".join(sorted(self.fields)))


def _display(value) -> str:
    if isinstance(value, (Gender, ActivityLevel)):
        return value.label
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)
