"""
Profile commands: show/create/update the user profile, record daily
weight and activity, choose the calculation method.
"""
from diet_tracker.errors import ValidationError
from diet_tracker.history import (
    CreateProfileCommand,
    UpdateDailyProfileCommand,
    UpdateProfileCommand,
)
from diet_tracker.models import ActivityLevel, Gender, UserProfile
from diet_tracker.utils.time_utils import format_date, parse_iso_date

from .base import Command, register_command

# User-facing key -> profile field
PROFILE_KEYS = {
    "gender": "gender",
    "sex": "gender",
    "height": "height_cm",
    "birth": "birth_date",
    "born": "birth_date",
    "method": "calculation_method",
}

DAILY_KEYS = {
    "weight": "weight_kg",
    "activity": "activity_level",
}


def _map_keys(values: dict, mapping: dict) -> dict:
    fields = {}
    for key, value in values.items():
        if key not in mapping:
            raise ValidationError(
                f"Unknown setting '{key}' (use: {', '.join(sorted(mapping))})"
            )
        fields[mapping[key]] = value
    return fields


@register_command
class ProfileCommand(Command):
    """Show, create or update the user profile."""

    name = ("profile", "p")
    help_text = "Show/edit profile (profile | profile init gender=F height=165 birth=1990-01-01 | profile set height=170)"

    def execute(self, args: str) -> None:
        """
        Dispatch profile subcommands.

        Examples:
            profile
            profile init gender=F height=165 birth=1991-03-02 method=mifflin_st_jeor
            profile set height=166 gender=O
        """
        parts = self._split(args)
        if not parts:
            self._show()
            return

        sub, rest = parts[0].lower(), parts[1:]
        if sub == "init":
            self._init(rest)
        elif sub == "set":
            fields = _map_keys(self._parse_assignments(rest), PROFILE_KEYS)
            if "height_cm" in fields:
                fields["height_cm"] = self._parse_float(fields["height_cm"], "Height")
            self.ctx.run(UpdateProfileCommand(self.ctx.profile, self.ctx.calculators, **fields))
        else:
            print("Usage: profile [init key=value ... | set key=value ...]")

    def _init(self, parts) -> None:
        values = _map_keys(self._parse_assignments(parts), PROFILE_KEYS)
        missing = [k for k in ("gender", "height_cm", "birth_date") if k not in values]
        if missing:
            raise ValidationError(
                "profile init needs gender=, height= and birth= "
                f"(missing: {', '.join(missing)})"
            )
        profile = UserProfile(
            Gender.parse(values["gender"]),
            self._parse_float(values["height_cm"], "Height"),
            parse_iso_date(values["birth_date"]),
            values.get("calculation_method", self.ctx.default_method),
        )
        self.ctx.run(CreateProfileCommand(self.ctx.profile, profile, self.ctx.calculators))

    def _show(self) -> None:
        if not self.ctx.profile.has_user():
            print("\nNo profile yet. Create one with:")
            print("  profile init gender=F height=165 birth=1990-01-01\n")
            return

        user = self.ctx.profile.get_user()
        day = self.ctx.current_date
        print("\nUser profile:")
        print(f"  Gender: {user.gender.label}")
        print(f"  Height: {user.height_cm:g} cm")
        print(f"  Birth date: {format_date(user.birth_date)} (age {user.age(day)} on {format_date(day)})")
        print(f"  Calculation method: {user.calculation_method}")

        daily = self.ctx.profile.latest_daily(day)
        if daily is None:
            print("  No weight recorded yet (use 'weigh').")
        else:
            print(f"  Weight: {daily.weight_kg:g} kg (recorded {format_date(daily.date)})")
            print(f"  Activity: {daily.activity_level.label} (x{daily.activity_level.multiplier})")
        print()


@register_command
class WeighCommand(Command):
    """Record weight and activity level for the working date."""

    name = ("weigh", "daily")
    help_text = "Record weight/activity for working date (weigh 62.5 [moderate] | weigh activity=very)"

    def execute(self, args: str) -> None:
        """
        Record daily measurements.

        Accepts positional "<weight> [activity]" or key=value pairs.
        Activity may be a code (S/L/M/V/E), a level 1-5 or a name prefix.
        """
        parts = self._split(args)
        if not parts:
            self._print_usage()
            return

        if all("=" in p for p in parts):
            fields = _map_keys(self._parse_assignments(parts), DAILY_KEYS)
        elif len(parts) <= 2 and "=" not in "".join(parts):
            fields = {"weight_kg": parts[0]}
            if len(parts) == 2:
                fields["activity_level"] = parts[1]
        else:
            self._print_usage()
            return

        if "weight_kg" in fields:
            fields["weight_kg"] = self._parse_float(fields["weight_kg"], "Weight")

        self.ctx.run(UpdateDailyProfileCommand(self.ctx.profile, self.ctx.current_date, **fields))

    def _print_usage(self) -> None:
        print("Usage: weigh <kg> [activity]   or   weigh weight=<kg> activity=<level>")
        print("Activity levels:")
        for i, level in enumerate(ActivityLevel, 1):
            print(f"  {i}. {level.code}  {level.label} ({level.description}) x{level.multiplier}")


@register_command
class MethodCommand(Command):
    """List or change the calorie calculation method."""

    name = "method"
    help_text = "List/change calculation method (method [name])"

    def execute(self, args: str) -> None:
        """Show available methods, or select one."""
        key = args.strip()
        if key:
            self.ctx.run(UpdateProfileCommand(self.ctx.profile, self.ctx.calculators,
                                              calculation_method=key))
            return

        current = None
        if self.ctx.profile.has_user():
            current = self.ctx.profile.get_user().calculation_method

        print("\nCalculation methods:")
        for name in self.ctx.calculators.available():
            strategy = self.ctx.calculators.get(name)
            marker = "*" if name == current else " "
            print(f"  {marker} {name:18} {strategy.description}")
        print()
