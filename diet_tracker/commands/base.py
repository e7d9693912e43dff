"""
Base command classes and registry for the REPL.
"""
import shlex
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Type

from diet_tracker.data import FoodRepository, LogRepository, ProfileRepository, seed_foods
from diet_tracker.errors import ValidationError
from diet_tracker.history import CommandManager, DEFAULT_MAX_HISTORY, UndoableCommand
from diet_tracker.strategies import get_factory
from diet_tracker.utils.time_utils import format_date


class CommandContext:
    """
    Shared context for all commands.

    Provides access to repositories, the undo manager and session state.
    The working date lives here and is passed explicitly into every log
    command.
    """

    def __init__(self, foods_file: Path = None, logs_file: Path = None,
                 profile_file: Path = None, max_history: int = DEFAULT_MAX_HISTORY,
                 default_method: str = "harris_benedict", chart_output_file: Path = None,
                 personal_docs_dir: Path = None, chart_days: int = 30, seed: bool = True):
        """
        Initialize command context.

        Args:
            foods_file: Path to foods store (None keeps foods in memory only)
            logs_file: Path to logs store
            profile_file: Path to profile store
            max_history: Undo stack bound
            default_method: Calculation method for new profiles
            chart_output_file: Where 'chart' writes its image
            personal_docs_dir: Optional directory of personal 'explain' notes
            chart_days: Default number of days shown by 'chart'
            seed: Seed the starter foods when the food store is empty
        """
        self.foods = FoodRepository(foods_file)
        self.logs = LogRepository(logs_file)
        self.profile = ProfileRepository(profile_file, default_method=default_method)

        for repo in (self.foods, self.logs, self.profile):
            repo.load()

        self.seeded = seed_foods(self.foods) if seed else 0
        self.reference_warnings = self._check_log_references()

        self.manager = CommandManager(max_history)
        self.calculators = get_factory()
        self.default_method = default_method
        self.chart_output_file = chart_output_file or Path("diet_trend.png")
        self.chart_days = chart_days
        self.personal_docs_dir = personal_docs_dir

        # Session state
        self.current_date: date = date.today()

    @property
    def load_warnings(self) -> List[str]:
        return (self.foods.load_warnings + self.logs.load_warnings
                + self.profile.load_warnings + self.reference_warnings)

    def _check_log_references(self) -> List[str]:
        """Warn about loaded log entries whose food is not in the food store."""
        warnings = []
        for log_date in self.logs.dates():
            for i, entry in enumerate(self.logs.entries_for(log_date), 1):
                if entry.food_id not in self.foods:
                    warnings.append(
                        f"Log entry #{i} on {format_date(log_date)} refers to unknown food "
                        f"'{entry.food_id}' (remove it with 'delete {i}' on that date)"
                    )
        return warnings

    def run(self, command: UndoableCommand) -> None:
        """
        Run an undoable command and report the outcome.

        Errors propagate to the REPL, which prints them.
        """
        result = self.manager.run(command)
        print(result.summary)
        if result.evicted is not None:
            print(f"(History full: '{result.evicted.describe()}' can no longer be undone)")

    def save_all(self) -> None:
        """Save all repositories to disk."""
        for repo in (self.foods, self.logs, self.profile):
            repo.save()

    def date_label(self) -> str:
        label = format_date(self.current_date)
        if self.current_date == date.today():
            label += " (today)"
        return label


class Command(ABC):
    """
    Base class for all REPL commands.

    Each command should override:
    - name: Command name(s) that trigger it
    - help_text: Short description
    - execute(): Command logic
    """

    # Command name(s) - can be string or tuple of strings
    name: str | tuple = ""

    # Help text shown in help command
    help_text: str = ""

    def __init__(self, context: CommandContext):
        """
        Initialize command with context.

        Args:
            context: Shared command context
        """
        self.ctx = context

    @abstractmethod
    def execute(self, args: str) -> None:
        """
        Execute the command.

        Args:
            args: Command arguments (everything after the command name)
        """
        pass

    def matches(self, cmd: str) -> bool:
        """Check if command matches this handler."""
        if isinstance(self.name, str):
            return cmd.lower() == self.name.lower()
        return cmd.lower() in [n.lower() for n in self.name]

    @staticmethod
    def _split(args: str) -> List[str]:
        """Split arguments, honouring quotes."""
        try:
            return shlex.split(args)
        except ValueError:
            return args.split()

    @staticmethod
    def _pop_flag(parts: List[str], *flags: str) -> bool:
        """Remove any of the given flags from parts; True if one was present."""
        found = False
        for flag in flags:
            while flag in parts:
                parts.remove(flag)
                found = True
        return found

    @staticmethod
    def _pop_option(parts: List[str], *flags: str) -> Optional[str]:
        """Remove '--flag value' from parts and return value (None if absent)."""
        for flag in flags:
            if flag in parts:
                i = parts.index(flag)
                if i + 1 >= len(parts):
                    raise ValidationError(f"{flag} needs a value")
                value = parts[i + 1]
                del parts[i:i + 2]
                return value
        return None

    @staticmethod
    def _parse_assignments(parts: List[str]) -> Dict[str, str]:
        """
        Parse key=value tokens.

        Raises:
            ValidationError: If a token has no '='
        """
        values = {}
        for part in parts:
            key, sep, value = part.partition("=")
            if not sep or not key:
                raise ValidationError(f"Expected key=value, got '{part}'")
            values[key.strip().lower()] = value.strip()
        return values

    @staticmethod
    def _parse_float(text: str, label: str) -> float:
        try:
            return float(text)
        except (TypeError, ValueError):
            raise ValidationError(f"{label} must be a number (got '{text}')")


class CommandRegistry:
    """
    Maps command names and aliases to command classes and routes input
    lines to them.
    """

    def __init__(self):
        self._commands: Dict[str, Type[Command]] = {}

    def register(self, command_class: Type[Command]) -> None:
        """Register a command class under its name and every alias."""
        for name in _names(command_class):
            self._commands[name.lower()] = command_class

    def get(self, cmd: str) -> Optional[Type[Command]]:
        """Command class for a name or alias, or None."""
        return self._commands.get(cmd.lower())

    def get_all_commands(self) -> List[Type[Command]]:
        """Unique command classes, sorted by canonical name."""
        unique = {id(c): c for c in self._commands.values()}
        return sorted(unique.values(), key=lambda c: _names(c)[0])

    def dispatch(self, ctx: CommandContext, line: str) -> Tuple[bool, Optional[str]]:
        """
        Parse one input line and run the matching command.

        Returns:
            (handled, canonical command name); handled is False for unknown commands
        """
        parts = line.strip().split(maxsplit=1)
        if not parts:
            return True, None
        cmd_name = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        cmd_class = self.get(cmd_name)
        if cmd_class is None:
            return False, cmd_name

        cmd_class(ctx).execute(args)
        return True, _names(cmd_class)[0]


def _names(command_class: Type[Command]) -> List[str]:
    name = command_class.name
    return [name] if isinstance(name, str) else list(name)


_registry = CommandRegistry()


def register_command(command_class: Type[Command]) -> Type[Command]:
    """Class decorator adding a command to the REPL."""
    _registry.register(command_class)
    return command_class


def get_registry() -> CommandRegistry:
    return _registry


def dispatch(ctx: CommandContext, line: str) -> Tuple[bool, Optional[str]]:
    """Route a line through the shared registry."""
    return _registry.dispatch(ctx, line)
