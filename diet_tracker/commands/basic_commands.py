"""
Basic commands: help, quit, save, date, undo, history.
"""
from diet_tracker.utils.time_utils import parse_date

from .base import Command, register_command, get_registry


@register_command
class HelpCommand(Command):
    """Show help information."""

    name = ("help", "h", "?")
    help_text = "Show this help message"

    def execute(self, args: str) -> None:
        """Display help for all commands."""
        registry = get_registry()

        print("\nAvailable Commands:")
        print("=" * 70)

        for cmd_class in registry.get_all_commands():
            if isinstance(cmd_class.name, str):
                names = cmd_class.name
            else:
                names = ", ".join(cmd_class.name)

            print(f"  {names:20} {cmd_class.help_text}")

        print("=" * 70)
        print(f"Working date: {self.ctx.date_label()}")
        print()


@register_command
class QuitCommand(Command):
    """Exit the application."""

    name = ("quit", "exit", "q")
    help_text = "Exit the application (data is saved on exit)"

    def execute(self, args: str) -> None:
        """Exit with message."""
        print("Goodbye!")
        raise SystemExit(0)


@register_command
class SaveCommand(Command):
    """Save all data to disk."""

    name = "save"
    help_text = "Save foods, logs and profile to disk"

    def execute(self, args: str) -> None:
        """Save all repositories."""
        self.ctx.save_all()
        counts = self.ctx.foods.counts()
        print(f"Saved {counts['basic'] + counts['composite']} foods, "
              f"{len(self.ctx.logs.dates())} logged day(s) and profile.")


@register_command
class DateCommand(Command):
    """Show or change the working date."""

    name = "date"
    help_text = "Show/change working date (date 2025-01-15 | today | -1 | +1)"

    def execute(self, args: str) -> None:
        """
        Change the date used by log, show, delete, weigh and stats.

        Args:
            args: Empty to show the date, otherwise a date expression
        """
        if not args.strip():
            print(f"Working date: {self.ctx.date_label()}")
            return

        self.ctx.current_date = parse_date(args, base=self.ctx.current_date)
        print(f"Working date set to {self.ctx.date_label()}")


@register_command
class UndoCommand(Command):
    """Undo the most recent change."""

    name = ("undo", "u")
    help_text = "Undo the last change"

    def execute(self, args: str) -> None:
        """
        Undo the last command.

        A failed undo is reported and the command is discarded from history.
        """
        pending = self.ctx.manager.peek()
        if pending is not None:
            print(f"Undoing: {pending.describe()}")
        try:
            self.ctx.manager.undo_last()
        except Exception:
            if pending is not None:
                print("Undo failed; this change has been removed from history "
                      "and may be partially applied.")
            raise
        print(f"Undone. {self.ctx.manager.depth} change(s) left to undo.")


@register_command
class HistoryCommand(Command):
    """List changes that can be undone."""

    name = "history"
    help_text = "List changes that can be undone (most recent last)"

    def execute(self, args: str) -> None:
        """Display the undo stack."""
        history = self.ctx.manager.history()
        if not history:
            print("\nNothing to undo.\n")
            return

        print(f"\nUndo history ({len(history)}/{self.ctx.manager.max_history}):")
        for i, description in enumerate(history, 1):
            print(f"  {i:>3}. {description}")
        print()
