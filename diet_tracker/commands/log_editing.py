"""
Log commands: log food, show a day's log, delete an entry.

All of them act on the session's working date (see 'date').
"""
from diet_tracker.errors import UnknownFood
from diet_tracker.history import AddLogEntryCommand, DeleteLogEntryCommand
from diet_tracker.utils.time_utils import format_date, parse_date

from .base import Command, register_command


@register_command
class LogCommand(Command):
    """Log food consumption."""

    name = ("log", "eat")
    help_text = "Log food for the working date (log <food_id> [servings])"

    def execute(self, args: str) -> None:
        """
        Append a log entry.

        Examples:
            log apple
            log banana 1.5
        """
        parts = self._split(args)
        if len(parts) not in (1, 2):
            print("Usage: log <food_id> [servings]")
            return

        food_id = parts[0]
        servings = self._parse_float(parts[1], "Servings") if len(parts) == 2 else 1.0
        if food_id not in self.ctx.foods:
            matches = [f.id for f in self.ctx.foods.search([food_id])]
            if matches:
                print(f"Did you mean: {', '.join(matches[:5])}?")
            raise UnknownFood(food_id)

        self.ctx.run(AddLogEntryCommand(self.ctx.logs, self.ctx.foods,
                                        self.ctx.current_date, food_id, servings))


@register_command
class ShowCommand(Command):
    """Show the log for a date."""

    name = ("show", "view")
    help_text = "Show log for the working date or a given date (show [date])"

    def execute(self, args: str) -> None:
        """Display entries and total calories."""
        day = parse_date(args, base=self.ctx.current_date) if args.strip() else self.ctx.current_date
        entries = self.ctx.logs.entries_for(day)

        print(f"\nFood log for {format_date(day)}:")
        if not entries:
            print("  (nothing logged)\n")
            return

        total = 0.0
        unresolved = 0
        for i, entry in enumerate(entries, 1):
            prefix = f"  {i:>3}. {entry.timestamp:%H:%M}  {entry.servings:g} x"
            try:
                calories = self.ctx.foods.resolve_calories(entry.food_id) * entry.servings
            except UnknownFood:
                unresolved += 1
                print(f"{prefix} <unknown food> ({entry.food_id})")
                continue
            total += calories
            name = self.ctx.foods.get(entry.food_id).name
            print(f"{prefix} {name} ({entry.food_id}) = {calories:.1f} cal")
        if unresolved:
            print(f"  Total: {total:.1f} cal (excluding {unresolved} unknown food entries)\n")
        else:
            print(f"  Total: {total:.1f} cal\n")


@register_command
class DeleteCommand(Command):
    """Delete a log entry by number."""

    name = ("delete", "del", "rm")
    help_text = "Delete log entry by number from 'show' (delete <n>)"

    def execute(self, args: str) -> None:
        """
        Remove an entry from the working date's log.

        Args:
            args: 1-based entry number as shown by 'show'
        """
        token = args.strip()
        if not token.isdigit() or int(token) < 1:
            print("Usage: delete <n>  (entry number from 'show')")
            return

        self.ctx.run(DeleteLogEntryCommand(self.ctx.logs, self.ctx.current_date,
                                           int(token) - 1))
