"""
Stats command - target calories versus consumption for a date.
"""
from diet_tracker.analyzers import compute_daily_stats, weight_history
from diet_tracker.utils.time_utils import format_date, parse_date

from .base import Command, register_command


@register_command
class StatsCommand(Command):
    """Show target and consumed calories."""

    name = ("stats", "target")
    help_text = "Show target vs consumed calories (stats [date] [--weights])"

    def execute(self, args: str) -> None:
        """
        Show calorie statistics.

        Args:
            args: Optional date expression, --weights to list recorded weights

        Examples:
            stats
            stats yesterday
            stats 2025-01-15 --weights
        """
        parts = self._split(args)
        show_weights = self._pop_flag(parts, "--weights", "-w")
        day = parse_date(" ".join(parts), base=self.ctx.current_date) if parts else self.ctx.current_date

        stats = compute_daily_stats(self.ctx.profile, self.ctx.logs, self.ctx.foods,
                                    day, self.ctx.calculators)

        print(f"\nCalories for {format_date(day)}:")
        print(f"  Consumed: {stats.consumed:.1f}")

        if stats.strategy is None:
            print("  No profile, so no target. Use 'profile init' to create one.")
        elif not stats.has_target:
            print(f"  No weight recorded on or before {format_date(day)}; use 'weigh'.")
        else:
            print(f"  Method: {stats.strategy} (age {stats.age}, {stats.weight_kg:g} kg)")
            print(f"  BMR: {stats.bmr:.1f}")
            print(f"  Activity: {stats.activity_label} (x{stats.multiplier})")
            print(f"  Target: {stats.target:.1f}")
            remaining = stats.remaining
            if remaining >= 0:
                print(f"  Remaining: {remaining:.1f} ({stats.percent_of_target:.0f}% of target)")
            else:
                print(f"  Over target by: {-remaining:.1f} ({stats.percent_of_target:.0f}% of target)")

        if show_weights:
            history = weight_history(self.ctx.profile)
            print("\nWeight history:")
            if not history:
                print("  (none)")
            for when, kg in history:
                print(f"  {format_date(when)}  {kg:g} kg")
        print()
