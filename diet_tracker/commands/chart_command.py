"""
Chart command - calorie and weight trend visualization.
"""
import re
from datetime import timedelta

from diet_tracker.analyzers import build_history_frame
from diet_tracker.reports.chart_builder import ChartBuilder
from diet_tracker.utils.time_utils import format_date, parse_iso_date

from .base import Command, register_command


@register_command
class ChartCommand(Command):
    """Generate calorie/weight trend chart."""

    name = "chart"
    help_text = "Generate trend chart ending at working date (chart [days] [window] [start] [--open])"

    def execute(self, args: str) -> None:
        """
        Generate trend chart.

        Args:
            args: Optional: number of days, moving-average window, start date
                  Examples:
                    chart
                    chart 14
                    chart 60 7
                    chart 2025-01-01
        """
        parts = self._split(args)
        open_after = self._pop_flag(parts, "--open")

        numbers = []
        start = None
        for token in parts:
            if re.match(r"^\d{4}-\d{2}-\d{2}$", token):
                start = parse_iso_date(token)
            else:
                try:
                    numbers.append(max(1, int(token)))
                except ValueError:
                    print(f"Ignoring '{token}'")

        days = numbers[0] if numbers else self.ctx.chart_days
        window = numbers[1] if len(numbers) > 1 else 7

        end = self.ctx.current_date
        if start is None or start > end:
            start = end - timedelta(days=days - 1)

        df = build_history_frame(self.ctx.profile, self.ctx.logs, self.ctx.foods,
                                 start, end, self.ctx.calculators)

        title = f"Calories and Weight (MA={window} days) - {format_date(start)} to {format_date(end)}"
        builder = ChartBuilder(self.ctx.chart_output_file)
        builder.build_from_dataframe(df, window=window, title=title, open_after=open_after)
