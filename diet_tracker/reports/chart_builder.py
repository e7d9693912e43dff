"""
Chart builder for calorie and weight trends.

Generates a two-panel matplotlib chart: calories consumed against the
daily target (with a moving average), and body weight. Days without
data show as breaks in the line.
"""
import os
import webbrowser
from pathlib import Path
from typing import Optional

import matplotlib
matplotlib.use("Agg")  # Headless backend
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd


class ChartBuilder:
    """
    Builds trend charts from a per-day history DataFrame.

    Panels:
    - Calories consumed (solid), moving average (dotted), target (dashed)
    - Weight in kg
    """

    def __init__(self, output_file: Path = Path("diet_trend.png")):
        """
        Initialize chart builder.

        Args:
            output_file: Output image path
        """
        self.output_file = Path(output_file)

    def build_from_dataframe(self, df: pd.DataFrame, window: int = 7,
                             title: Optional[str] = None, open_after: bool = False) -> bool:
        """
        Build chart from a DataFrame with date, consumed, target, weight_kg columns.

        Args:
            df: Per-day history (see analyzers.build_history_frame)
            window: Moving average window (days)
            title: Chart title (optional)
            open_after: Open the image in a browser when done

        Returns:
            True if a chart was written
        """
        if df.empty or df[["consumed", "weight_kg"]].isna().all().all():
            print("(no data to chart)")
            return False

        df = df.copy()
        df["date"] = pd.to_datetime(df["date"])
        df = df.sort_values("date").set_index("date")

        rolling = df["consumed"].rolling(window=window, min_periods=1).mean()
        # No average where the day itself has no data
        rolling = rolling.where(df["consumed"].notna())

        self._create_chart(df, rolling, window, title)

        if open_after:
            webbrowser.open(os.path.abspath(self.output_file))
        print(f"Chart saved to {self.output_file}.")
        return True

    def _create_chart(self, df: pd.DataFrame, rolling: pd.Series, window: int,
                      title: Optional[str]) -> None:
        """Create and save the two-panel chart."""
        fig, (ax_cal, ax_wt) = plt.subplots(2, 1, figsize=(10, 8), sharex=True,
                                            constrained_layout=True)
        dates = df.index.values

        self._plot_with_gaps(ax_cal, dates, df["consumed"].values,
                             color="black", label="Consumed", singleton_marker="+")
        self._plot_with_gaps(ax_cal, dates, rolling.values,
                             color="blue", linestyle=":", label=f"MA({window})",
                             singleton_marker="x")
        self._plot_with_gaps(ax_cal, dates, df["target"].values,
                             color="red", linestyle="--", label="Target",
                             singleton_marker="_")
        ax_cal.set_ylabel("Calories")
        ax_cal.grid(True, alpha=0.25)
        ax_cal.legend(loc="upper left", frameon=False)

        self._plot_with_gaps(ax_wt, dates, df["weight_kg"].values,
                             color="green", label="Weight", singleton_marker="o",
                             markersize=4)
        ax_wt.set_ylabel("Weight (kg)")
        ax_wt.set_xlabel("Date")
        ax_wt.grid(True, alpha=0.25)
        ax_wt.legend(loc="upper left", frameon=False)

        fig.suptitle(title or "Calories vs Target and Weight", fontsize=14)
        fig.savefig(self.output_file, dpi=150)
        plt.close(fig)

    def _plot_with_gaps(self, ax, dates, values, *, color, linestyle="-",
                        linewidth=1.5, label=None, singleton_marker="+", markersize=8):
        """
        Plot data with gaps (NaN breaks the line); isolated points get a marker.

        Args:
            ax: Matplotlib axis
            dates: Date values
            values: Y values (may contain NaN for gaps)
            color: Line color
            linestyle: Line style
            linewidth: Line width
            label: Legend label (used once)
            singleton_marker: Marker for isolated points
            markersize: Marker size
        """
        dates = np.asarray(dates)
        y = np.asarray(values, dtype=float)
        valid = ~np.isnan(y)

        if not valid.any():
            return

        idxs = np.where(valid)[0]
        # Calendar is daily, so a gap is a jump of more than one index
        splits = np.where(np.diff(idxs) > 1)[0] + 1
        segments = np.split(idxs, splits)

        used_label = False
        for seg in segments:
            lbl = label if not used_label else None
            if len(seg) == 1:
                i = seg[0]
                ax.plot([dates[i]], [y[i]], marker=singleton_marker, color=color,
                        markersize=markersize, linewidth=0, label=lbl)
            else:
                ax.plot(dates[seg], y[seg], color=color, linestyle=linestyle,
                        linewidth=linewidth, label=lbl)
            used_label = True
