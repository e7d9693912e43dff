"""
Calorie statistics.
"""
from .daily_stats import DailyStats, compute_daily_stats, weight_history, build_history_frame

__all__ = [
    'DailyStats',
    'compute_daily_stats',
    'weight_history',
    'build_history_frame',
]
