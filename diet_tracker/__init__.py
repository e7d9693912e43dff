"""
YADA (Yet Another Diet Assistant) - calorie tracking with composite foods,
daily logs, undo and calorie targets.
"""

__version__ = "1.0.0"
