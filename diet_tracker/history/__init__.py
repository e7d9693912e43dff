"""
Undoable commands and the command manager.
"""
from .base import UndoableCommand, CommandState
from .manager import CommandManager, RunResult, DEFAULT_MAX_HISTORY
from .food_commands import AddFoodCommand, UpdateFoodCommand, AddComponentCommand
from .log_commands import AddLogEntryCommand, DeleteLogEntryCommand
from .profile_commands import CreateProfileCommand, UpdateProfileCommand, UpdateDailyProfileCommand

__all__ = [
    'UndoableCommand',
    'CommandState',
    'CommandManager',
    'RunResult',
    'DEFAULT_MAX_HISTORY',
    # Food
    'AddFoodCommand',
    'UpdateFoodCommand',
    'AddComponentCommand',
    # Log
    'AddLogEntryCommand',
    'DeleteLogEntryCommand',
    # Profile
    'CreateProfileCommand',
    'UpdateProfileCommand',
    'UpdateDailyProfileCommand',
]
