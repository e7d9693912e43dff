"""
Command classes for the diet tracker REPL.
"""
from .base import Command, CommandContext, CommandRegistry, register_command, get_registry, dispatch

# Import all command modules to trigger registration
from . import basic_commands
from . import food_management
from . import log_editing
from . import profile_management
from . import stats_command
from . import chart_command
from . import explain_command

__all__ = [
    'Command',
    'CommandContext',
    'CommandRegistry',
    'register_command',
    'get_registry',
    'dispatch',
]
