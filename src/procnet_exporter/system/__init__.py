"""
System interaction utilities.

Command execution with proper error handling and logging, and checks for
the external utilities the text-output connection source depends on.
"""

from .commands import check_command_installed, run_command

__all__ = [
    "check_command_installed",
    "run_command",
]
