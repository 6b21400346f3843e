"""
CLI Package

Command-line front end and terminal display.
"""

from .display import Colors, ConsoleDisplay, colored

__all__ = [
    "Colors",
    "ConsoleDisplay",
    "colored",
]
