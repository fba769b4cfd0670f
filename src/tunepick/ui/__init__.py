"""UI module."""

from .base import MenuProvider
from .menu import DEFAULT_TITLE, InteractiveMenu, print_usage, show_menu
from .rich_menu import RichTerminalMenu
from .terminal import Terminal, classify_key

__all__ = [
    "DEFAULT_TITLE",
    "InteractiveMenu",
    "MenuProvider",
    "RichTerminalMenu",
    "Terminal",
    "classify_key",
    "print_usage",
    "show_menu",
]
