"""keymenu - keyboard-driven terminal menus."""

from .config import MenuConfig
from .exceptions import DuplicateKeyStringError, EmptyMenuError, MenuError
from .menu import ConsoleMenu
from .models import MenuExit, MenuOption, OutcomeCode, SelectionMode
from .prompts import get_bool, get_date, get_decimal, get_double, get_integer, get_string
from .terminal import Terminal, get_terminal

__version__ = "0.1.0"

__all__ = [
    "ConsoleMenu",
    "DuplicateKeyStringError",
    "EmptyMenuError",
    "MenuConfig",
    "MenuError",
    "MenuExit",
    "MenuOption",
    "OutcomeCode",
    "SelectionMode",
    "Terminal",
    "get_bool",
    "get_date",
    "get_decimal",
    "get_double",
    "get_integer",
    "get_string",
    "get_terminal",
]
