"""Data models for keymenu."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class OutcomeCode(Enum):
    """Result an option's action returns to steer the menu loop."""

    USE_MENU_DEFAULT = "use_menu_default"
    WAIT_AFTER_SELECTION = "wait_after_selection"
    DO_NOT_WAIT_AFTER_SELECTION = "do_not_wait_after_selection"
    WAIT_THEN_CLOSE_MENU = "wait_then_close_menu"
    CLOSE_MENU = "close_menu"
    EXIT_ALL_MENUS = "exit_all_menus"


class MenuExit(Enum):
    """Why ConsoleMenu.show() returned."""

    CLOSED = "closed"
    EXIT_ALL = "exit_all"


class SelectionMode(Enum):
    """How the user picks an option."""

    ARROW = "arrow"
    KEY_STRING = "key_string"

    @classmethod
    def parse(cls, value: "str | SelectionMode") -> "SelectionMode":
        """Accept enum members or loose names like 'arrow', 'key-string', 'KeyString'."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        if normalized == "keystring":
            normalized = "key_string"
        try:
            return cls(normalized)
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown selection mode '{value}' (expected one of: {choices})")


_UNBOUND = object()


@dataclass(frozen=True)
class MenuOption:
    """Immutable menu option.

    Text and key string are either fixed, or derived from ``item`` through a
    formatter every time they are read, so a bound option always reflects the
    item's current state.
    """

    action: Callable[[], Any]
    text: str | None = None
    key_string: str | None = None
    item: Any = _UNBOUND
    text_formatter: Callable[[Any], str] | None = None
    key_formatter: Callable[[Any], str] | None = None

    @property
    def is_bound(self) -> bool:
        return self.item is not _UNBOUND

    @property
    def display_text(self) -> str:
        if not self.is_bound:
            return self.text or ""
        if self.text_formatter is not None:
            return str(self.text_formatter(self.item))
        return str(self.item)

    @property
    def explicit_key(self) -> str | None:
        """Key string supplied by the caller, or None when the menu should number it."""
        if self.key_string is not None:
            return self.key_string
        if self.is_bound and self.key_formatter is not None:
            return str(self.key_formatter(self.item))
        return None

    def invoke(self) -> Any:
        return self.action()
