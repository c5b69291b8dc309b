"""Console menu engine."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import partial
from typing import Any, TypeVar

import readchar
from rich.cells import cell_len
from rich.console import Console

from keymenu.config import MenuConfig
from keymenu.exceptions import EmptyMenuError
from keymenu.layout import (
    RowSpan,
    arrow_option_lines,
    clamp_index,
    key_string_option_lines,
    next_index,
    prev_index,
    resolve_key_strings,
    row_spans,
)
from keymenu.models import MenuExit, MenuOption, OutcomeCode, SelectionMode
from keymenu.prompts import get_string
from keymenu.terminal import Terminal, get_terminal

T = TypeVar("T")

logger = logging.getLogger("keymenu.menu")

ENTER_KEYS = frozenset({readchar.key.ENTER, readchar.key.CR, readchar.key.LF})

# Escape sequences readkey() returns for real keys; any other ESC-prefixed
# read is a lone Escape followed by whatever was typed next.
NAVIGATION_KEYS = frozenset(
    getattr(readchar.key, name)
    for name in (
        "UP", "DOWN", "LEFT", "RIGHT", "HOME", "END", "PAGE_UP", "PAGE_DOWN",
        "INSERT", "SUPR", "SHIFT_TAB",
        "F1", "F2", "F3", "F4", "F5", "F6", "F7", "F8", "F9", "F10", "F11", "F12",
    )
    if hasattr(readchar.key, name)
)


def is_escape(key: str) -> bool:
    """True for an Escape press, however readkey() reported it."""
    if key == readchar.key.ESC:
        return True
    return key.startswith(readchar.key.ESC) and key not in NAVIGATION_KEYS

# (pause first?, exit signal or None to keep looping)
_DISPATCH: dict[OutcomeCode, tuple[bool | None, MenuExit | None]] = {
    OutcomeCode.USE_MENU_DEFAULT: (None, None),
    OutcomeCode.WAIT_AFTER_SELECTION: (True, None),
    OutcomeCode.DO_NOT_WAIT_AFTER_SELECTION: (False, None),
    OutcomeCode.WAIT_THEN_CLOSE_MENU: (True, MenuExit.CLOSED),
    OutcomeCode.CLOSE_MENU: (False, MenuExit.CLOSED),
    OutcomeCode.EXIT_ALL_MENUS: (False, MenuExit.EXIT_ALL),
}


def dispatch_outcome(outcome: OutcomeCode, wait_by_default: bool) -> tuple[bool, MenuExit | None]:
    """Map an action outcome to (pause before continuing, exit signal)."""
    pause, exit_signal = _DISPATCH[outcome]
    return (wait_by_default if pause is None else pause), exit_signal


def coerce_outcome(result: Any) -> OutcomeCode:
    """Normalize what an action returned.

    A nested menu's MenuExit is accepted so ``add_option("Sub", sub.show)``
    works: EXIT_ALL keeps travelling up, CLOSED redraws this menu at once.
    """
    if isinstance(result, OutcomeCode):
        return result
    if result is MenuExit.EXIT_ALL:
        return OutcomeCode.EXIT_ALL_MENUS
    if result is MenuExit.CLOSED:
        return OutcomeCode.DO_NOT_WAIT_AFTER_SELECTION
    if result is None:
        return OutcomeCode.USE_MENU_DEFAULT
    raise TypeError(f"Menu action returned {result!r}; expected an OutcomeCode")


@dataclass
class _ArrowScreen:
    """Where the last full arrow-mode draw put each option."""

    spans: list[RowSpan]
    # rows between the first option row and the cursor after the full draw
    cursor_row: int


class ConsoleMenu:
    """A console menu of selectable options.

    Options are added with the ``add_*`` methods (all chainable), then
    ``show()`` loops: rebuild, draw, wait for a choice, run its action and
    act on the returned OutcomeCode. Subclasses customize it through hooks:

    * ``rebuild_options()`` runs before every draw; data-driven menus clear
      and repopulate here.
    * ``on_before_show()`` / ``on_after_show()`` print above and below the
      options. Write through ``self.console`` so the rows can be tracked.

    Example:
        menu = (
            ConsoleMenu()
            .add_option("Hello", hello)
            .add_option("Close", ConsoleMenu.close, "Q")
            .configure(selection_mode=SelectionMode.KEY_STRING)
        )
        menu.show()
    """

    def __init__(self, terminal: Terminal | None = None, config: MenuConfig | None = None):
        self.terminal = terminal or get_terminal()
        self.config = config or MenuConfig.load(self.terminal)
        self._options: list[MenuOption] = []
        self._selected_index = 0
        self._selected_key: str | None = None

    @property
    def console(self) -> Console:
        return self.terminal.console

    @property
    def options(self) -> tuple[MenuOption, ...]:
        return tuple(self._options)

    # --- option management ---

    def add_option(
        self, text: str, action: Callable[[], Any], key_string: str | None = None
    ) -> "ConsoleMenu":
        self._options.append(MenuOption(action=action, text=text, key_string=key_string))
        return self

    def add_bound_option(
        self,
        item: T,
        action: Callable[[T], Any],
        text_formatter: Callable[[T], str] | None = None,
        key_formatter: Callable[[T], str] | None = None,
    ) -> "ConsoleMenu":
        """Add an option whose text follows ``item``; ``action(item)`` runs on selection."""
        self._options.append(
            MenuOption(
                action=partial(action, item),
                item=item,
                text_formatter=text_formatter,
                key_formatter=key_formatter,
            )
        )
        return self

    def add_option_range(
        self,
        items: Iterable[T],
        action: Callable[[T], Any],
        text_formatter: Callable[[T], str] | None = None,
        key_formatter: Callable[[T], str] | None = None,
    ) -> "ConsoleMenu":
        for item in items:
            self.add_bound_option(item, action, text_formatter, key_formatter)
        return self

    def clear_options(self) -> "ConsoleMenu":
        self._options.clear()
        return self

    def configure(
        self, callback: Callable[[MenuConfig], Any] | None = None, **settings: Any
    ) -> "ConsoleMenu":
        """Change settings by keyword, through a callback, or both."""
        self.config.update(**settings)
        if callback is not None:
            callback(self.config)
        return self

    # --- ready-made actions ---

    @staticmethod
    def close() -> OutcomeCode:
        return OutcomeCode.CLOSE_MENU

    @staticmethod
    def exit() -> OutcomeCode:
        return OutcomeCode.EXIT_ALL_MENUS

    @staticmethod
    def show_menu(factory: Callable[[], "ConsoleMenu"]) -> Callable[[], MenuExit]:
        """Action that builds a fresh menu with ``factory`` and shows it."""

        def _show() -> MenuExit:
            return factory().show()

        return _show

    # --- hooks ---

    def rebuild_options(self) -> None:
        """Override to repopulate options from live data before each draw."""

    def on_before_show(self) -> None:
        """Override to print text between the title and the options."""

    def on_after_show(self) -> None:
        """Override to print text below the options."""

    # --- main loop ---

    def show(self) -> MenuExit:
        """Run the menu until an action closes it.

        Returns MenuExit.EXIT_ALL when an action asked every menu to close;
        a menu shown from another menu's action passes that up by returning it.
        """
        self._selected_index = 0
        self._selected_key = None

        while True:
            self.rebuild_options()
            if not self._options:
                raise EmptyMenuError(f"{type(self).__name__} has no options to show")
            cfg = self.config.copy()

            if cfg.selection_mode is SelectionMode.KEY_STRING:
                option = self._select_by_key_string(cfg)
            else:
                option = self._select_by_arrows(cfg)

            if option is None:
                logger.debug("%s closed with Escape", type(self).__name__)
                return MenuExit.CLOSED

            if cfg.clear_console:
                self.terminal.clear()

            outcome = coerce_outcome(option.invoke())
            pause, exit_signal = dispatch_outcome(outcome, cfg.wait_after_selection)
            logger.debug(
                "%s: %r -> %s (pause=%s)",
                type(self).__name__,
                option.display_text,
                outcome.name,
                pause,
            )

            if pause:
                self.terminal.pause(cfg.pause_prompt)
            if exit_signal is not None:
                return exit_signal

    # --- arrow mode ---

    def _select_by_arrows(self, cfg: MenuConfig) -> MenuOption | None:
        """Highlight with Up/Down, confirm with Enter. None means Escape."""
        count = len(self._options)
        index = clamp_index(self._selected_index, count)
        term = self.terminal

        term.hide_cursor()
        try:
            screen = self._draw_arrow_menu(cfg, index)
            while True:
                key = term.read_key()
                if key in ENTER_KEYS:
                    self._selected_index = index
                    return self._options[index]
                if cfg.close_on_escape and is_escape(key):
                    return None

                if key == readchar.key.DOWN:
                    new_index = next_index(index, count)
                elif key == readchar.key.UP:
                    new_index = prev_index(index, count)
                else:
                    if cfg.beep_on_error:
                        term.beep()
                    new_index = index

                self._redraw_arrow_rows(cfg, screen, index, new_index)
                index = new_index
        finally:
            term.show_cursor()

    def _draw_arrow_menu(self, cfg: MenuConfig, index: int) -> _ArrowScreen:
        """Full draw: clear, title, before hook, options, after hook."""
        self._draw_header(cfg)

        heights = []
        for i, option in enumerate(self._options):
            heights.append(self._write_arrow_option(cfg, option, i == index))

        after_rows = self._write_hook(self.on_after_show)
        return _ArrowScreen(spans=row_spans(heights), cursor_row=sum(heights) + after_rows)

    def _redraw_arrow_rows(self, cfg: MenuConfig, screen: _ArrowScreen, old: int, new: int) -> None:
        """Repaint only the old and new highlighted rows, then put the cursor back."""
        if old != new:
            self._repaint_arrow_option(cfg, screen, old, selected=False)
        self._repaint_arrow_option(cfg, screen, new, selected=True)

    def _repaint_arrow_option(
        self, cfg: MenuConfig, screen: _ArrowScreen, index: int, selected: bool
    ) -> None:
        span = screen.spans[index]
        self.terminal.move_rows(span.start - screen.cursor_row)
        self._write_arrow_option(cfg, self._options[index], selected)
        self.terminal.move_rows(screen.cursor_row - span.start - span.height)

    def _write_arrow_option(self, cfg: MenuConfig, option: MenuOption, selected: bool) -> int:
        lines = arrow_option_lines(option.display_text, cfg.selector, selected)
        style = cfg.selected_style if selected else cfg.item_style
        return self.terminal.write_lines(lines, style)

    # --- key string mode ---

    def _select_by_key_string(self, cfg: MenuConfig) -> MenuOption:
        """Print keyed options and prompt until a known key is typed."""
        keyed = resolve_key_strings(self._options)
        lookup = {key.casefold(): option for key, option in keyed}
        key_width = max(cell_len(key) for key, _ in keyed)

        self._draw_header(cfg)
        for key, option in keyed:
            selected = self._selected_key is not None and key.casefold() == self._selected_key
            lines = key_string_option_lines(
                option.display_text, key, key_width, cfg.key_string_separator
            )
            self.terminal.write_lines(lines, cfg.selected_style if selected else cfg.item_style)
        self._write_hook(self.on_after_show)

        choice = get_string(
            cfg.key_string_prompt,
            allowed=[key for key, _ in keyed],
            terminal=self.terminal,
        )
        self._selected_key = choice.casefold()
        return lookup[self._selected_key]

    # --- shared drawing ---

    def _draw_header(self, cfg: MenuConfig) -> None:
        if cfg.clear_console:
            self.terminal.clear()
        if cfg.title:
            self.terminal.write_lines(cfg.title.split("\n"), cfg.item_style)
        self._write_hook(self.on_before_show)

    def _write_hook(self, hook: Callable[[], None]) -> int:
        """Run a print hook, replaying its output and returning its row count."""
        with self.console.capture() as capture:
            hook()
        return self.terminal.write_ansi_lines(capture.get())
