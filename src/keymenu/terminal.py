"""Terminal I/O: rich for output, readchar for single keys."""

from collections.abc import Callable, Iterable
from typing import TextIO

import readchar
from rich.console import Console
from rich.control import Control
from rich.style import Style
from rich.text import Text

DEFAULT_COLOR = "default"
ERROR_STYLE = "red"

# Module-level cache for singleton pattern
_terminal_cache: "Terminal | None" = None


def get_terminal() -> "Terminal":
    """Process-wide terminal shared by menus and prompts that aren't given one."""
    global _terminal_cache
    if _terminal_cache is None:
        _terminal_cache = Terminal()
    return _terminal_cache


def set_terminal(terminal: "Terminal") -> None:
    global _terminal_cache
    _terminal_cache = terminal


def clear_terminal_cache() -> None:
    """Clear the terminal cache. Useful for testing."""
    global _terminal_cache
    _terminal_cache = None


class Terminal:
    """Thin wrapper over a rich Console plus a key reader.

    Every screen side effect the menu engine needs goes through here, so a
    test can hand the engine a Console writing to a StringIO, a scripted key
    reader and a scripted line stream.
    """

    def __init__(
        self,
        console: Console | None = None,
        key_reader: Callable[[], str] | None = None,
        line_stream: TextIO | None = None,
    ):
        """Initialize terminal.

        Args:
            console: Rich console for output. Default writes to stdout.
            key_reader: Callable returning one key press. Default readchar.readkey.
            line_stream: Stream to read lines from instead of stdin.
        """
        self.console = console or Console(highlight=False)
        self._key_reader = key_reader or readchar.readkey
        self._line_stream = line_stream

    # --- input ---

    def read_key(self) -> str:
        return self._key_reader()

    def read_line(self, prompt: str = "") -> str:
        """Read one line, without its trailing newline.

        Raises EOFError when the input is exhausted.
        """
        result = self.console.input(prompt, markup=False, emoji=False, stream=self._line_stream)
        if self._line_stream is not None and result == "":
            # stream.readline() signals EOF with an empty string
            raise EOFError("input stream exhausted")
        return result.rstrip("\r\n")

    def pause(self, prompt: str = "") -> str:
        """Block until any key is pressed."""
        if prompt:
            self.write(prompt)
        return self.read_key()

    # --- output ---

    def write(self, text: str, style: Style | str | None = None) -> None:
        self.console.print(Text(text, style=style or ""), end="", soft_wrap=True)

    def write_line(self, text: str = "", style: Style | str | None = None) -> None:
        """Write one physical row; overflow is cropped so row counting stays exact."""
        self.console.print(Text(text, style=style or ""), no_wrap=True, overflow="crop", crop=True)

    def write_lines(self, lines: Iterable[str], style: Style | str | None = None) -> int:
        count = 0
        for line in lines:
            self.write_line(line, style)
            count += 1
        return count

    def write_ansi_lines(self, rendered: str) -> int:
        """Replay captured console output line by line, returning the row count."""
        count = 0
        for line in rendered.splitlines():
            self.console.print(Text.from_ansi(line), no_wrap=True, overflow="crop", crop=True)
            count += 1
        return count

    def error(self, message: str) -> None:
        self.write_line(message, ERROR_STYLE)

    def clear(self) -> None:
        self.console.clear()

    def beep(self) -> None:
        self.console.bell()

    # --- cursor ---

    def move_rows(self, rows: int) -> None:
        """Move the cursor up (negative) or down (positive) to column 0."""
        if rows:
            self.console.control(Control.move_to_column(0, rows))
        else:
            self.console.control(Control.move_to_column(0))

    def hide_cursor(self) -> None:
        self.console.show_cursor(False)

    def show_cursor(self) -> None:
        self.console.show_cursor(True)

    def current_colors(self) -> tuple[str, str]:
        """Return (foreground, background) the terminal renders with right now.

        Rich does not track attributes set by other writers, so this is the
        terminal's own default pair.
        """
        return DEFAULT_COLOR, DEFAULT_COLOR
