"""Pure helpers for laying out menu options."""

from collections.abc import Sequence
from dataclasses import dataclass

from rich.cells import cell_len

from keymenu.exceptions import DuplicateKeyStringError
from keymenu.models import MenuOption


def next_index(current: int, count: int) -> int:
    """Index below current, wrapping past the last option to the first."""
    return 0 if current + 1 >= count else current + 1


def prev_index(current: int, count: int) -> int:
    """Index above current, wrapping before the first option to the last."""
    return count - 1 if current <= 0 else current - 1


def clamp_index(index: int, count: int) -> int:
    if count == 0:
        return 0
    return max(0, min(index, count - 1))


def resolve_key_strings(options: Sequence[MenuOption]) -> list[tuple[str, MenuOption]]:
    """Pair every option with its key string.

    Options without an explicit key are numbered 1, 2, 3... in order, counting
    only the unkeyed ones. Raises DuplicateKeyStringError on a case-insensitive
    collision.
    """
    resolved: list[tuple[str, MenuOption]] = []
    seen: dict[str, MenuOption] = {}
    counter = 0
    for option in options:
        key = option.explicit_key
        if key is None or not key.strip():
            counter += 1
            key = str(counter)
        else:
            key = key.strip()
        folded = key.casefold()
        if folded in seen:
            raise DuplicateKeyStringError(key, seen[folded].display_text, option.display_text)
        seen[folded] = option
        resolved.append((key, option))
    return resolved


def indent_lines(text: str, first_prefix: str, indent: int) -> list[str]:
    """Split text on newlines, prefixing the first row and indenting the rest."""
    rows = text.split("\n")
    padding = " " * indent
    return [first_prefix + rows[0]] + [padding + row for row in rows[1:]]


def arrow_option_lines(text: str, selector: str, selected: bool) -> list[str]:
    prefix = selector if selected else " " * cell_len(selector)
    return indent_lines(text, prefix, cell_len(selector))


def key_string_option_lines(text: str, key: str, key_width: int, separator: str) -> list[str]:
    prefix = " " * max(0, key_width - cell_len(key)) + key + separator
    return indent_lines(text, prefix, cell_len(prefix))


@dataclass(frozen=True)
class RowSpan:
    """Rows one option occupies, counted from the first option row."""

    start: int
    height: int


def row_spans(heights: Sequence[int]) -> list[RowSpan]:
    spans = []
    start = 0
    for height in heights:
        spans.append(RowSpan(start, height))
        start += height
    return spans
