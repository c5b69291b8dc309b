"""Blocking, retry-until-valid input prompts.

Every prompt follows the same policy: show the message (plus a ``[default]``
hint when a default is given), read a line, fall back to the default on empty
input, parse, check the allow-list, and ask again on any failure. A prompt
only ever returns a valid value.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, TypeVar

from keymenu.terminal import Terminal, get_terminal

T = TypeVar("T")

logger = logging.getLogger("keymenu.prompts")

DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%Y %H:%M", "%Y/%m/%d")
TRUE_LITERALS = ("y", "true")
FALSE_LITERALS = ("n", "false")


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "Y" if value else "N"
    if isinstance(value, datetime):
        if value.hour == value.minute == value.second == 0:
            return value.date().isoformat()
        return value.isoformat(sep=" ", timespec="minutes")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _build_prompt(message: str, default: Any) -> str:
    if default is None:
        return message if message.endswith(" ") else f"{message} "
    return f"{message.rstrip()} [{_format_value(default)}] "


def _prompt(
    message: str,
    parse: Callable[[str], T],
    type_name: str,
    default: T | None = None,
    allowed: Iterable[T] | None = None,
    allow_empty: bool = False,
    casefold: bool = False,
    terminal: Terminal | None = None,
) -> T:
    """Shared prompt loop behind every get_* function."""
    term = terminal or get_terminal()
    choices = list(allowed) if allowed is not None else None
    prompt = _build_prompt(message, default)

    while True:
        raw = term.read_line(prompt).strip()

        if not raw:
            if default is not None:
                return default
            if allow_empty:
                return parse(raw)
            logger.debug("Rejected empty input for %r", message)
            term.error("A value is required.")
            continue

        try:
            value = parse(raw)
        except (ValueError, ArithmeticError):
            logger.debug("Rejected %r: not a valid %s", raw, type_name)
            term.error(f"'{raw}' is not a valid {type_name}.")
            continue

        if choices is None:
            return value

        for choice in choices:
            if casefold and str(choice).casefold() == str(value).casefold():
                return choice
            if not casefold and choice == value:
                return choice

        logger.debug("Rejected %r: not in allowed values", raw)
        term.error("Please enter one of: " + ", ".join(_format_value(c) for c in choices))


def parse_bool(raw: str) -> bool:
    """Y/N first, then true/false, all case-insensitive."""
    lowered = raw.strip().lower()
    if lowered in TRUE_LITERALS:
        return True
    if lowered in FALSE_LITERALS:
        return False
    raise ValueError(f"not a yes/no value: {raw!r}")


def parse_date(raw: str) -> datetime:
    """ISO 8601 first, then the US-style formats in DATE_FORMATS."""
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    raise ValueError(f"not a date: {raw!r}")


def get_integer(
    message: str,
    default: int | None = None,
    allowed: Iterable[int] | None = None,
    terminal: Terminal | None = None,
) -> int:
    return _prompt(message, int, "whole number", default, allowed, terminal=terminal)


def get_double(
    message: str,
    default: float | None = None,
    allowed: Iterable[float] | None = None,
    terminal: Terminal | None = None,
) -> float:
    return _prompt(message, float, "number", default, allowed, terminal=terminal)


def get_decimal(
    message: str,
    default: Decimal | None = None,
    allowed: Iterable[Decimal] | None = None,
    terminal: Terminal | None = None,
) -> Decimal:
    return _prompt(message, _parse_decimal, "decimal number", default, allowed, terminal=terminal)


def get_date(
    message: str,
    default: datetime | None = None,
    allowed: Iterable[datetime] | None = None,
    terminal: Terminal | None = None,
) -> datetime:
    return _prompt(message, parse_date, "date", default, allowed, terminal=terminal)


def get_bool(
    message: str,
    default: bool | None = None,
    allowed: Iterable[bool] | None = None,
    terminal: Terminal | None = None,
) -> bool:
    return _prompt(message, parse_bool, "yes/no answer (Y/N)", default, allowed, terminal=terminal)


def get_string(
    message: str,
    allow_empty: bool = False,
    default: str | None = None,
    allowed: Iterable[str] | None = None,
    terminal: Terminal | None = None,
) -> str:
    """Read text. Allowed values match case-insensitively and come back as listed."""
    return _prompt(
        message,
        str,
        "value",
        default,
        allowed,
        allow_empty=allow_empty,
        casefold=True,
        terminal=terminal,
    )


def _parse_decimal(raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"not a decimal: {raw!r}")
    if not value.is_finite():
        raise ValueError(f"not a finite decimal: {raw!r}")
    return value
