"""Custom exceptions for keymenu."""


class MenuError(Exception):
    """Base exception for all keymenu errors.

    These signal a badly built menu, never bad user input: user input is
    always recovered from by re-prompting.
    """

    pass


class DuplicateKeyStringError(MenuError, ValueError):
    """Two options in one menu resolved to the same key string."""

    def __init__(self, key_string: str, first: str, second: str):
        self.key_string = key_string
        super().__init__(
            f"Duplicate key string '{key_string}' (case-insensitive) "
            f"for options '{first}' and '{second}'"
        )


class EmptyMenuError(MenuError):
    """A menu was shown with no options to choose from."""

    pass
