"""Pytest fixtures for keymenu tests."""

import io

import pytest
from rich.console import Console

from keymenu.terminal import Terminal


class ScriptedTerminal(Terminal):
    """Terminal fed from scripted keys and lines that counts its side effects."""

    def __init__(self, keys=(), lines=(), color_system=None):
        self.output = io.StringIO()
        console = Console(
            file=self.output,
            force_terminal=True,
            color_system=color_system,
            width=80,
            height=25,
            highlight=False,
        )
        self._keys = list(keys)
        stream = io.StringIO("".join(f"{line}\n" for line in lines))
        super().__init__(console=console, key_reader=self._next_key, line_stream=stream)
        self.keys_read = 0
        self.clears = 0
        self.beeps = 0
        self.pauses = 0
        self.cursor_visible = True

    def _next_key(self) -> str:
        if not self._keys:
            raise AssertionError("read more keys than were scripted")
        self.keys_read += 1
        return self._keys.pop(0)

    @property
    def keys_left(self) -> int:
        return len(self._keys)

    @property
    def text(self) -> str:
        return self.output.getvalue()

    def clear(self) -> None:
        self.clears += 1
        super().clear()

    def beep(self) -> None:
        self.beeps += 1
        super().beep()

    def pause(self, prompt: str = "") -> str:
        self.pauses += 1
        return super().pause(prompt)

    def hide_cursor(self) -> None:
        self.cursor_visible = False
        super().hide_cursor()

    def show_cursor(self) -> None:
        self.cursor_visible = True
        super().show_cursor()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep user settings and KEYMENU_* env vars out of every test."""
    from keymenu.config import MenuConfig, clear_config_cache
    from keymenu.terminal import clear_terminal_cache

    for name in MenuConfig.setting_names():
        monkeypatch.delenv(f"KEYMENU_{name.upper()}", raising=False)
    monkeypatch.setenv("KEYMENU_CONFIG_FILE", str(tmp_path / "no-such-config.json"))
    # Rich skips cursor control codes on dumb terminals
    monkeypatch.setenv("TERM", "xterm-256color")

    clear_config_cache()
    clear_terminal_cache()

    yield

    # Also clear after test (cleanup)
    clear_config_cache()
    clear_terminal_cache()


@pytest.fixture
def make_terminal():
    """Factory for ScriptedTerminal(keys=..., lines=..., color_system=...)."""
    return ScriptedTerminal
