"""Menu configuration with file and env overrides."""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from rich.style import Style

from keymenu.models import SelectionMode
from keymenu.terminal import DEFAULT_COLOR, Terminal, get_terminal

logger = logging.getLogger("keymenu.config")

# Module-level cache for singleton pattern
_settings_cache: dict[str, Any] | None = None


def clear_config_cache() -> None:
    """Clear the config cache. Useful for testing or config reload."""
    global _settings_cache
    _settings_cache = None


def get_default_config_file() -> Path:
    """Get default settings file, respecting KEYMENU_CONFIG_FILE env var."""
    config_file = os.environ.get("KEYMENU_CONFIG_FILE")
    if config_file:
        return Path(config_file)
    return Path.home() / ".config" / "keymenu" / "config.json"


class ConfigMeta:
    """Schema definition - separate from runtime state."""

    SETTINGS: dict[str, str] = {
        "item_foreground": "Foreground color of unselected options",
        "item_background": "Background color of unselected options",
        "selected_foreground": "Foreground color of the selected option",
        "selected_background": "Background color of the selected option",
        "selector": "Glyph printed before the selected option (arrow mode)",
        "title": "Title line printed above the menu (empty = none)",
        "clear_console": "Clear the screen before drawing and before actions",
        "beep_on_error": "Ring the bell on an unrecognized key",
        "wait_after_selection": "Wait for a key after an action by default",
        "close_on_escape": "Close the menu when Escape is pressed (arrow mode)",
        "selection_mode": "arrow | key_string",
        "key_string_separator": "Text between key string and option text",
        "key_string_prompt": "Prompt shown in key_string mode",
        "pause_prompt": "Text shown while waiting for a key (empty = silent)",
    }


@dataclass
class MenuConfig:
    """Rendering and behavior settings for one menu.

    Colors are rich color names. Unset colors fall back to whatever the
    terminal reported when the config was built, never to live state.
    """

    item_foreground: str = DEFAULT_COLOR
    item_background: str = DEFAULT_COLOR
    selected_foreground: str = DEFAULT_COLOR
    selected_background: str = DEFAULT_COLOR
    selector: str = ">> "
    title: str = ""
    clear_console: bool = True
    beep_on_error: bool = False
    wait_after_selection: bool = True
    close_on_escape: bool = True
    selection_mode: SelectionMode = SelectionMode.ARROW
    key_string_separator: str = " "
    key_string_prompt: str = "Select an option: "
    pause_prompt: str = ""

    @property
    def item_style(self) -> Style:
        return Style(color=self.item_foreground, bgcolor=self.item_background)

    @property
    def selected_style(self) -> Style:
        return Style(color=self.selected_foreground, bgcolor=self.selected_background)

    @classmethod
    def setting_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_terminal(cls, terminal: Terminal | None = None) -> "MenuConfig":
        """Defaults with colors taken from the terminal's current attributes."""
        foreground, background = (terminal or get_terminal()).current_colors()
        return cls(
            item_foreground=foreground,
            item_background=background,
            selected_foreground=foreground,
            selected_background=background,
        )

    @classmethod
    def load(
        cls, terminal: Terminal | None = None, config_file: Path | None = None
    ) -> "MenuConfig":
        """Factory method - defaults, then settings file, then KEYMENU_* env vars.

        The file and env layers are cached when no explicit file is given.
        """
        global _settings_cache

        if config_file is None and _settings_cache is not None:
            settings = _settings_cache
        else:
            settings = _load_from_file(config_file or get_default_config_file())
            settings.update(_env_overrides())
            if config_file is None:
                _settings_cache = settings

        config = cls.from_terminal(terminal)
        config.update(**settings)
        return config

    def update(self, **settings: Any) -> "MenuConfig":
        """Set several settings at once, coercing strings to the setting's type."""
        known = self.setting_names()
        for key, value in settings.items():
            if key not in known:
                raise AttributeError(f"MenuConfig has no setting '{key}'")
            setattr(self, key, _coerce(value, type(getattr(self, key))))
        return self

    def copy(self) -> "MenuConfig":
        return replace(self)

    def as_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.setting_names()}


def _load_from_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        content = path.read_text()
        data = json.loads(content) if content.strip() else {}
    except json.JSONDecodeError:
        # Corrupted settings - use defaults
        logger.warning("Ignoring unreadable menu settings file %s", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring menu settings file %s: expected a JSON object", path)
        return {}

    known = set(MenuConfig.setting_names())
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown menu settings in %s: %s", path, ", ".join(unknown))
    return {key: value for key, value in data.items() if key in known}


def _env_overrides() -> dict[str, str]:
    """Collect KEYMENU_* env vars (highest priority)."""
    overrides = {}
    for key in MenuConfig.setting_names():
        env_key = f"KEYMENU_{key.upper()}"
        if env_key in os.environ:
            overrides[key] = os.environ[env_key]
    return overrides


def _coerce(value: Any, target_type: type) -> Any:
    """Coerce string values from files and env vars to the target type."""
    if target_type is SelectionMode:
        return SelectionMode.parse(value)
    if target_type is bool:
        if isinstance(value, str):
            return value.strip().lower() in ("true", "1", "yes", "y")
        return bool(value)
    if target_type is str:
        return str(value)
    return value
