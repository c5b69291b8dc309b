"""Tests for menu configuration."""

import json
from pathlib import Path

import pytest

from keymenu.config import ConfigMeta, MenuConfig, clear_config_cache
from keymenu.models import SelectionMode
from keymenu.terminal import Terminal


class ColoredTerminal(Terminal):
    def current_colors(self):
        return "white", "black"


class TestConfigMeta:
    def test_every_setting_is_described(self):
        assert set(ConfigMeta.SETTINGS) == set(MenuConfig.setting_names())


class TestConfigDefaults:
    def test_defaults(self):
        config = MenuConfig()
        assert config.selector == ">> "
        assert config.title == ""
        assert config.clear_console is True
        assert config.beep_on_error is False
        assert config.wait_after_selection is True
        assert config.close_on_escape is True
        assert config.selection_mode is SelectionMode.ARROW
        assert config.key_string_separator == " "
        assert config.key_string_prompt == "Select an option: "

    def test_colors_come_from_terminal(self):
        config = MenuConfig.from_terminal(ColoredTerminal())
        assert config.item_foreground == "white"
        assert config.item_background == "black"
        assert config.selected_foreground == "white"
        assert config.selected_background == "black"

    def test_styles(self):
        config = MenuConfig(selected_foreground="red", selected_background="white")
        assert config.selected_style.color.name == "red"
        assert config.selected_style.bgcolor.name == "white"


class TestConfigLoad:
    def test_load_from_file(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"selector": "-> ", "selection_mode": "key_string"}))

        config = MenuConfig.load(config_file=config_file)

        assert config.selector == "-> "
        assert config.selection_mode is SelectionMode.KEY_STRING

    def test_load_nonexistent_uses_defaults(self, tmp_path: Path):
        config = MenuConfig.load(config_file=tmp_path / "nonexistent.json")
        assert config.selector == ">> "

    def test_corrupted_file_uses_defaults(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{ invalid json }")
        config = MenuConfig.load(config_file=config_file)
        assert config.selector == ">> "

    def test_unknown_keys_ignored(self, tmp_path: Path, caplog):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"selector": "* ", "sparkles": True}))
        config = MenuConfig.load(config_file=config_file)
        assert config.selector == "* "
        assert "sparkles" in caplog.text

    def test_default_file_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"title": "Hi"}))
        monkeypatch.setenv("KEYMENU_CONFIG_FILE", str(config_file))
        assert MenuConfig.load().title == "Hi"

    def test_default_layer_is_cached(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        config_file = tmp_path / "custom.json"
        config_file.write_text(json.dumps({"title": "First"}))
        monkeypatch.setenv("KEYMENU_CONFIG_FILE", str(config_file))
        assert MenuConfig.load().title == "First"

        config_file.write_text(json.dumps({"title": "Second"}))
        assert MenuConfig.load().title == "First"

        clear_config_cache()
        assert MenuConfig.load().title == "Second"

    def test_each_load_is_independent(self):
        first = MenuConfig.load()
        first.title = "changed"
        assert MenuConfig.load().title == ""


class TestConfigEnvOverrides:
    def test_env_overrides_bool(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("KEYMENU_CLEAR_CONSOLE", "false")
        assert MenuConfig.load().clear_console is False

    def test_env_overrides_mode(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("KEYMENU_SELECTION_MODE", "key-string")
        assert MenuConfig.load().selection_mode is SelectionMode.KEY_STRING

    def test_env_beats_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"selector": "file"}))
        monkeypatch.setenv("KEYMENU_SELECTOR", "env")
        assert MenuConfig.load(config_file=config_file).selector == "env"


class TestConfigUpdate:
    def test_update_coerces_strings(self):
        config = MenuConfig().update(beep_on_error="yes", selection_mode="keystring")
        assert config.beep_on_error is True
        assert config.selection_mode is SelectionMode.KEY_STRING

    def test_update_unknown_setting(self):
        with pytest.raises(AttributeError, match="sparkles"):
            MenuConfig().update(sparkles=True)

    def test_copy_is_detached(self):
        config = MenuConfig()
        snapshot = config.copy()
        config.title = "changed"
        assert snapshot.title == ""
