"""Configuration management for AST Lens."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from astlens.core.logging import get_logger

CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "astlens"
DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "settings" / "defaults.yaml"
USER_SETTINGS_PATH = CONFIG_DIR / "settings.yaml"

logger = get_logger(__name__)


class ConfigManager:
    """Loads default and user configuration and provides helpers to query values."""

    def __init__(self) -> None:
        self.defaults = self._load_yaml(DEFAULTS_PATH)
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        if USER_SETTINGS_PATH.exists():
            self.user_settings = self._load_yaml(USER_SETTINGS_PATH)
        else:
            self.user_settings = {}
        self.settings = self._deep_merge(self.defaults, self.user_settings)

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError):
            logger.warning("Ignoring unreadable settings file %s", path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def get(self, key: str, default: Any | None = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def section(self, key: str) -> dict[str, Any]:
        """Return a nested mapping, or an empty one when it is missing or malformed."""

        value = self.settings.get(key)
        return value if isinstance(value, dict) else {}

    def save(self) -> None:
        USER_SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        with USER_SETTINGS_PATH.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(self.settings, handle)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged: dict[str, Any] = dict(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    # Typed accessors -------------------------------------------------
    def poll_interval_ms(self) -> int:
        return int(self.section("playground").get("poll_interval_ms", 100))

    def debounce_ms(self) -> int:
        return int(self.section("playground").get("debounce_ms", 50))

    def initial_source(self) -> str:
        return str(self.section("playground").get("initial_source") or "")

    def parser_path(self) -> Path | None:
        value = self.section("parser").get("wasm_path")
        return Path(value).expanduser() if value else None

    def parser_export(self) -> str:
        return str(self.section("parser").get("export", "parseModule"))

    def theme_mode(self) -> str:
        mode = str(self.section("theme").get("mode", "dark")).lower()
        return mode if mode in {"dark", "light"} else "dark"

    def tree_theme_name(self, mode: str) -> str:
        theme_cfg = self.section("theme")
        if mode == "light":
            return str(theme_cfg.get("json_light", "tokyo_night_day"))
        return str(theme_cfg.get("json_dark", "tokyo_night"))
