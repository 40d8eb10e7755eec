"""Per-repository settings."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from gsv.theme import Theme, ThemeError

DEFAULT_REFRESH_INTERVAL = 2.0


class ConfigError(Exception):
    """Settings could not be read or are malformed."""


@dataclass(frozen=True)
class Config:
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    theme_overrides: dict[str, str] = field(default_factory=dict)

    def theme(self) -> Theme:
        try:
            return Theme(self.theme_overrides)
        except ThemeError as exc:
            raise ConfigError(str(exc)) from exc


def settings_path(repo_root: Path) -> Path:
    return repo_root / ".gsv" / "settings.json"


def _load_settings(repo_root: Path) -> dict[str, object]:
    path = settings_path(repo_root)
    if not path.is_file():
        return {}

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid settings format in {path}")
    return raw


def _expect_interval(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError("refreshInterval must be a positive number of seconds.")
    return float(value)


def _expect_theme(value: object) -> dict[str, str]:
    if not isinstance(value, dict):
        raise ConfigError("Invalid theme section in settings.")
    theme = cast(dict[str, object], value)
    overrides: dict[str, str] = {}
    for name, style in theme.items():
        if not isinstance(style, str):
            raise ConfigError(f"Theme style for '{name}' must be a string.")
        overrides[name] = style
    return overrides


def load_config(repo_root: Path) -> Config:
    """Load settings from ``.gsv/settings.json``, validating the theme eagerly."""
    settings = _load_settings(repo_root)

    interval_raw = settings.get("refreshInterval")
    interval = DEFAULT_REFRESH_INTERVAL if interval_raw is None else _expect_interval(interval_raw)

    theme_raw = settings.get("theme")
    overrides = {} if theme_raw is None else _expect_theme(theme_raw)

    config = Config(refresh_interval=interval, theme_overrides=overrides)
    config.theme()
    return config
