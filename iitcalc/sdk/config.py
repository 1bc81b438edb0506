"""Configuration management for IIT Calc.

Configuration lives in settings.json - machine-specific settings:
   - data_dir: where saved schemes are stored
   - tax_rules: path to a YAML bracket table (overrides the built-in table)
   - default_output_format: table, json or csv

Config directory resolution:
1. IIT_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/iit-calc/ (XDG_CONFIG_HOME fallback)

Data path resolution:
1. settings.json "data_dir" key (if set via CLI)
2. XDG_DATA_HOME/iit-calc/ or ~/.local/share/iit-calc/
"""

import json
import os
from pathlib import Path
from typing import Any

APP_NAME = "iit-calc"
SETTINGS_FILENAME = "settings.json"

OUTPUT_FORMATS = ("table", "json", "csv")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. IIT_CALC_CONFIG_PATH environment variable
    2. ~/.config/iit-calc/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("IIT_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Args:
        settings: Settings dictionary to save

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def clear_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_data_path() -> Path:
    """Get the data directory path.

    Uses settings.json "data_dir" when set, else XDG_DATA_HOME/iit-calc/.

    Returns:
        Path to the data directory (created if doesn't exist)
    """
    custom = get_setting("data_dir")
    if custom:
        data_path = Path(custom).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path


def get_output_format(default: str = "table") -> str:
    """Get the configured default output format, falling back to `default`."""
    fmt = get_setting("default_output_format")
    if fmt in OUTPUT_FORMATS:
        return fmt
    return default
