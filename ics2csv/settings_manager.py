"""
Application settings management for conversion preferences.

Tracks how many events the preview shows, whether written CSV files get a
UTF-8 byte-order mark, and an optional default output directory. Settings are
persisted in the user's home directory so they survive across runs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, TypedDict

from ics2csv.logging_helper import Log


class SettingsSchema(TypedDict, total=False):
    preview_rows: int
    write_bom: bool
    output_dir: Optional[str]


SETTINGS_DIR = Path.home() / ".ics2csv"
SETTINGS_FILE = SETTINGS_DIR / "settings.json"

DEFAULT_SETTINGS: SettingsSchema = {
    "preview_rows": 5,
    "write_bom": True,
    "output_dir": None,
}


def _ensure_settings_dir() -> None:
    try:
        SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        Log.warn(f"Unable to create settings directory {SETTINGS_FILE.parent}: {err}")


def _is_valid(key: str, value) -> bool:
    if key == "preview_rows":
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if key == "write_bom":
        return isinstance(value, bool)
    if key == "output_dir":
        return value is None or isinstance(value, str)
    return False


def load_settings() -> SettingsSchema:
    """
    Load settings from disk, falling back to defaults if anything fails.
    """
    if not SETTINGS_FILE.exists():
        return DEFAULT_SETTINGS.copy()

    try:
        data = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Settings data is not a JSON object")
    except (OSError, ValueError) as err:
        Log.warn(f"Failed to read settings file ({SETTINGS_FILE}): {err}")
        return DEFAULT_SETTINGS.copy()

    merged: SettingsSchema = DEFAULT_SETTINGS.copy()
    # Merge only known keys
    for key in DEFAULT_SETTINGS:
        if key not in data:
            continue
        if _is_valid(key, data[key]):
            merged[key] = data[key]  # type: ignore[literal-required]
        else:
            Log.warn(f"Invalid {key} value '{data[key]}', using default {DEFAULT_SETTINGS[key]!r}")
    return merged


def save_settings(settings: SettingsSchema) -> None:
    """
    Persist settings to disk.
    """
    _ensure_settings_dir()
    try:
        SETTINGS_FILE.write_text(
            json.dumps(settings, indent=2, sort_keys=True),
            encoding="utf-8",
        )
    except OSError as err:
        Log.warn(f"Failed to write settings file ({SETTINGS_FILE}): {err}")


def update_settings(**changes) -> SettingsSchema:
    """
    Validate and persist new values for known settings.

    Raises:
        ValueError: If a key is unknown or a value has the wrong type
    """
    for key, value in changes.items():
        if key not in DEFAULT_SETTINGS or not _is_valid(key, value):
            raise ValueError(f"Invalid setting {key}={value!r}")
    settings = load_settings()
    settings.update(changes)  # type: ignore[typeddict-item]
    save_settings(settings)
    Log.info(f"Saved settings: {', '.join(f'{k}={v}' for k, v in changes.items())}")
    return settings

