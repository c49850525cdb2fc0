"""Persistent JSON config helpers.

Stores the open-file limit and the modification-key safety gap.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .limiter import DEFAULT_OPEN_FILE_LIMIT
from .modkey import MOD_KEY_SAFETY_GAP_SECONDS

logger = logging.getLogger(__name__)

APP_NAME = "lazyfs"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and ignored so an unwritable config
    directory never breaks callers.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("Could not write config %s: %s", CONFIG_PATH, exc)


def _load_int(key: str, default: int, minimum: int) -> int:
    """Read an integer config value no smaller than ``minimum``.

    Booleans, non-integers and out-of-range values fall back to ``default``.
    """
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    if value < minimum:
        return default
    return value


def _save_int(key: str, value: int, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        return
    config = load_config()
    config[key] = value
    save_config(config)


def load_open_file_limit() -> int:
    """Load the maximum number of concurrently open files."""
    return _load_int("open_file_limit", DEFAULT_OPEN_FILE_LIMIT, 1)


def save_open_file_limit(limit: int) -> None:
    """Persist the open-file limit; non-positive values are ignored."""
    _save_int("open_file_limit", limit, 1)


def load_mod_key_safety_gap_seconds() -> int:
    """Load how old a file's mtime must be before it gets a modification key."""
    return _load_int("mod_key_safety_gap_seconds", MOD_KEY_SAFETY_GAP_SECONDS, 0)


def save_mod_key_safety_gap_seconds(seconds: int) -> None:
    """Persist the modification-key safety gap; negative values are ignored."""
    _save_int("mod_key_safety_gap_seconds", seconds, 0)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "load_config",
    "save_config",
    "load_open_file_limit",
    "save_open_file_limit",
    "load_mod_key_safety_gap_seconds",
    "save_mod_key_safety_gap_seconds",
]
