"""Persistent JSON config lookups.

Supplies the default startup directory and the viewer commands.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

from .viewer import DEFAULT_VIEWER, DEFAULT_WRAPPER

APP_NAME = "rmtk"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

logger = logging.getLogger(__name__)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_default_path() -> Path | None:
    """Return the configured startup directory.

    A leading ``~`` is expanded. ``None`` is returned unless the value names
    an existing directory.
    """
    raw = _load_string("default_path")
    if raw is None:
        return None
    path = Path(raw).expanduser()
    if path.is_dir():
        return Path(os.path.abspath(path))
    logger.info("configured default_path %s is not a directory", raw)
    return None


def load_viewer_command() -> tuple[str, str]:
    """Return ``(viewer, wrapper)`` commands, falling back to defaults."""
    viewer = _load_string("viewer") or DEFAULT_VIEWER
    wrapper = _load_string("viewer_wrapper") or DEFAULT_WRAPPER
    return viewer, wrapper
