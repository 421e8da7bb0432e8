"""Persistent JSON config helpers.

Holds the table width cap (edited by hand) and the UI theme name, which the
viewer rewrites when the theme is cycled. Malformed or missing config falls
back to defaults instead of failing startup.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "mdpager"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception as exc:
        logger.debug("config %s not loaded: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.debug("config %s is not a JSON object", CONFIG_PATH)
        return {}
    return data


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write errors are logged and ignored."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.debug("config %s not saved: %s", CONFIG_PATH, exc)


def load_max_table_width() -> int | None:
    """Return the configured table width cap, or ``None`` to use the viewport width."""
    value = load_config().get("max_table_width")
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def load_theme_name() -> str | None:
    value = load_config().get("theme")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def save_theme_name(name: str) -> None:
    config = load_config()
    config["theme"] = name
    save_config(config)
