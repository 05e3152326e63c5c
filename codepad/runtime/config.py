"""Persistent JSON config helpers.

Stores the highlight style, splitter position, window size, and the last
project directory. All access is defensive: malformed or missing config
falls back safely. Credentials are never written here.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from ..source_pane import DEFAULT_STYLE, normalize_style

APP_NAME = "codepad"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_LEFT_PANE_PERCENT = 25.0
DEFAULT_WINDOW_SIZE = (1000, 600)
MIN_WINDOW_SIZE = (320, 240)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are ignored so a read-only config
    location never breaks the editor.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError):
        pass


def _update_config(key: str, value: object) -> None:
    config = load_config()
    config[key] = value
    save_config(config)


def load_style_name() -> str:
    """Load the persisted Pygments style, falling back to the default."""
    value = load_config().get("style")
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_STYLE
    return normalize_style(value.strip())


def save_style_name(style: str) -> None:
    stripped = str(style).strip()
    if not stripped:
        return
    _update_config("style", stripped)


def load_left_pane_percent() -> float:
    """Load the splitter's left-pane width percentage, constrained to (0, 100)."""
    value = load_config().get("left_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_LEFT_PANE_PERCENT
    if value <= 0 or value >= 100:
        return DEFAULT_LEFT_PANE_PERCENT
    return float(value)


def save_left_pane_percent(total_width: int, left_width: int) -> None:
    """Store the left pane width as a percentage clamped to ``[1.0, 99.0]``."""
    if total_width <= 0:
        return
    percent = max(1.0, min(99.0, (left_width / total_width) * 100.0))
    _update_config("left_pane_percent", round(percent, 2))


def load_window_size() -> tuple[int, int]:
    value = load_config().get("window_size")
    if not isinstance(value, list) or len(value) != 2:
        return DEFAULT_WINDOW_SIZE
    width, height = value
    if any(isinstance(item, bool) or not isinstance(item, int) for item in (width, height)):
        return DEFAULT_WINDOW_SIZE
    return max(MIN_WINDOW_SIZE[0], width), max(MIN_WINDOW_SIZE[1], height)


def save_window_size(width: int, height: int) -> None:
    _update_config("window_size", [int(width), int(height)])


def load_last_directory() -> Path | None:
    """Return the last project directory if it still exists."""
    value = load_config().get("last_directory")
    if not isinstance(value, str) or not value:
        return None
    path = Path(value)
    return path if path.is_dir() else None


def save_last_directory(path: Path) -> None:
    _update_config("last_directory", str(path))
