"""Persistent JSON config helpers.

Stores the default folder/flat presentation mode and the Pygments style.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

CONFIG_PATH = Path.home() / ".config" / "changetree.json"
DEFAULT_STYLE = "monokai"


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_with_folder() -> bool:
    """Return the persisted nested-presentation preference.

    Only explicit boolean values are accepted; anything else falls back to
    ``True`` (nested).
    """
    value = load_config().get("with_folder")
    return value if isinstance(value, bool) else True


def save_with_folder(with_folder: bool) -> None:
    config = load_config()
    config["with_folder"] = bool(with_folder)
    save_config(config)


def load_style() -> str:
    """Return the persisted Pygments style name, or ``monokai``."""
    value = load_config().get("style")
    return value if isinstance(value, str) and value.strip() else DEFAULT_STYLE
