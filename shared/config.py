"""
shared.config
-------------

Common configuration management utilities.

Settings are plain dicts of UPPER_CASE keys, merged in this order
(later wins):

    defaults < persistent JSON file < overrides
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

APP_NAME = "wavels"


def get_config_dir() -> Path:
    """Return the default config directory (~/.config/wavels)."""
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / APP_NAME


def load_persistent_config(
    config_name: str = "config.json", config_dir: Optional[Path] = None
) -> Dict[str, Any]:
    """Load a JSON config file; missing or unreadable files give {}."""

    base_dir = Path(config_dir) if config_dir else get_config_dir()
    config_path = base_dir / config_name

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, UnicodeDecodeError, ValueError, TypeError):
        return {}


def save_persistent_config(
    config: Dict[str, Any],
    config_name: str = "config.json",
    *,
    config_dir: Optional[Path] = None,
    keys: Optional[Iterable[str]] = None,
) -> bool:
    """
    Persist a config dict to disk in the given or default directory.

    Only `keys` are written when given, so per-run values stay out of the file.
    """

    if keys is not None:
        config = {k: config[k] for k in keys if k in config}

    base_dir = Path(config_dir) if config_dir else get_config_dir()

    try:
        base_dir.mkdir(parents=True, exist_ok=True)
        with open(base_dir / config_name, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except (OSError, UnicodeEncodeError, ValueError, TypeError):
        return False


def coerce_settings(settings: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    """
    Drop values whose JSON type disagrees with the default's type.

    A hand-edited config with "THREAD_COUNT": "eight" falls back to the
    default instead of failing later. Lists and tuples are interchangeable.
    """
    clean: Dict[str, Any] = {}
    for key, value in settings.items():
        if key not in defaults or defaults[key] is None:
            clean[key] = value
            continue

        expected = defaults[key]
        if isinstance(expected, (list, tuple)):
            ok = isinstance(value, (list, tuple))
        elif isinstance(expected, bool):
            ok = isinstance(value, bool)
        elif isinstance(expected, int):
            ok = isinstance(value, int) and not isinstance(value, bool)
        else:
            ok = isinstance(value, type(expected))

        if ok:
            clean[key] = value
    return clean


def merge_settings(
    *,
    defaults: Optional[Dict[str, Any]] = None,
    persistent: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge defaults + persistent + overrides (overrides win, None is ignored)."""

    merged: Dict[str, Any] = {}

    if defaults:
        merged.update(defaults)

    if persistent:
        merged.update(coerce_settings(persistent, defaults or {}))

    if overrides:
        for key, value in overrides.items():
            if value is not None:
                merged[key] = value

    return merged


def build_settings(
    config_name: str = "config.json",
    *,
    config_dir: Optional[Path] = None,
    defaults: Optional[Dict[str, Any]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    interactive_fn: Optional[Any] = None,
) -> Dict[str, Any]:
    """
    Build settings by loading persistence, applying defaults, and merging overrides.

    interactive_fn, when given, receives the merged dict and returns the final one.
    """

    persistent = load_persistent_config(config_name=config_name, config_dir=config_dir)

    merged = merge_settings(
        defaults=defaults,
        persistent=persistent,
        overrides=overrides or {},
    )

    if callable(interactive_fn):
        return interactive_fn(merged)

    return merged
