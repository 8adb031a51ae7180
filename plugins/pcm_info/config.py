"""
config.py
---------

Configuration for the PCM Info tool.

Supports:
- Default settings
- Persistent config stored in ~/.config/wavels/pcm_info.json
- Command-line overrides
- Interactive prompts (questionary) when asked for
"""

import os
import sys

import questionary

from shared.config import (
    build_settings as shared_build_settings,
    save_persistent_config as shared_save_persistent_config,
)

from .file_list import DEFAULT_EXTENSIONS


CONFIG_FILE = "pcm_info.json"

# ------------------------------------------------------------
# Default settings
# ------------------------------------------------------------
DEFAULTS = {
    # Discovery
    "PATHS": [],
    "EXTENSIONS": list(DEFAULT_EXTENSIONS),
    "RECURSIVE": False,

    # Output
    "COUNT_MODE": False,

    # Logging
    "LOG_FILE": "",
    "LOG_FORMAT": "text",  # "text" or "jsonl"
    "LOG_TO_CONSOLE": False,

    # Performance
    "THREAD_COUNT": 8,

    # Interactive prompts
    "INTERACTIVE_MODE": False,
}

# Keys written by --save-config; PATHS is per run
PERSISTED_KEYS = (
    "EXTENSIONS",
    "RECURSIVE",
    "COUNT_MODE",
    "LOG_FILE",
    "LOG_FORMAT",
    "LOG_TO_CONSOLE",
    "THREAD_COUNT",
)


# ------------------------------------------------------------
# Interactive helpers
# ------------------------------------------------------------
def _interactive_update(settings):
    if not settings.get("INTERACTIVE_MODE"):
        return settings
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        return settings

    if not settings["PATHS"]:
        target = questionary.path(
            "Directory or file to inspect:",
            default=".",
        ).ask()
        if target:
            settings["PATHS"] = [os.path.normpath(target)]

    recursive = questionary.confirm(
        "Include subdirectories?",
        default=bool(settings["RECURSIVE"]),
    ).ask()
    if recursive is not None:
        settings["RECURSIVE"] = recursive

    mode = questionary.select(
        "Report mode:",
        choices=["list", "count"],
        default="count" if settings["COUNT_MODE"] else "list",
    ).ask()
    if mode is not None:
        settings["COUNT_MODE"] = mode == "count"

    return settings


# ------------------------------------------------------------
# Merge settings
# ------------------------------------------------------------
def normalize_settings(settings):
    try:
        threads = int(settings.get("THREAD_COUNT") or 1)
    except (TypeError, ValueError):
        threads = DEFAULTS["THREAD_COUNT"]
    settings["THREAD_COUNT"] = max(1, threads)

    if settings.get("LOG_FORMAT") not in ("text", "jsonl"):
        settings["LOG_FORMAT"] = "text"

    settings["EXTENSIONS"] = [str(e).lstrip(".") for e in settings.get("EXTENSIONS") or DEFAULT_EXTENSIONS]
    settings["PATHS"] = list(settings.get("PATHS") or [])
    return settings


def build_settings(config_dir=None, overrides=None):
    settings = shared_build_settings(
        config_name=CONFIG_FILE,
        config_dir=config_dir,
        defaults=DEFAULTS,
        overrides=overrides or {},
        interactive_fn=_interactive_update,
    )
    return normalize_settings(settings)


def save_persistent_config(settings, config_dir=None):
    return shared_save_persistent_config(
        settings,
        config_name=CONFIG_FILE,
        config_dir=config_dir,
        keys=PERSISTED_KEYS,
    )
