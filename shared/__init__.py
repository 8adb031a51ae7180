"""
shared
------

Shared utilities for all toolbox modules.
"""

from .scanner import (
    iter_files_filtered,
    collect_files_filtered,
)

from .logger import (
    BufferedLogger,
)

from .path_utils import (
    get_extension,
    display_path,
    is_directory,
)

from .config import (
    get_config_dir,
    load_persistent_config,
    save_persistent_config,
    coerce_settings,
    merge_settings,
    build_settings,
)

__all__ = [
    # Scanner
    "iter_files_filtered",
    "collect_files_filtered",
    # Logger
    "BufferedLogger",
    # Path Utils
    "get_extension",
    "display_path",
    "is_directory",
    # Config
    "get_config_dir",
    "load_persistent_config",
    "save_persistent_config",
    "coerce_settings",
    "merge_settings",
    "build_settings",
]
