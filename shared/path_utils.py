"""
shared/path_utils.py
--------------------

Path helpers shared by the toolbox plugins.

Features:
- Extension parsing (case-preserving or lowercased)
- Display paths relative to the working directory
- Directory checks that never raise
"""

import os


def get_extension(path, lower=True):
    """
    Returns the extension after the last dot, without the dot.
    Names without a dot have no extension.

    Example:
        get_extension('file.JPG') -> 'jpg'
        get_extension('file.JPG', lower=False) -> 'JPG'
        get_extension('archive.tar.gz') -> 'gz'
        get_extension('README') -> ''
    """
    name = os.path.basename(path)
    idx = name.rfind(".")
    if idx < 0:
        return ""
    ext = name[idx + 1:]
    return ext.lower() if lower else ext


def display_path(dir_path, name):
    """
    Join a directory and a relative name for display.
    The current directory is left off entirely.

    Example:
        display_path('.', 'a.wav') -> 'a.wav'
        display_path('dir', 'a.wav') -> 'dir/a.wav'
        display_path('./dir', 'a.wav') -> './dir/a.wav'
    """
    if dir_path == ".":
        return name
    return f"{dir_path}/{name}"


def is_directory(path):
    """
    True if path is an existing directory. Never raises.
    """
    try:
        return os.path.isdir(path)
    except (OSError, ValueError):
        return False
