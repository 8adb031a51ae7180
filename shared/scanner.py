"""
shared/scanner.py
-----------------

Directory scanning utilities.
Lazy generators, so large trees are never held in memory twice.

Usage:
    from shared import collect_files_filtered

    # Only top-level .wav files, exact extension case
    files = collect_files_filtered(
        "/some/directory",
        extensions=["wav"],
        case_sensitive=True,
        recursive=False,
    )
"""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .path_utils import get_extension


# ------------------------------------------------------------
# Filtered Scanning
# ------------------------------------------------------------
def iter_files_filtered(
    root: Union[str, Path],
    extensions: Optional[List[str]] = None,
    exclude_dirs: Optional[List[str]] = None,
    case_sensitive: bool = False,
    recursive: bool = True,
    as_path: bool = True,
    follow_symlinks: bool = False,
) -> Iterator[Union[Path, str]]:
    """
    Generator that yields file paths with filtering options.

    Args:
        root: Directory to scan
        extensions: Extensions to include, with or without the dot (e.g. ['wav', '.aif'])
        exclude_dirs: Directory names to skip (e.g. ['__pycache__', '.git'])
        case_sensitive: If True, 'WAV' does not match 'wav'
        recursive: If False, only the top level of root is listed
        as_path: If True, yield Path objects; if False, yield strings
        follow_symlinks: If True, follow symbolic links

    Yields:
        Filtered file paths
    """
    root = str(root)
    exclude_dirs = set(exclude_dirs or [])
    wanted = set()
    for ext in extensions or []:
        ext = ext[1:] if ext.startswith(".") else ext
        wanted.add(ext if case_sensitive else ext.lower())

    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_symlinks):
        # Modify dirnames in-place to skip excluded directories
        if not recursive:
            dirnames[:] = []
        elif exclude_dirs:
            dirnames[:] = [d for d in dirnames if d not in exclude_dirs]

        for f in filenames:
            if wanted and get_extension(f, lower=not case_sensitive) not in wanted:
                continue

            full_path = os.path.join(dirpath, f)
            if as_path:
                yield Path(full_path)
            else:
                yield full_path


def collect_files_filtered(
    root: Union[str, Path],
    extensions: Optional[List[str]] = None,
    exclude_dirs: Optional[List[str]] = None,
    case_sensitive: bool = False,
    recursive: bool = True,
    as_path: bool = True,
    follow_symlinks: bool = False,
) -> List[Union[Path, str]]:
    """
    Collect filtered files, sorted for stable output.
    """
    return sorted(
        iter_files_filtered(
            root,
            extensions=extensions,
            exclude_dirs=exclude_dirs,
            case_sensitive=case_sensitive,
            recursive=recursive,
            as_path=as_path,
            follow_symlinks=follow_symlinks,
        ),
        key=str,
    )
