"""
file_list.py
------------

Builds the list of candidate audio files.

Sources:
- a directory (top level only, or recursive)
- explicit command-line arguments, each either a matching file or a directory

Extension matching is exact and case-sensitive: "WAV" matches only when
"WAV" is in the configured set. The text after the LAST dot is compared.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from shared.path_utils import display_path, get_extension, is_directory
from shared.scanner import collect_files_filtered

DEFAULT_EXTENSIONS = ("wav", "WAV", "wave", "WAVE", "aif", "AIF", "aiff", "AIFF")


@dataclass
class FileList:
    paths: List[str] = field(default_factory=list)
    # Longest path, for aligning the report column
    max_length: int = 0

    def add(self, path):
        self.paths.append(path)
        self.max_length = max(self.max_length, len(path))

    def extend(self, other):
        for path in other.paths:
            self.add(path)


def extension_matches(name: str, extensions: Iterable[str]) -> bool:
    if "." not in os.path.basename(name):
        return False
    return get_extension(name, lower=False) in set(extensions)


def build(dir_path: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS, recurse: bool = False) -> FileList:
    """
    List matching files under dir_path, sorted.

    Raises:
        OSError: if dir_path is not a readable directory
    """
    if not os.path.isdir(dir_path):
        raise NotADirectoryError(dir_path)
    # os.walk swallows errors on the root; surface them here
    os.listdir(dir_path)

    files = FileList()
    found = collect_files_filtered(
        dir_path,
        extensions=list(extensions),
        case_sensitive=True,
        recursive=recurse,
        as_path=False,
    )
    for full_path in found:
        rel = os.path.relpath(full_path, dir_path)
        files.add(display_path(dir_path, rel))
    return files


def build_from_args(
    args: Iterable[str],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    recurse: bool = False,
    on_unsupported: Optional[Callable[[str], None]] = None,
) -> FileList:
    """
    Matching file arguments are kept as given; directories are expanded.
    Anything else is passed to on_unsupported and skipped.
    """
    extensions = tuple(extensions)
    files = FileList()

    for path in args:
        if extension_matches(path, extensions):
            files.add(path)
        elif is_directory(path):
            files.extend(build(path, extensions, recurse))
        elif on_unsupported is not None:
            on_unsupported(path)

    return files
