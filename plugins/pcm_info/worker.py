"""
worker.py
---------

Threaded batch runner for the PCM header decoder.

Responsibilities:
- Decode every file in its own task, with its own read-only handle
- Record per-file success or failure; one bad file never stops the batch
- Emit progress updates through an optional callback
- Return results in input order, whatever order the threads finish in
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Optional

from .decoder import PCMInfo, read_info
from .errors import DecodeError
from .report import format_error


@dataclass(frozen=True)
class FileResult:
    path: str
    info: Optional[PCMInfo] = None
    error: Optional[Exception] = None

    @property
    def ok(self):
        return self.error is None


def decode_one(path):
    """Decode a single file into a FileResult. Designed for ThreadPoolExecutor."""
    try:
        return FileResult(path=path, info=read_info(path))
    except (DecodeError, OSError) as e:
        return FileResult(path=path, error=e)


def run_batch(paths, threads=8, logger=None, progress_callback=None):
    """
    Decode all paths in parallel.

    Args:
        paths: file paths, in report order
        threads: worker thread count
        logger: optional BufferedLogger; failures are logged as they arrive
        progress_callback: optional function(fraction, message)

    Returns:
        list of FileResult, same order as paths
    """
    paths = list(paths)
    total = len(paths)
    results = [None] * total
    if total == 0:
        return []

    progress_lock = threading.Lock()
    processed = [0]  # mutable container for closure

    with ThreadPoolExecutor(max_workers=max(1, int(threads or 1))) as executor:
        futures = {executor.submit(decode_one, path): i for i, path in enumerate(paths)}

        for future in as_completed(futures):
            i = futures[future]
            result = future.result()
            results[i] = result

            if logger is not None and not result.ok:
                logger.error(f"FAIL {result.path}: {format_error(result.error)}")

            if progress_callback is not None:
                with progress_lock:
                    processed[0] += 1
                    progress_callback(processed[0] / total, result.path)

    return results
