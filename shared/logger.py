"""
shared/logger.py
----------------

Buffered, thread-safe logger used by the toolbox plugins.

Features:
- Thread-safe buffered writes
- Automatic flushing at threshold
- Works without a log file (console mirror and/or callback only)
- Text and JSONL formats
- UTF-8 safe output
- Callback support for log streaming
"""

import json
import sys
import threading
from datetime import datetime


class BufferedLogger:
    """
    A thread-safe logger that buffers log lines and writes them to disk
    in batches.

    Worker threads log one line per file; batching keeps that from turning
    into one open/append per file.
    """

    def __init__(
        self,
        log_path=None,
        buffer_limit=200,
        mirror_to_console=False,
        log_format="text",
        on_line=None,
        stream=None,
    ):
        """
        Args:
            log_path: Path to the log file, or None to keep nothing on disk
            buffer_limit: Number of lines before auto-flush
            mirror_to_console: If True, also write log lines to `stream`
            log_format: "text" or "jsonl"
            on_line: Optional callback invoked with the final rendered line
            stream: Console stream for mirroring (default: sys.stderr)
        """
        self.log_path = log_path or None
        self.buffer_limit = buffer_limit
        self.buffer = []
        self.lock = threading.Lock()
        self.mirror = mirror_to_console
        self.log_format = (log_format or "text").lower()
        self.on_line = on_line
        self.stream = stream

        # Separate runs in text logs; JSONL stays strictly one object per line
        if self.log_path and self.log_format != "jsonl":
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write("\n")

    def _render(self, msg, level):
        now = datetime.now()

        if self.log_format == "jsonl":
            payload = {
                "ts": now.isoformat(timespec="seconds"),
                "level": level,
                "msg": str(msg),
            }
            return json.dumps(payload, ensure_ascii=False)

        ts = now.strftime("%Y-%m-%d %H:%M:%S")
        if level == "info":
            return f"[{ts}] {msg}"
        return f"[{ts}] {level.upper()} {msg}"

    def _flush_locked(self):
        """Internal flush (requires lock already held)"""
        if not self.buffer:
            return

        text = "\n".join(self.buffer) + "\n"
        self.buffer.clear()

        if self.log_path:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(text)

    def log(self, msg, level="info"):
        """
        Append a timestamped message to the buffer.
        Auto-flush when buffer_limit is reached.
        """
        line = self._render(msg, level)

        if self.mirror:
            stream = self.stream or sys.stderr
            print(line, file=stream, flush=True)

        if self.on_line is not None:
            try:
                self.on_line(line)
            except Exception:  # pylint: disable=broad-exception-caught
                # Logging must never crash the tool
                pass

        if not self.log_path:
            return

        with self.lock:
            self.buffer.append(line)
            if len(self.buffer) >= self.buffer_limit:
                self._flush_locked()

    def warn(self, msg):
        self.log(msg, level="warn")

    def error(self, msg):
        self.log(msg, level="error")

    def flush(self):
        """
        Flush all buffered log lines to disk.
        Safe to call multiple times.
        """
        with self.lock:
            self._flush_locked()
