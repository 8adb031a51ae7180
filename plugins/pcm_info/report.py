"""
report.py
---------

Rendering of decode results.

Modes:
- list:  one line per file, "<path>: <rate> khz <depth> bit <channels>",
         failures on stderr as "<path>: <Kind> ('<ident>')"
- count: a table grouping files by identical (rate, depth, channels),
         failures grouped by error kind in a second table, and each
         failed file listed on stderr

The format_* and *_lines/rows helpers are pure; render_* print through a
rich Console.

This module does NOT decode anything.
"""

from collections import Counter
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table

from .errors import DecodeError


@dataclass(frozen=True)
class CountRow:
    count: int
    label: str
    ok: bool


# ------------------------------------------------------------
# Text helpers
# ------------------------------------------------------------
def describe_channels(channels):
    if channels == 1:
        return "mono"
    if channels == 2:
        return "stereo"
    return f"{channels} channels"


def format_info(info):
    return f"{info.sample_rate} khz {info.bit_depth} bit {describe_channels(info.channels)}"


def format_ident(ident):
    return repr(bytes(ident))[1:]


def format_error(err):
    if isinstance(err, DecodeError):
        return f"{err.kind} ({format_ident(err.ident)})"
    if isinstance(err, OSError):
        return f"{type(err).__name__}: {err.strerror or err}"
    return f"{type(err).__name__}: {err}"


def error_kind(err):
    if isinstance(err, DecodeError):
        return err.kind
    return type(err).__name__


def format_result(result):
    return format_info(result.info) if result.ok else format_error(result.error)


def list_line(result, width=0):
    return f"{(result.path + ':').ljust(width + 1)} {format_result(result)}"


def list_lines(results, width=0):
    return [list_line(r, width) for r in results]


def count_rows(results):
    """
    Group results: successes by PCMInfo, failures by error kind.

    Successes come first. Within each group, larger counts first, ties by
    (sample_rate, bit_depth, channels) or by kind name.
    """
    infos = Counter(r.info for r in results if r.ok)
    kinds = Counter(error_kind(r.error) for r in results if not r.ok)

    ok_rows = sorted(
        infos.items(),
        key=lambda kv: (-kv[1], kv[0].sample_rate, kv[0].bit_depth, kv[0].channels),
    )
    fail_rows = sorted(kinds.items(), key=lambda kv: (-kv[1], kv[0]))

    rows = [CountRow(count=n, label=format_info(info), ok=True) for info, n in ok_rows]
    rows += [CountRow(count=n, label=kind, ok=False) for kind, n in fail_rows]
    return rows


def summary_line(results):
    failed = sum(1 for r in results if not r.ok)
    total = len(results)
    noun = "file" if total == 1 else "files"
    return f"{total} {noun}, {total - failed} ok, {failed} failed"


# ------------------------------------------------------------
# Rich output
# ------------------------------------------------------------
def print_line(console, text):
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def render_list(results, width=0, console=None, err_console=None):
    console = console or Console()
    err_console = err_console or Console(stderr=True)

    for result in results:
        target = console if result.ok else err_console
        print_line(target, list_line(result, width))


def _count_table(rows, label, style=None):
    table = Table(show_edge=False, header_style="bold")
    table.add_column("Files", justify="right")
    table.add_column(label)

    for row in rows:
        table.add_row(str(row.count), row.label, style=style)
    return table


def render_counts(results, width=0, console=None, err_console=None):
    """
    Print the format table, then a separate failure table when any file
    failed. Each failed file is also listed on err_console with its
    error kind and identifier.
    """
    console = console or Console()
    err_console = err_console or Console(stderr=True)

    rows = count_rows(results)
    console.print(_count_table([r for r in rows if r.ok], "Format"))

    fail_rows = [r for r in rows if not r.ok]
    if not fail_rows:
        return

    for result in results:
        if not result.ok:
            print_line(err_console, list_line(result, width))

    console.print(_count_table(fail_rows, "Failure", style="red"))
