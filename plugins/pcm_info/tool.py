"""
tool.py
-------

Entry point for the PCM Info tool (wavels).

Provides:
- CLI mode
- Toolbox integration (pcm-info sub-command)
- Persistent config loading
- Logging setup
- Batch decode and report rendering
- Exit code: 0 when every file decoded, 1 when any file failed
"""

import argparse
import os
import sys

from rich.console import Console

# Support running as a script (python plugins/pcm_info/tool.py ...) as well as
# a module (python -m plugins.pcm_info.tool ...).
if __package__ in (None, ""):
    sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    from plugins.pcm_info import __version__
    from plugins.pcm_info.config import build_settings, save_persistent_config
    from plugins.pcm_info.file_list import build, build_from_args
    from plugins.pcm_info.report import print_line, render_counts, render_list, summary_line
    from plugins.pcm_info.worker import run_batch
    from shared.logger import BufferedLogger
else:
    from . import __version__
    from .config import build_settings, save_persistent_config
    from .file_list import build, build_from_args
    from .report import print_line, render_counts, render_list, summary_line
    from .worker import run_batch
    from shared.logger import BufferedLogger


# ------------------------------------------------------------
# Main entry point
# ------------------------------------------------------------
def run(overrides=None, config_dir=None, save_config=False, console=None, err_console=None):
    """
    Main entry point used by the toolbox.

    Parameters:
        overrides: dict of settings overrides (UPPER_CASE keys)
        config_dir: directory where persistent config is stored
        save_config: persist the merged settings before running
        console / err_console: rich consoles for stdout / stderr

    Returns:
        process exit code
    """
    settings = build_settings(config_dir=config_dir, overrides=overrides)

    console = console or Console()
    err_console = err_console or Console(stderr=True)

    logger = BufferedLogger(
        log_path=settings["LOG_FILE"] or None,
        mirror_to_console=settings["LOG_TO_CONSOLE"],
        log_format=settings["LOG_FORMAT"],
    )

    if save_config and not save_persistent_config(settings, config_dir=config_dir):
        logger.warn("Could not save config")

    logger.log("Starting PCM Info")

    def on_unsupported(path):
        print_line(err_console, f"{path} - unsupported file type")
        logger.warn(f"SKIP unsupported: {path}")

    try:
        if settings["PATHS"]:
            files = build_from_args(
                settings["PATHS"],
                settings["EXTENSIONS"],
                settings["RECURSIVE"],
                on_unsupported=on_unsupported,
            )
        else:
            files = build(".", settings["EXTENSIONS"], settings["RECURSIVE"])
    except OSError as e:
        print_line(err_console, f"[ERROR] Cannot list files: {e}")
        logger.error(f"Cannot list files: {e}")
        logger.flush()
        return 1

    logger.log(f"Found {len(files.paths)} files.")

    results = run_batch(files.paths, threads=settings["THREAD_COUNT"], logger=logger)

    if settings["COUNT_MODE"]:
        render_counts(results, width=files.max_length, console=console, err_console=err_console)
    else:
        render_list(results, width=files.max_length, console=console, err_console=err_console)

    logger.log(summary_line(results))
    logger.flush()

    return 0 if all(r.ok for r in results) else 1


# ------------------------------------------------------------
# Standardized entry point for toolbox + direct execution
# ------------------------------------------------------------
def register_cli(subparsers):
    """
    Register this tool with the toolbox CLI.
    """
    parser = subparsers.add_parser(
        "pcm-info",
        help="Show sample rate, bit depth and channels of WAV/AIFF files",
    )
    _add_arguments(parser)
    parser.set_defaults(func=_run_from_args)


def _add_arguments(parser):
    parser.add_argument("paths", nargs="*", help="Audio files or directories (default: current directory)")
    parser.add_argument("-V", "--version", action="version", version=f"wavels {__version__}")
    parser.add_argument("-r", "--recursive", dest="RECURSIVE", action="store_const", const=True, help="Descend into subdirectories")
    parser.add_argument("-c", "--count", dest="COUNT_MODE", action="store_const", const=True, help="Count files per format instead of listing them")
    parser.add_argument("-t", "--threads", dest="THREAD_COUNT", type=int, help="Worker threads (default: 8)")
    parser.add_argument("--ext", dest="EXTENSIONS", action="append", metavar="EXT", help="Extension to match, case-sensitive (repeatable)")
    parser.add_argument("--log", dest="LOG_FILE", metavar="PATH", help="Append a log to PATH")
    parser.add_argument("--json", dest="LOG_FORMAT", action="store_const", const="jsonl", help="JSON log output")
    parser.add_argument("--verbose", dest="LOG_TO_CONSOLE", action="store_const", const=True, help="Mirror log lines to stderr")
    parser.add_argument("-i", "--interactive", dest="INTERACTIVE_MODE", action="store_const", const=True, help="Prompt for missing settings")
    parser.add_argument("--config-dir", help="Config directory")
    parser.add_argument("--save-config", action="store_true", help="Save these options as defaults")


def _run_from_args(args):
    overrides = {}

    if args.paths:
        overrides["PATHS"] = list(args.paths)

    for key in (
        "RECURSIVE",
        "COUNT_MODE",
        "THREAD_COUNT",
        "EXTENSIONS",
        "LOG_FILE",
        "LOG_FORMAT",
        "LOG_TO_CONSOLE",
        "INTERACTIVE_MODE",
    ):
        val = getattr(args, key, None)
        if val is not None:
            overrides[key] = val

    return run(overrides=overrides, config_dir=args.config_dir, save_config=args.save_config)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="wavels",
        description="Show sample rate, bit depth and channel count of WAV/AIFF files",
    )
    _add_arguments(parser)
    return parser


def main(argv=None):
    """
    Standard entry point so the master toolbox launcher can call this tool.
    """
    args = build_parser().parse_args(argv)
    sys.exit(_run_from_args(args))


if __name__ == "__main__":
    main()
