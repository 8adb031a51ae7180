#!/usr/bin/env python3
"""
toolbox.py
-------------------
Master entry point for the Tools Suite.
Automatically discovers tools under plugins/ and exposes each one as a
sub-command.
"""

import argparse
import importlib
import importlib.util
import os
import sys
from pathlib import Path

PLUGINS_DIR = Path(__file__).resolve().parent / "plugins"

# Third-party libraries the plugins rely on
REQUIRED_MODULES = ("rich", "questionary")

TOOLS = {}


def _is_interactive_tty() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def discover_tools():
    """
    Scans subdirectories for 'tool.py' and loads them as modules.
    """
    base_path = PLUGINS_DIR

    # Ensure repo root is on sys.path for plugins.* imports
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    if not base_path.exists():
        return TOOLS

    for item in sorted(os.listdir(base_path)):
        item_path = base_path / item

        # Skip non-directories and special folders
        if not item_path.is_dir() or item.startswith('.') or item.startswith('__'):
            continue

        tool_file = item_path / "tool.py"
        if tool_file.exists():
            try:
                module_name = f"plugins.{item}.tool"
                module = importlib.import_module(module_name)
                TOOLS[item] = module
            except Exception as e:  # pylint: disable=broad-exception-caught
                print(f"[WARN] Failed to load tool '{item}': {e}", file=sys.stderr)

    return TOOLS


def run_doctor() -> int:
    """Basic environment + discovery checks.

    Returns:
        int: process exit code (0 success, 1 issues)
    """
    print("=" * 60)
    print("TOOLS SUITE DOCTOR")
    print("=" * 60)

    issues = []
    warnings = []

    py_ver = sys.version_info
    print(f"[CHECK] Python: {py_ver.major}.{py_ver.minor}.{py_ver.micro}")
    if py_ver < (3, 8):
        issues.append("Python 3.8+ is required")

    print(f"[CHECK] Interactive TTY: {_is_interactive_tty()}")

    print("[CHECK] Libraries:")
    for name in REQUIRED_MODULES:
        if importlib.util.find_spec(name) is not None:
            print(f"  [OK] {name}")
        else:
            issues.append(f"{name} is not installed (pip install {name})")
            print(f"  [MISSING] {name}")

    print("[CHECK] Discovered tools:")
    if not TOOLS:
        warnings.append("No tools discovered")
        print("  [WARN] none")
    else:
        for name in sorted(TOOLS.keys()):
            module = TOOLS[name]
            ok_register = hasattr(module, "register_cli")
            ok_run = hasattr(module, "run")
            print(f"  [OK] {name} (register_cli={ok_register}, run={ok_run})")
            if not ok_register:
                warnings.append(f"{name}: missing register_cli")
            if not ok_run:
                warnings.append(f"{name}: missing run")

    print("=" * 60)
    if issues:
        print(f"RESULT: {len(issues)} issue(s) found")
        for issue in issues:
            print(f"  - {issue}")
    else:
        print("RESULT: All checks passed")

    if warnings:
        print(f"Warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")
    print("=" * 60)

    return 0 if not issues else 1


def build_parser():
    parser = argparse.ArgumentParser(
        prog="toolbox",
        description="Tools Suite - unified CLI launcher",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available Tools")

    # Register tool CLIs
    for name, module in sorted(TOOLS.items()):
        if hasattr(module, "register_cli"):
            try:
                module.register_cli(subparsers)
            except Exception as e:  # pylint: disable=broad-exception-caught
                print(f"[WARN] Failed to register CLI for '{name}': {e}", file=sys.stderr)

    # Built-in commands
    subparsers.add_parser("doctor", help="Run environment validation checks")

    return parser


def main(argv=None):
    discover_tools()
    parser = build_parser()

    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)

    if args.command == "doctor":
        return run_doctor()

    # Execute the selected tool's function
    if hasattr(args, "func"):
        return args.func(args) or 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
