"""Argparse-based CLI for scene-autosave."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from scene_autosave import configure_logging, run_service
from scene_autosave.config import Settings
from scene_autosave.context import AutoSaveContext
from scene_autosave.host import CommandHost


def get_version() -> str:
    """Return the package version string."""
    try:
        from importlib.metadata import version

        return version("scene-autosave")
    except Exception:
        return "0.1.0"


def _register_subcommands(subparsers: argparse._SubParsersAction) -> None:
    subparsers.add_parser("run", help="Run the autosave loop until interrupted")
    subparsers.add_parser(
        "find-config", help="Locate the autosave config asset (creating it if missing)"
    )
    subparsers.add_parser("show-config", help="Show the autosave config fields")


def _load_settings(args: argparse.Namespace) -> Settings:
    settings = Settings()
    if args.project_root is not None:
        settings.project_root = Path(args.project_root)
    return settings


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate handler."""

    parser = argparse.ArgumentParser(
        prog="scene-autosave",
        description="Periodically save open scenes while the editor is idle",
    )
    parser.add_argument(
        "--project-root", default=None, help="Project directory (default: cwd)"
    )
    parser.add_argument("-v", "--version", action="store_true", help="Print version")

    subparsers = parser.add_subparsers(dest="command")
    _register_subcommands(subparsers)

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    if args.version:
        print(get_version())
        return

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    settings = _load_settings(args)

    if args.command == "run":
        asyncio.run(run_service(settings))
        return

    configure_logging(settings.log_level)
    context = AutoSaveContext.from_settings(settings, CommandHost(settings))

    if args.command == "find-config":
        context.find_config()
    elif args.command == "show-config":
        print(context.render_inspector())
