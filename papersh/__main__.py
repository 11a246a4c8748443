"""Entry point for running papersh as a module or installed script.

Usage:
    papersh [--config PATH] [--debug]   → interactive shell
    papersh --version / papersh --help
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from papersh import __version__
from papersh.cli import PaperShell
from papersh.config import Settings
from papersh.console import ConsoleUI
from papersh.database.repository import PaperStore
from papersh.errors import ConfigError, StateLoadError


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the process-level flags.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="papersh",
        description="A shell for your paper bibliography. Run `man` inside for help.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: ~/.config/papersh/config.yaml)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug messages",
    )
    return parser


def setup_logging(level: str, console: Console) -> None:
    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(level=level.upper(), format="%(message)s", handlers=[handler], force=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse flags, load state, run the shell, and store state on the way out.

    Returns:
        Process exit status
    """
    args = create_parser().parse_args(argv)
    ui = ConsoleUI()
    error_console = Console(stderr=True)
    setup_logging("DEBUG" if args.debug else "WARNING", error_console)

    try:
        settings = Settings.load(args.config)
    except ConfigError as e:
        ui.error(str(e))
        return 1
    if not args.debug:
        setup_logging(settings.log_level, error_console)
    settings.ensure_dirs()

    try:
        store = PaperStore.load(settings.state_path)
    except StateLoadError as e:
        ui.error(str(e))
        return 1

    shell = PaperShell(settings, store, ui)
    try:
        shell.run()
    finally:
        stored = shell.teardown()
    return 0 if stored else 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
