"""Command-line front door for rmtk.

Parses CLI options, resolves the startup directory, and builds the initial
navigator. Then dispatches into the interactive browser loop.
"""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from . import __version__, config
from .errors import DirectoryAccessError, TerminalInitError
from .input import KeyDispatcher, KeyReader
from .loop import run_browser
from .navigator import Navigator
from .terminal import TerminalController
from .viewer import ViewerLauncher

LOG_FILE_ENV = "RMTK_LOG_FILE"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(log_file: str | None) -> None:
    """Attach a DEBUG file handler to the package logger when requested.

    Nothing is ever logged to the terminal: the browser owns the screen.
    """
    if not log_file:
        return
    try:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"rmtk: cannot open log file {log_file}: {exc}") from exc
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("rmtk")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def resolve_start_path(path_arg: str | None) -> Path:
    """Pick the startup directory: CLI argument, configured default, then cwd."""
    if path_arg:
        logger.debug("starting from argument path %s", path_arg)
        return Path(path_arg).expanduser()
    configured = config.load_default_path()
    if configured is not None:
        logger.debug("starting from configured path %s", configured)
        return configured
    return Path.cwd()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rmtk",
        description="Browse directories in the terminal and open documents in an external viewer.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory to browse. Defaults to the configured path, then the current directory.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help=f"Write debug logs to this file (or set ${LOG_FILE_ENV}).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the browser.

    Startup listing failures and terminal initialization failures exit with a
    message on stderr and a non-zero status. Quitting and viewer handoff
    return normally.
    """
    args = _build_parser().parse_args(argv)
    configure_logging(args.log_file or os.environ.get(LOG_FILE_ENV))

    start_path = resolve_start_path(args.path)
    try:
        navigator = Navigator.for_directory(start_path)
    except DirectoryAccessError as exc:
        raise SystemExit(f"rmtk: {exc}") from exc

    try:
        terminal = TerminalController.from_stdio()
    except TerminalInitError as exc:
        raise SystemExit(f"rmtk: cannot initialize terminal: {exc}") from exc

    viewer, wrapper = config.load_viewer_command()
    try:
        outcome = run_browser(
            navigator,
            terminal,
            KeyReader(terminal.stdin_fd),
            KeyDispatcher(),
            ViewerLauncher(viewer, wrapper),
        )
    except TerminalInitError as exc:
        raise SystemExit(f"rmtk: cannot initialize terminal: {exc}") from exc
    logger.info("exiting from %s", outcome.navigator.directory)


if __name__ == "__main__":
    main()
