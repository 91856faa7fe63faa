"""Main interactive event loop for the browser.

Each iteration redraws when needed, blocks on one key, and applies one
dispatcher transition. The raw-mode session is released before the viewer
handoff so the launched process inherits a sane terminal.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import ViewerLaunchError
from .input import KeyDispatcher, KeyReader
from .listing import is_directory
from .navigator import Navigator
from .render import Frame, build_frame, viewport_height_for, write_frame
from .terminal import TerminalController

POLL_TIMEOUT_MS = 120

logger = logging.getLogger(__name__)


class Launcher(Protocol):
    def launch(self, path: Path) -> None: ...


@dataclass(frozen=True)
class LoopOutcome:
    """Final navigator state and the file handed to the viewer, if any."""

    navigator: Navigator
    opened: Path | None = None


def run_browser(
    navigator: Navigator,
    terminal: TerminalController,
    reader: KeyReader,
    dispatcher: KeyDispatcher,
    launcher: Launcher,
    *,
    is_dir: Callable[[Path], bool] = is_directory,
    write: Callable[[Frame, int], None] = write_frame,
    poll_timeout_ms: int = POLL_TIMEOUT_MS,
) -> LoopOutcome:
    """Run the browser until quit or viewer handoff.

    A viewer that fails to start is reported on stderr; the outcome still
    records the handoff because the session is already torn down.
    """
    status_message = ""
    dirty = True
    last_size = None
    open_path: Path | None = None

    with terminal.raw_mode():
        while True:
            size = terminal.size()
            if size != last_size:
                last_size = size
                dirty = True

            if dirty:
                navigator = navigator.with_viewport_height(viewport_height_for(size.lines))
                frame = build_frame(
                    navigator, size.columns, size.lines, is_dir=is_dir, status_message=status_message
                )
                write(frame, terminal.stdout_fd)
                dirty = False

            try:
                key = reader.read_key(timeout_ms=poll_timeout_ms)
            except KeyboardInterrupt:
                break
            if key == "":
                continue

            result = dispatcher.dispatch(key, navigator)
            navigator = result.navigator
            status_message = result.message
            dirty = True
            if result.quit:
                open_path = result.open_path
                break

    if open_path is not None:
        try:
            launcher.launch(open_path)
        except ViewerLaunchError as exc:
            logger.error("%s", exc)
            sys.stderr.write(f"rmtk: {exc}\n")
    return LoopOutcome(navigator=navigator, opened=open_path)
