"""External document viewer handoff.

Files are opened by extension with a detached viewer process. When the
wrapper (``devour`` by default) is installed it launches the viewer and
swallows the terminal window; otherwise the viewer runs directly.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

from .errors import ViewerLaunchError

DEFAULT_VIEWER = "zathura"
DEFAULT_WRAPPER = "devour"
OPENABLE_EXTENSIONS = frozenset({".pdf", ".djvu", ".ps", ".epub", ".cb", ".cbz", ".cbr"})

logger = logging.getLogger(__name__)


def can_open(path: Path) -> bool:
    """Return whether ``path`` has an extension the viewer handles."""
    return path.suffix.lower() in OPENABLE_EXTENSIONS


class ViewerLauncher:
    """Fire-and-forget launcher for the document viewer."""

    def __init__(self, viewer: str = DEFAULT_VIEWER, wrapper: str | None = DEFAULT_WRAPPER) -> None:
        self.viewer = viewer
        self.wrapper = wrapper

    def command_for(self, path: Path) -> list[str]:
        """Return the argv used to open ``path``."""
        if self.wrapper and shutil.which(self.wrapper) is not None:
            return [self.wrapper, self.viewer, os.fspath(path)]
        return [self.viewer, os.fspath(path)]

    def launch(self, path: Path) -> None:
        """Start the viewer for ``path`` without waiting for it.

        Raises ``ViewerLaunchError`` when the process cannot be started.
        """
        command = self.command_for(path)
        logger.info("launching viewer: %s", command)
        try:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise ViewerLaunchError(command, exc.strerror or str(exc)) from exc
