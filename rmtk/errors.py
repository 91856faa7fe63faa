"""Exception types raised across the browser.

Each failure kind maps to one exit policy: terminal init and startup listing
errors are fatal, in-session listing errors become status messages, and
viewer launch errors are reported after the terminal is restored.
"""

from __future__ import annotations

from pathlib import Path


class RmtkError(Exception):
    """Base class for all browser errors."""


class TerminalInitError(RmtkError):
    """Raised when the terminal cannot be switched into raw mode."""


class DirectoryAccessError(RmtkError):
    """Raised when a directory cannot be listed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"cannot open directory {path}: {reason}")


class ViewerLaunchError(RmtkError):
    """Raised when the external viewer process fails to start."""

    def __init__(self, command: list[str], reason: str) -> None:
        self.command = list(command)
        self.reason = reason
        super().__init__(f"failed to launch {' '.join(self.command)}: {reason}")
