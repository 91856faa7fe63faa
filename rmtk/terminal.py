"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import sys
import termios
import tty

from .errors import TerminalInitError

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l"
EXIT_TUI_SEQUENCE = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Manage terminal mode transitions for the browser session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors.

        Raises ``TerminalInitError`` when ``stdin_fd`` is not a usable tty.
        """
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except (termios.error, OSError) as exc:
            raise TerminalInitError(f"stdin is not a terminal: {exc}") from exc
        self._active = False

    @classmethod
    def from_stdio(cls) -> TerminalController:
        """Bind to the process stdin/stdout, raising ``TerminalInitError`` if unusable."""
        try:
            stdin_fd = sys.stdin.fileno()
            stdout_fd = sys.stdout.fileno()
        except (AttributeError, OSError, ValueError) as exc:
            raise TerminalInitError(f"no usable stdin/stdout: {exc}") from exc
        return cls(stdin_fd, stdout_fd)

    @property
    def active(self) -> bool:
        return self._active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except (termios.error, OSError) as exc:
            raise TerminalInitError(f"cannot enter raw mode: {exc}") from exc
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)
        self._active = True

    def disable_tui_mode(self) -> None:
        """Restore the main screen buffer and saved tty attributes."""
        if not self._active:
            return
        os.write(self.stdout_fd, EXIT_TUI_SEQUENCE)
        self._active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> os.terminal_size:
        return shutil.get_terminal_size((80, 24))

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
