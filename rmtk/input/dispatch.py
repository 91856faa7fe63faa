"""Keyboard dispatch for normal and search modes.

Classifies one decoded key token by the navigator's mode and applies the
matching transition. The ``gg`` double-tap latch is dispatcher state; the
navigator itself only ever sees a single ``go_to_top`` call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..errors import DirectoryAccessError
from ..listing import is_directory, list_directory
from ..navigator import Navigator
from ..viewer import can_open as viewer_can_open
from .key_registry import KeyComboBinding, KeyComboRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one key: the next navigator plus any loop-level command."""

    navigator: Navigator
    quit: bool = False
    open_path: Path | None = None
    message: str = ""


class KeyDispatcher:
    """Route key tokens to navigator transitions."""

    def __init__(
        self,
        *,
        is_dir: Callable[[Path], bool] = is_directory,
        can_open: Callable[[Path], bool] = viewer_can_open,
        lister: Callable[[Path], tuple[str, ...]] = list_directory,
    ) -> None:
        self.is_dir = is_dir
        self.can_open = can_open
        self.lister = lister
        self.pending_g = False

    def dispatch(self, key: str, navigator: Navigator) -> DispatchResult:
        """Handle one key against ``navigator``."""
        if navigator.search_active:
            return self.handle_search_key(key, navigator)
        return self.handle_normal_key(key, navigator)

    def handle_search_key(self, key: str, navigator: Navigator) -> DispatchResult:
        """Edit the query, confirm, or cancel while search mode is active."""
        bindings: KeyComboRegistry[Navigator] = KeyComboRegistry().register_bindings(
            KeyComboBinding(("ESC",), navigator.exit_search_mode),
            KeyComboBinding(("ENTER",), navigator.confirm_search),
            KeyComboBinding(("BACKSPACE",), navigator.remove_search_char),
        )
        handled = bindings.dispatch(key)
        if handled is not None:
            return DispatchResult(handled)
        if len(key) == 1 and key.isprintable():
            return DispatchResult(navigator.append_search_char(key))
        return DispatchResult(navigator)

    def handle_normal_key(self, key: str, navigator: Navigator) -> DispatchResult:
        """Handle one normal-mode key, tracking the ``gg`` latch."""
        if key == "g":
            if self.pending_g:
                self.pending_g = False
                return DispatchResult(navigator.go_to_top())
            self.pending_g = True
            return DispatchResult(navigator)
        self.pending_g = False

        def quit_action() -> DispatchResult:
            return DispatchResult(navigator, quit=True)

        def enter_action() -> DispatchResult:
            return self.activate_selection(navigator)

        def transition(step: Callable[[], Navigator]) -> Callable[[], DispatchResult]:
            return lambda: DispatchResult(step())

        bindings: KeyComboRegistry[DispatchResult] = KeyComboRegistry().register_bindings(
            KeyComboBinding(("q", "ESC", "CTRL_C"), quit_action),
            KeyComboBinding(("UP", "k"), transition(navigator.move_cursor_up)),
            KeyComboBinding(("DOWN", "j"), transition(navigator.move_cursor_down)),
            KeyComboBinding(("CTRL_U", "PAGE_UP"), transition(navigator.page_up)),
            KeyComboBinding(("CTRL_D", "PAGE_DOWN"), transition(navigator.page_down)),
            KeyComboBinding(("G",), transition(navigator.go_to_bottom)),
            KeyComboBinding(("/",), transition(navigator.enter_search_mode)),
            KeyComboBinding(("ENTER",), enter_action),
        )
        handled = bindings.dispatch(key)
        if handled is not None:
            return handled
        return DispatchResult(navigator)

    def activate_selection(self, navigator: Navigator) -> DispatchResult:
        """Descend into a directory or hand an openable file to the viewer.

        A directory that cannot be listed leaves ``navigator`` current and
        reports the error as a message. Files the viewer cannot open are
        ignored.
        """
        target = navigator.resolve_selection_path()
        if target is None:
            return DispatchResult(navigator)
        if self.is_dir(target):
            try:
                entered = navigator.enter_directory(target, lister=self.lister)
            except DirectoryAccessError as exc:
                logger.warning("staying in %s: %s", navigator.directory, exc)
                return DispatchResult(navigator, message=str(exc))
            logger.info("entered %s", entered.directory)
            return DispatchResult(entered)
        if self.can_open(target):
            return DispatchResult(navigator, quit=True, open_path=target)
        return DispatchResult(navigator)
