"""Navigation and search state for one directory listing.

``Navigator`` is an immutable snapshot: every transition returns a new value
and the previous one stays valid, so a failed directory change simply keeps
using the old snapshot. Cursor and viewport invariants hold for every value
produced by the public operations:

* ``0 <= cursor < len(displayed)`` when ``displayed`` is non-empty, else ``0``
* ``offset <= cursor < offset + viewport_height``
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, replace
from pathlib import Path

from .listing import PARENT_ENTRY, list_directory

DEFAULT_VIEWPORT_HEIGHT = 20

logger = logging.getLogger(__name__)


def filter_entries(entries: tuple[str, ...], query: str) -> tuple[str, ...]:
    """Return entries containing ``query`` case-insensitively, order preserved."""
    if not query:
        return entries
    needle = query.lower()
    return tuple(name for name in entries if needle in name.lower())


def _scroll_to_cursor(cursor: int, offset: int, height: int) -> int:
    """Return the nearest offset that keeps ``cursor`` inside the window."""
    if cursor < offset:
        offset = cursor
    elif cursor >= offset + height:
        offset = cursor - height + 1
    return max(0, offset)


@dataclass(frozen=True)
class Navigator:
    """Cursor, viewport, and search sub-state over a directory listing."""

    directory: Path
    entries: tuple[str, ...]
    displayed: tuple[str, ...] | None = None
    cursor: int = 0
    offset: int = 0
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT
    search_active: bool = False
    search_query: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", tuple(self.entries))
        if self.displayed is None:
            object.__setattr__(self, "displayed", filter_entries(self.entries, self.search_query))
        else:
            object.__setattr__(self, "displayed", tuple(self.displayed))

    @classmethod
    def for_directory(
        cls,
        path: Path | str,
        viewport_height: int = DEFAULT_VIEWPORT_HEIGHT,
        lister: Callable[[Path], tuple[str, ...]] = list_directory,
    ) -> Navigator:
        """Build a fresh navigator rooted at ``path``.

        Raises ``DirectoryAccessError`` when the directory cannot be listed.
        """
        directory = Path(os.path.abspath(os.fspath(path)))
        entries = tuple(lister(directory))
        logger.debug("listed %s (%d entries)", directory, len(entries))
        return cls(
            directory=directory,
            entries=entries,
            displayed=entries,
            viewport_height=max(1, viewport_height),
        )

    def enter_directory(
        self,
        path: Path | str,
        lister: Callable[[Path], tuple[str, ...]] = list_directory,
    ) -> Navigator:
        """Return a new navigator for ``path`` keeping the current viewport height."""
        return Navigator.for_directory(path, viewport_height=self.viewport_height, lister=lister)

    # Cursor movement.

    def _with_cursor(self, cursor: int) -> Navigator:
        if not self.displayed:
            return replace(self, cursor=0, offset=0)
        cursor = max(0, min(cursor, len(self.displayed) - 1))
        offset = _scroll_to_cursor(cursor, self.offset, self.viewport_height)
        return replace(self, cursor=cursor, offset=offset)

    def move_cursor_up(self) -> Navigator:
        return self._with_cursor(self.cursor - 1)

    def move_cursor_down(self) -> Navigator:
        return self._with_cursor(self.cursor + 1)

    def page_up(self) -> Navigator:
        """Move the cursor up by half a viewport."""
        return self._with_cursor(self.cursor - self.viewport_height // 2)

    def page_down(self) -> Navigator:
        """Move the cursor down by half a viewport."""
        return self._with_cursor(self.cursor + self.viewport_height // 2)

    def go_to_top(self) -> Navigator:
        return replace(self, cursor=0, offset=0)

    def go_to_bottom(self) -> Navigator:
        cursor = max(0, len(self.displayed) - 1)
        return replace(self, cursor=cursor, offset=max(0, cursor - self.viewport_height + 1))

    def with_viewport_height(self, height: int) -> Navigator:
        """Adopt a new viewport height, re-clamping the offset around the cursor."""
        height = max(1, height)
        if height == self.viewport_height:
            return self
        return replace(self, viewport_height=height)._with_cursor(self.cursor)

    # Search mode.

    def _with_query(self, query: str) -> Navigator:
        return replace(
            self,
            search_query=query,
            displayed=filter_entries(self.entries, query),
            cursor=0,
            offset=0,
        )

    def enter_search_mode(self) -> Navigator:
        return replace(self._with_query(""), search_active=True)

    def append_search_char(self, char: str) -> Navigator:
        return self._with_query(self.search_query + char)

    def remove_search_char(self) -> Navigator:
        """Drop the last query character, or leave search when already empty."""
        if not self.search_query:
            return self.exit_search_mode()
        return self._with_query(self.search_query[:-1])

    def confirm_search(self) -> Navigator:
        """Leave search mode keeping the filtered entries as the active list."""
        return replace(self, search_active=False)

    def exit_search_mode(self) -> Navigator:
        """Cancel search and restore the unfiltered listing."""
        return replace(self._with_query(""), search_active=False)

    # Selection.

    def current_selection(self) -> str | None:
        if not self.displayed:
            return None
        return self.displayed[self.cursor]

    def resolve_selection_path(self) -> Path | None:
        """Return the filesystem path the selected entry points at."""
        selection = self.current_selection()
        if selection is None:
            return None
        if selection == PARENT_ENTRY:
            return self.directory.parent
        return self.directory / selection

    def visible_entries(self) -> tuple[str, ...]:
        """Return the slice of ``displayed`` inside the current window."""
        return self.displayed[self.offset : self.offset + self.viewport_height]
