"""Rendering of navigator state onto the terminal grid.

``build_frame`` is a pure projection of a ``Navigator`` snapshot and the
terminal size into positioned draw rows. ``write_frame`` turns a frame into
one ANSI payload. Layout, top to bottom: header, separator, entries (or the
empty-state message), footer on the last row.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .listing import is_directory
from .navigator import Navigator
from .text import clip_text, display_width, printable

HEADER_ROW = 0
SEPARATOR_ROW = 1
FIRST_ENTRY_ROW = 2
EMPTY_STATE_ROW = 3
RESERVED_ROWS = 3

SELECTION_MARKER = "> "
ENTRY_INDENT = 2
DIRECTORY_SUFFIX = "/"

EMPTY_SEARCH_MESSAGE = "No matching files"
EMPTY_DIRECTORY_MESSAGE = "No files in this directory"
FOOTER_TEXT = (
    " ↑/k: Up | ↓/j: Down | gg: Top | G: Bottom | Ctrl+U/D: Half Page"
    " | /: Search | Esc: Exit Search | q: Quit "
)

STYLE_SGR: dict[str, str] = {
    "header": "\033[30;47m",
    "separator": "\033[37m",
    "selected": "\033[30;47m",
    "default": "",
    "empty": "\033[31m",
    "footer": "\033[30;47m",
    "status": "\033[1;37;41m",
}


@dataclass(frozen=True)
class DrawRow:
    """One run of text at a screen position with a named style."""

    row: int
    col: int
    text: str
    style: str = "default"


@dataclass(frozen=True)
class Frame:
    rows: tuple[DrawRow, ...]
    viewport_height: int


def viewport_height_for(term_lines: int) -> int:
    """Return rows left for entries after header, separator, and footer."""
    return max(1, term_lines - RESERVED_ROWS)


def header_text(navigator: Navigator) -> str:
    if navigator.search_active:
        return f" RMTK - {navigator.directory} [Search: {navigator.search_query}] "
    return f" RMTK - {navigator.directory} "


def entry_label(directory: Path, name: str, is_dir: Callable[[Path], bool] = is_directory) -> str:
    """Return the display label for ``name``, marking directories with ``/``."""
    label = printable(name)
    if is_dir(directory / name):
        return label + DIRECTORY_SUFFIX
    return label


def build_frame(
    navigator: Navigator,
    width: int,
    height: int,
    *,
    is_dir: Callable[[Path], bool] = is_directory,
    status_message: str = "",
) -> Frame:
    """Project ``navigator`` onto a ``width`` x ``height`` grid.

    The window is taken from the navigator's own offset, sliced with the
    viewport height derived from ``height``. The caller feeds
    ``Frame.viewport_height`` back into the navigator so the next transition
    scrolls against the current terminal size.
    """
    width = max(1, width)
    viewport = viewport_height_for(height)
    rows: list[DrawRow] = [
        DrawRow(HEADER_ROW, 0, clip_text(printable(header_text(navigator)), width), "header"),
        DrawRow(SEPARATOR_ROW, 0, "─" * width, "separator"),
    ]

    displayed = navigator.displayed
    if not displayed:
        message = EMPTY_SEARCH_MESSAGE if navigator.search_query else EMPTY_DIRECTORY_MESSAGE
        rows.append(DrawRow(EMPTY_STATE_ROW, ENTRY_INDENT, clip_text(message, width - ENTRY_INDENT), "empty"))
        last_content_row = EMPTY_STATE_ROW
    else:
        end = min(navigator.offset + viewport, len(displayed))
        last_content_row = FIRST_ENTRY_ROW + end - 1 - navigator.offset
        for idx in range(navigator.offset, end):
            y = FIRST_ENTRY_ROW + idx - navigator.offset
            label = entry_label(navigator.directory, displayed[idx], is_dir)
            if idx == navigator.cursor:
                rows.append(DrawRow(y, 0, clip_text(SELECTION_MARKER + label, width), "selected"))
            else:
                rows.append(DrawRow(y, ENTRY_INDENT, clip_text(label, width - ENTRY_INDENT), "default"))

    footer_row = height - 1
    if footer_row <= last_content_row:
        # Too short for both: the listing wins.
        return Frame(rows=tuple(rows), viewport_height=viewport)
    if status_message:
        rows.append(DrawRow(footer_row, 0, clip_text(printable(f" {status_message} "), width), "status"))
    else:
        rows.append(DrawRow(footer_row, 0, clip_text(FOOTER_TEXT, width), "footer"))
    return Frame(rows=tuple(rows), viewport_height=viewport)


def frame_payload(frame: Frame) -> str:
    """Compose ``frame`` into a full-screen ANSI string."""
    out: list[str] = ["\033[H\033[J"]
    for draw in frame.rows:
        if not draw.text:
            continue
        out.append(f"\033[{draw.row + 1};{draw.col + 1}H")
        sgr = STYLE_SGR.get(draw.style, "")
        if sgr:
            out.append(sgr)
            out.append(draw.text)
            out.append("\033[0m")
        else:
            out.append(draw.text)
    return "".join(out)


def write_frame(frame: Frame, fd: int | None = None) -> None:
    """Write ``frame`` to ``fd`` (stdout by default) in a single call."""
    target = sys.stdout.fileno() if fd is None else fd
    os.write(target, frame_payload(frame).encode("utf-8", errors="replace"))


def frame_text_rows(frame: Frame, width: int, height: int) -> list[str]:
    """Flatten ``frame`` into plain text rows, one per screen line."""
    grid = [""] * max(0, height)
    for draw in frame.rows:
        if not 0 <= draw.row < len(grid):
            continue
        line = grid[draw.row]
        pad = max(0, draw.col - display_width(line))
        grid[draw.row] = clip_text(line + " " * pad + draw.text, width)
    return grid
