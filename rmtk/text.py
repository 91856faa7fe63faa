"""Display-width measurement for terminal cells.

Entry names can hold wide or combining characters, so clipping counts
terminal columns rather than code points.
"""

from __future__ import annotations

import unicodedata


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks and control characters consume no columns, East Asian
    wide/fullwidth characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.category(ch) == "Cc":
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def clip_text(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out)


def printable(text: str) -> str:
    """Replace control characters so a name cannot emit escape sequences."""
    return "".join("?" if unicodedata.category(ch) == "Cc" else ch for ch in text)
