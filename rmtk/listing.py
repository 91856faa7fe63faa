"""Directory enumeration for the browser listing."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from .errors import DirectoryAccessError

PARENT_ENTRY = ".."

logger = logging.getLogger(__name__)


def list_directory(directory: Path) -> tuple[str, ...]:
    """Return entry base names of ``directory`` in enumeration order.

    A synthetic ``".."`` entry is prepended unless ``directory`` is the
    filesystem root. Any ``OSError`` is raised as ``DirectoryAccessError``.
    """
    names: list[str] = []
    if directory.parent != directory:
        names.append(PARENT_ENTRY)
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                names.append(child.name)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        logger.warning("listing %s failed: %s", directory, reason)
        raise DirectoryAccessError(directory, reason) from exc
    return tuple(names)


def is_directory(path: Path) -> bool:
    """Return whether ``path`` is a directory, ``False`` on stat failure."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (OSError, ValueError):
        return False
