"""
Path catalog — list directory children, delete subtrees.

No policy lives here.  Listing raises ``ListingFailed``; deletion lets
``OSError`` through so the caller decides how loud to be.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from proxylaunch.core.errors import ListingFailed

logger = logging.getLogger(__name__)


def ls(directory: Path) -> list[Path]:
    """List the children of a directory, sorted by name.

    Raises:
        ListingFailed: If the directory cannot be enumerated.
    """
    try:
        with os.scandir(directory) as it:
            names = [entry.name for entry in it]
    except OSError as e:
        raise ListingFailed(directory, e.strerror or str(e)) from e
    return [directory / name for name in sorted(names)]


def is_dir(path: Path) -> bool:
    """Whether ``path`` is, or links to, a directory.

    Unlike ``Path.is_dir`` this never raises: an entry whose metadata
    cannot be read (e.g. inside a directory without search permission)
    counts as no directory.
    """
    try:
        return stat.S_ISDIR(path.stat().st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return False


def is_real_dir(path: Path) -> bool:
    """Whether ``path`` is a directory itself, not a symlink to one."""
    try:
        return stat.S_ISDIR(path.lstat().st_mode)
    except OSError:
        return False


def remove(path: Path) -> None:
    """Delete a file, a symlink, or a directory tree.

    Symlinks are unlinked, never followed, even when they point at a
    directory.
    """
    if is_real_dir(path):
        logger.debug("Removing tree %s", path)
        shutil.rmtree(path)
    else:
        logger.debug("Unlinking %s", path)
        path.unlink()


def remove_dir_contents(directory: Path) -> int:
    """Delete every first-level entry of ``directory``.

    Stops at the first failure.

    Returns:
        Number of entries removed.

    Raises:
        ListingFailed: If the directory cannot be listed.
        OSError: If an entry cannot be removed.
    """
    removed = 0
    for entry in ls(directory):
        remove(entry)
        removed += 1
    return removed
