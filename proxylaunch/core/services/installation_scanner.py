"""
Installation scanner — which games are installed, and what can run them.

Two walks:

    list_installations(roots)     game directories holding a binary
    find_binaries(dir, limit)     the binaries of one game directory

Walks are depth-first and visit children in name order, so results are
stable between runs on an unchanged tree.  ``limit`` short-circuits the
walk; ``list_installations`` only needs to know that *one* binary
exists, which keeps huge game trees cheap.

Everything below the directory the caller asked about is best-effort:
unreadable subdirectories are skipped, symlink cycles are cut by a
visited set and the depth is capped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from proxylaunch.core.errors import ListingFailed
from proxylaunch.core.models.game import CandidateBinary
from proxylaunch.core.models.platform import PlatformProfile
from proxylaunch.core.models.settings import DEFAULT_MAX_DEPTH
from proxylaunch.core.services.binary_classifier import is_binary
from proxylaunch.core.services.path_catalog import is_dir, ls

logger = logging.getLogger(__name__)

# Limit meaning "all of them"
UNBOUNDED = 10**9


def find_binaries(
    directory: Path,
    limit: int,
    profile: PlatformProfile,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[CandidateBinary]:
    """Find up to ``limit`` binaries below ``directory``.

    Args:
        directory: Game directory to walk.
        limit: Stop after this many matches.
        profile: Platform profile for classification.
        max_depth: Directory nesting below ``directory`` that is still
            searched; deeper branches are silently ignored.

    Returns:
        Binaries in depth-first, name-ordered traversal order.

    Raises:
        ListingFailed: If ``directory`` itself cannot be listed.
    """
    if limit <= 0:
        return []

    directory = directory.absolute()
    entries = ls(directory)

    visited: set[Path] = set()
    try:
        visited.add(directory.resolve())
    except OSError:
        pass

    found: list[CandidateBinary] = []
    _walk(entries, 1, limit, profile, max_depth, visited, found)
    logger.debug("Found %d binar%s in %s", len(found), "y" if len(found) == 1 else "ies", directory)
    return found


def _walk(
    entries: list[Path],
    depth: int,
    limit: int,
    profile: PlatformProfile,
    max_depth: int,
    visited: set[Path],
    found: list[CandidateBinary],
) -> None:
    for entry in entries:
        if len(found) >= limit:
            return

        if not is_dir(entry):
            if is_binary(entry, profile):
                found.append(CandidateBinary(path=entry))
            continue

        if depth >= max_depth:
            logger.debug("Depth cap reached, not entering %s", entry)
            continue

        try:
            canonical = entry.resolve()
        except OSError:
            continue
        if canonical in visited:
            logger.debug("Already visited %s, skipping %s", canonical, entry)
            continue
        visited.add(canonical)

        try:
            children = ls(entry)
        except ListingFailed as e:
            logger.debug("Skipping: %s", e)
            continue

        _walk(children, depth + 1, limit, profile, max_depth, visited, found)


def list_installations(
    roots: Iterable[Path],
    profile: PlatformProfile,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Path]:
    """List game directories, across roots, that contain a binary.

    Roots are scanned in the given order and their results concatenated.
    An unreadable root or game directory contributes nothing.
    """
    installations: list[Path] = []

    for root in roots:
        try:
            children = ls(root)
        except ListingFailed as e:
            logger.warning("Skipping library root: %s", e)
            continue

        for child in children:
            if not is_dir(child):
                continue
            try:
                if find_binaries(child, 1, profile, max_depth):
                    installations.append(child)
                else:
                    logger.debug("No binaries in %s", child)
            except ListingFailed as e:
                logger.debug("Skipping installation: %s", e)

    logger.info("Found %d installation(s)", len(installations))
    return installations
