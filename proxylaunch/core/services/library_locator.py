"""
Library locator — find the directories games are installed under.

A library root is a ``steamapps/common`` directory.  Roots come from
three places:

    1. the platform profile's well-known defaults,
    2. ``libraryfolders.vdf`` manifests next to (or one level above)
       each default root, listing libraries on other drives,
    3. ``extra_roots`` from the settings file.

Manifests are best-effort: a missing or broken one only means fewer
roots.  The result is deduplicated on canonical paths and sorted.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

from proxylaunch.core.config import vdf
from proxylaunch.core.errors import ConfigMalformed, ConfigUnreadable, HomeDirectoryUnknown
from proxylaunch.core.models.platform import PlatformProfile
from proxylaunch.core.services.path_catalog import is_dir

logger = logging.getLogger(__name__)

MANIFEST_FILE = "libraryfolders.vdf"
MANIFEST_TABLE = "LibraryFolders"

# Appended to every library path listed in a manifest
LIBRARY_SUBPATH = Path("steamapps") / "common"

_FOLDER_INDEX = re.compile(r"[0-9]+")


def home_dir() -> Path:
    """The user's home directory.

    Raises:
        HomeDirectoryUnknown: If it cannot be determined.
    """
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryUnknown(str(e)) from e


def expand_root(raw: str, home: Path) -> Path:
    """Expand a leading ``~`` against ``home``."""
    if raw == "~":
        return home
    if raw.startswith("~/"):
        return home / raw[2:]
    return Path(raw)


def default_roots(profile: PlatformProfile, home: Path) -> list[Path]:
    """The profile's default roots that exist as directories."""
    roots = []
    for raw in profile.default_roots:
        path = expand_root(raw, home)
        if is_dir(path):
            roots.append(path)
        else:
            logger.debug("Default root not present: %s", path)
    return roots


def manifest_library_paths(manifest: Path) -> list[Path]:
    """Library paths listed in a ``libraryfolders.vdf`` manifest.

    Only entries keyed by decimal digits are libraries; everything else
    in the table (``TimeNextStatsReport``, ``ContentStatsID``, ...) is
    metadata.  A value is either the path itself or a table holding a
    ``path`` key.

    Raises:
        ConfigUnreadable: The manifest cannot be read.
        ConfigMalformed: The manifest cannot be parsed or has no
            ``LibraryFolders`` table.
    """
    data = vdf.load(manifest)
    table = vdf.get_table(data, MANIFEST_TABLE)
    if table is None:
        raise ConfigMalformed(manifest, f"no '{MANIFEST_TABLE}' table")

    paths: list[Path] = []
    for key, value in table.items():
        if not _FOLDER_INDEX.fullmatch(key):
            continue
        if isinstance(value, dict):
            value = value.get("path")
        if isinstance(value, str) and value:
            paths.append(Path(value))
    return paths


def manifest_roots(root: Path) -> list[Path]:
    """Extra library roots declared by manifests beside ``root``.

    Looks in ``root`` and its parent.  Unreadable or malformed manifests
    are skipped.
    """
    found: list[Path] = []
    for base in (root, root.parent):
        manifest = base / MANIFEST_FILE
        if not os.path.isfile(manifest):
            continue

        try:
            libraries = manifest_library_paths(manifest)
        except (ConfigUnreadable, ConfigMalformed) as e:
            logger.debug("Skipping manifest: %s", e)
            continue

        for library in libraries:
            candidate = library / LIBRARY_SUBPATH
            if is_dir(candidate):
                found.append(candidate)
            else:
                logger.debug("Library from %s not present: %s", manifest, candidate)
    return found


def dedupe_roots(roots: Iterable[Path]) -> list[Path]:
    """Canonicalize, deduplicate and sort roots."""
    unique: set[Path] = set()
    for root in roots:
        try:
            unique.add(root.resolve())
        except OSError as e:
            logger.debug("Cannot canonicalize %s: %s", root, e)
    return sorted(unique)


def find_library_roots(
    profile: PlatformProfile,
    extra_roots: Iterable[str] = (),
    home: Path | None = None,
) -> list[Path]:
    """Find all library roots.

    Args:
        profile: Platform profile with the default roots.
        extra_roots: Additional roots (settings file), ``~`` allowed.
        home: Home directory override; determined if None.

    Returns:
        Canonical, deduplicated, path-sorted roots.  May be empty.

    Raises:
        HomeDirectoryUnknown: If ``home`` is None and cannot be determined.
    """
    if home is None:
        home = home_dir()

    defaults = default_roots(profile, home)
    roots = list(defaults)
    for root in defaults:
        roots.extend(manifest_roots(root))

    for raw in extra_roots:
        path = expand_root(raw, home)
        if is_dir(path):
            roots.append(path)
        else:
            logger.warning("Configured library root not found: %s", path)

    result = dedupe_roots(roots)
    logger.info("Found %d library root(s)", len(result))
    return result
