"""
Placeholder use case — locate the placeholder game's install directory.

The placeholder must be installed exactly once.  When it is missing,
Steam is asked to install and validate it.  When it is installed in
several libraries, every copy is removed and Steam is asked to
uninstall it, so a clean reinstall can follow.  Both cases end the run:
the user has to act in Steam first.
"""

from __future__ import annotations

import logging
from pathlib import Path

from proxylaunch.adapters.registry import AdapterRegistry
from proxylaunch.adapters.steam.launcher import steam_action
from proxylaunch.core.errors import ListingFailed, PlaceholderConflict, PlaceholderMissing
from proxylaunch.core.models.action import Receipt
from proxylaunch.core.models.game import PlaceholderTarget
from proxylaunch.core.models.platform import PlatformProfile
from proxylaunch.core.models.settings import Settings
from proxylaunch.core.services.path_catalog import is_dir, remove_dir_contents

logger = logging.getLogger(__name__)


def trigger_steam(
    registry: AdapterRegistry,
    operation: str,
    app_id: int,
    dry_run: bool = False,
) -> Receipt:
    """Ask Steam to perform ``operation``; failures are only logged."""
    receipt = registry.execute_action(steam_action(operation, app_id), dry_run=dry_run)
    if receipt.failed:
        logger.warning("Steam %s request for %d failed: %s", operation, app_id, receipt.error)
    return receipt


def find_placeholder_dirs(roots: list[Path], dir_name: str) -> list[Path]:
    """Install directories of the placeholder across all library roots."""
    return [root / dir_name for root in roots if is_dir(root / dir_name)]


def remove_installation(directory: Path) -> None:
    """Best-effort removal of an install directory and its contents."""
    try:
        remove_dir_contents(directory)
    except (OSError, ListingFailed) as e:
        logger.warning("Failed to remove installation directory contents, ignoring: %s", e)

    try:
        directory.rmdir()
    except OSError as e:
        logger.warning("Failed to remove installation directory, ignoring: %s", e)


def find_placeholder(
    roots: list[Path],
    settings: Settings,
    profile: PlatformProfile,
    registry: AdapterRegistry,
    dry_run: bool = False,
) -> PlaceholderTarget:
    """Find the single installation of the placeholder game.

    Raises:
        PlaceholderMissing: Not installed; install + validate requested.
        PlaceholderConflict: Installed more than once; copies removed
            (unless ``dry_run``) and uninstall requested.
    """
    ph = settings.placeholder
    logger.info("Using placeholder game: %s", ph.name)

    dirs = find_placeholder_dirs(roots, ph.dir_name)

    if len(dirs) == 1:
        binary = ph.binary or profile.placeholder_binary
        return PlaceholderTarget.in_dir(dirs[0], binary)

    if not dirs:
        trigger_steam(registry, "install", ph.app_id, dry_run)
        trigger_steam(registry, "validate", ph.app_id, dry_run)
        raise PlaceholderMissing(
            f"Placeholder game '{ph.name}' not installed. Install it through Steam "
            "first, or repair its files, then run this again"
        )

    logger.warning("Placeholder game '%s' has %d install locations", ph.name, len(dirs))
    for directory in dirs:
        if dry_run:
            logger.info("[dry-run] Would remove %s", directory)
        else:
            logger.info("Removing %s", directory)
            remove_installation(directory)

    trigger_steam(registry, "uninstall", ph.app_id, dry_run)
    raise PlaceholderConflict(
        f"Placeholder game '{ph.name}' had multiple install locations: "
        + ", ".join(str(d) for d in dirs)
        + ". Uninstall it through Steam, then run this again to reinstall"
    )
