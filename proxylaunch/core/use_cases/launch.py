"""
Launch use case — pick a game and start it as the placeholder.

This is the top-level flow:

    library roots → placeholder → game (argument or selection)
        → swap → filesystem sync → Steam run

Selection is injected as a ``Selector`` so the flow can run without a
terminal.  Core errors end the flow and are reported in the result;
nothing here catches a failed swap to carry on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from proxylaunch.adapters.registry import AdapterRegistry
from proxylaunch.adapters.system.sync import SYNC_ACTION
from proxylaunch.core.errors import NoQualifyingBinary, ProxyLaunchError
from proxylaunch.core.models.action import Receipt
from proxylaunch.core.models.game import (
    Choice,
    GamePath,
    PlaceholderTarget,
    binary_choices,
    installation_choices,
)
from proxylaunch.core.models.platform import PlatformProfile
from proxylaunch.core.models.settings import DEFAULT_MAX_DEPTH, Settings
from proxylaunch.core.services.installation_scanner import (
    UNBOUNDED,
    find_binaries,
    list_installations,
)
from proxylaunch.core.services.library_locator import find_library_roots
from proxylaunch.core.services.placeholder_swap import replace
from proxylaunch.core.use_cases.placeholder import find_placeholder, trigger_steam

logger = logging.getLogger(__name__)

# (choices, prompt) -> chosen value, or None when nothing was selected
Selector = Callable[[list[Choice], str], str | None]


@dataclass
class LaunchResult:
    """Outcome of a launch."""

    placeholder: PlaceholderTarget | None = None
    game: GamePath | None = None
    link: Path | None = None
    receipts: list[Receipt] = field(default_factory=list)
    dry_run: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {"dry_run": self.dry_run}
        if self.error:
            result["error"] = self.error
        if self.placeholder:
            result["placeholder"] = {
                "dir": str(self.placeholder.dir),
                "bin": str(self.placeholder.bin),
            }
        if self.game:
            result["game"] = {"dir": str(self.game.dir), "bin": str(self.game.bin)}
        if self.link:
            result["link"] = str(self.link)
        result["receipts"] = [
            {"action": r.action_id, "status": r.status, "error": r.error}
            for r in self.receipts
        ]
        return result


def select_game(
    roots: list[Path],
    selector: Selector,
    profile: PlatformProfile,
    max_depth: int = DEFAULT_MAX_DEPTH,
    exclude: Path | None = None,
) -> GamePath:
    """Let the user pick an installation, then one of its binaries.

    Cancelling the binary selection goes back to the installation list.

    Raises:
        ProxyLaunchError: No installations, or nothing selected.
        NoQualifyingBinary: The chosen installation has no binaries.
        ListingFailed: The chosen installation cannot be listed.
    """
    while True:
        installations = [d for d in list_installations(roots, profile, max_depth) if d != exclude]
        if not installations:
            raise ProxyLaunchError("No installed games found in any library root")

        selected = selector(installation_choices(installations), "Select game")
        if selected is None:
            raise ProxyLaunchError("Did not select game")
        directory = Path(selected)

        binaries = find_binaries(directory, UNBOUNDED, profile, max_depth)
        if not binaries:
            raise NoQualifyingBinary(directory)

        chosen = selector(binary_choices(binaries), f"Select binary ({directory.name})")
        if chosen is None:
            logger.debug("No binary selected, back to game selection")
            continue

        return GamePath(dir=directory, bin=Path(chosen))


def launch_game(
    settings: Settings,
    profile: PlatformProfile,
    registry: AdapterRegistry,
    selector: Selector,
    game_bin: Path | None = None,
    home: Path | None = None,
    dry_run: bool = False,
) -> LaunchResult:
    """Swap the chosen game into the placeholder and ask Steam to run it.

    Args:
        settings: Loaded settings.
        profile: Platform profile.
        registry: Adapter registry for Steam and sync.
        selector: Interactive selection, used when ``game_bin`` is None.
        game_bin: Binary given up front; skips selection.
        home: Home directory override for root discovery.
        dry_run: Discover and select, but do not swap, sync or run.
    """
    result = LaunchResult(dry_run=dry_run)

    if not profile.is_supported:
        logger.warning("Unsupported platform (%s), may not work", profile.family)

    try:
        roots = find_library_roots(profile, settings.extra_roots, home=home)
        placeholder = find_placeholder(roots, settings, profile, registry, dry_run=dry_run)
        result.placeholder = placeholder

        if game_bin is not None:
            game = GamePath.from_bin(game_bin)
        else:
            game = select_game(roots, selector, profile, settings.max_depth, exclude=placeholder.dir)
        result.game = game

        if dry_run:
            logger.info("[dry-run] Would link %s -> %s", placeholder.bin, game.bin)
        else:
            logger.info("Preparing game %s", game.name)
            result.link = replace(placeholder, game.bin)
    except (ProxyLaunchError, ValueError) as e:
        result.error = str(e)
        return result

    if profile.family == "linux":
        receipt = registry.execute_action(SYNC_ACTION, dry_run=dry_run)
        if receipt.failed:
            logger.warning("Request to sync filesystem failed, ignoring: %s", receipt.error)
        result.receipts.append(receipt)

    receipt = trigger_steam(registry, "run", settings.placeholder.app_id, dry_run)
    result.receipts.append(receipt)
    if receipt.failed:
        result.error = f"Failed to start game through Steam: {receipt.error}"

    return result
