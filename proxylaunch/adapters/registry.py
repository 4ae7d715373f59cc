"""
Adapter registry — dispatch Actions to the adapter named in them.

Use cases never call adapters directly.  The registry resolves the
adapter, validates, honours dry runs and times the call.  Whatever
happens, the caller gets a Receipt back.
"""

from __future__ import annotations

import logging
import time

from proxylaunch.adapters.base import Adapter, ExecutionContext
from proxylaunch.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters by name, plus the dispatch rules around them."""

    def __init__(self):
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        if adapter.name in self._adapters:
            logger.warning("Replacing adapter %r", adapter.name)
        self._adapters[adapter.name] = adapter

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def execute_action(self, action: Action, dry_run: bool = False) -> Receipt:
        """Run ``action`` through its adapter; never raises.

        Dry runs stop after validation with a 'skipped' receipt.
        """
        started = time.monotonic()
        context = ExecutionContext(action=action, dry_run=dry_run, params=action.params)

        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        problem = _validation_problem(adapter, context)
        if problem:
            return Receipt.failure(adapter=action.adapter, action_id=action.id, error=problem)

        if dry_run:
            return Receipt.skip(
                adapter=action.adapter,
                action_id=action.id,
                reason=f"[dry-run] Would run {action.id}",
                metadata={"dry_run": True},
            )

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised on %s: %s", action.adapter, action.id, e)
            receipt = Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - started) * 1000)
        return receipt


def _validation_problem(adapter: Adapter, context: ExecutionContext) -> str:
    """Empty string if the adapter accepts the action, else why not."""
    try:
        ok, message = adapter.validate(context)
    except Exception as e:
        return f"Validation error: {e}"
    return "" if ok else f"Validation failed: {message}"


def default_registry() -> AdapterRegistry:
    """Registry with the Steam and filesystem-sync adapters."""
    from proxylaunch.adapters.steam.launcher import SteamAdapter
    from proxylaunch.adapters.system.sync import FilesystemSyncAdapter

    registry = AdapterRegistry()
    registry.register(SteamAdapter())
    registry.register(FilesystemSyncAdapter())
    return registry
