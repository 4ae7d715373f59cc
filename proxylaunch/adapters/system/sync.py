"""
Filesystem sync adapter — flush pending writes before Steam starts.

Steam may look at the placeholder directory right after the swap; a
sync makes sure it sees the new link.  Failure is harmless, so the use
case only logs it.
"""

from __future__ import annotations

import logging
import os

from proxylaunch.adapters.base import Adapter, ExecutionContext
from proxylaunch.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)

SYNC_ACTION = Action(id="fs-sync", name="Sync filesystem", adapter="fs-sync")


class FilesystemSyncAdapter(Adapter):
    """Call ``os.sync()``.  Unavailable where the OS has no sync(2)."""

    @property
    def name(self) -> str:
        return "fs-sync"

    def is_available(self) -> bool:
        return hasattr(os, "sync")

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not self.is_available():
            return False, "os.sync() is not available on this platform"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        try:
            os.sync()
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Sync failed: {e}",
            )
        return Receipt.success(adapter=self.name, action_id=context.action.id, output="synced")
