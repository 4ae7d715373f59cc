"""
Steam adapter — fire ``steam://`` URIs at the desktop's URI opener.

Steam handles ``steam://install/<id>``, ``steam://run/<id>`` and friends.
The adapter only hands the URI to the opener; whether Steam then
installs or starts anything is not observable from here.  A receipt
only tells whether the opener accepted the request.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time

from proxylaunch.adapters.base import Adapter, ExecutionContext
from proxylaunch.core.config.platform import detect_family
from proxylaunch.core.models.action import Action, Receipt
from proxylaunch.core.models.platform import PlatformFamily

logger = logging.getLogger(__name__)

OPERATIONS = ("install", "uninstall", "validate", "run")

# Opener command prefix per platform family; the URI is appended
OPENERS: dict[str, list[str]] = {
    "linux": ["xdg-open"],
    "macos": ["open"],
    "windows": ["cmd", "/c", "start", ""],
    "unknown": ["xdg-open"],
}

# xdg-open hands off and returns; anything slower is stuck
_OPEN_TIMEOUT = 30


def steam_uri(operation: str, app_id: int) -> str:
    """``steam_uri("install", 1)`` → ``steam://install/1``."""
    return f"steam://{operation}/{app_id}"


def steam_action(operation: str, app_id: int) -> Action:
    """Build the Action asking Steam to perform ``operation`` on ``app_id``."""
    return Action(
        id=f"steam:{operation}:{app_id}",
        name=f"Steam {operation} {app_id}",
        adapter="steam",
        params={"operation": operation, "app_id": app_id},
    )


class SteamAdapter(Adapter):
    """Issue Steam operations through ``steam://`` URIs.

    Action params:
        operation (str): One of 'install', 'uninstall', 'validate', 'run'.
        app_id (int): Steam app ID.
        timeout (int): Opener timeout in seconds (default: 30).
    """

    def __init__(self, family: PlatformFamily | None = None):
        self._family = family or detect_family()

    @property
    def name(self) -> str:
        return "steam"

    @property
    def opener(self) -> list[str]:
        return list(OPENERS.get(self._family, OPENERS["unknown"]))

    def is_available(self) -> bool:
        return shutil.which(self.opener[0]) is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.action.params.get("operation", "")
        if not operation:
            return False, "Missing required param: 'operation'"
        if operation not in OPERATIONS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(OPERATIONS)}"

        app_id = context.action.params.get("app_id")
        if not isinstance(app_id, int) or isinstance(app_id, bool) or app_id <= 0:
            return False, f"Invalid app_id: {app_id!r}"

        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.action.params["operation"]
        app_id = context.action.params["app_id"]
        timeout = context.action.params.get("timeout", _OPEN_TIMEOUT)
        uri = steam_uri(operation, app_id)
        command = self.opener + [uri]

        logger.debug("Invoking Steam: %s", " ".join(command))
        start = time.monotonic()

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Opener timed out after {timeout}s",
                metadata={"uri": uri, "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Failed to invoke Steam URI {uri}: {e}",
                metadata={"uri": uri},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode != 0:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=result.stderr.strip() or f"Opener exited with code {result.returncode}",
                duration_ms=elapsed_ms,
                metadata={"uri": uri, "return_code": result.returncode},
            )

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=uri,
            duration_ms=elapsed_ms,
            metadata={"uri": uri, "return_code": result.returncode},
        )
