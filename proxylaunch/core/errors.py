"""
Error kinds — everything the core can raise.

Discovery errors (home, manifests, listings) are normally caught close
to where they happen and degrade a scan result.  Swap errors are never
caught inside the core: the swap is the one operation that leaves a
mark on disk.
"""

from __future__ import annotations

from pathlib import Path


class ProxyLaunchError(Exception):
    """Base class for all proxylaunch errors."""


class HomeDirectoryUnknown(ProxyLaunchError):
    """The user's home directory cannot be determined."""

    def __init__(self, reason: str = ""):
        msg = "Unable to determine user home directory"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ConfigUnreadable(ProxyLaunchError):
    """A library-folders manifest exists but could not be read."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        super().__init__(f"Cannot read {path}: {reason}" if reason else f"Cannot read {path}")


class ConfigMalformed(ProxyLaunchError):
    """A library-folders manifest could not be parsed."""

    def __init__(self, path: Path | None, reason: str):
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"Malformed manifest{where}: {reason}")


class ListingFailed(ProxyLaunchError):
    """A directory could not be enumerated."""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        super().__init__(
            f"Cannot list directory {path}: {reason}" if reason else f"Cannot list directory {path}"
        )


class NoQualifyingBinary(ProxyLaunchError):
    """An installation directory holds no classified binary."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"No game binaries found in {path}")


class SwapFailed(ProxyLaunchError):
    """Clearing the placeholder or linking the new binary failed."""


class PlaceholderMissing(ProxyLaunchError):
    """The placeholder game is not installed in any library root."""


class PlaceholderConflict(ProxyLaunchError):
    """The placeholder game is installed in more than one library root."""
