"""
Platform profile selection.

Maps the running OS to a ``PlatformProfile``.  This is the only place
that branches on the platform; callers receive the profile and thread it
through.
"""

from __future__ import annotations

import logging
import platform

from proxylaunch.core.models.platform import PlatformFamily, PlatformProfile

logger = logging.getLogger(__name__)

# Shared by every family
_BLACKLIST_SUFFIXES = [".so", ".dll", ".dylib", ".lock", ".ds_store"]
_BINARY_DIR_NAMES = ["bin", "binary", "binaries", "run", "game"]

PROFILES: dict[str, PlatformProfile] = {
    "linux": PlatformProfile(
        family="linux",
        default_roots=[
            "~/.steam/steam/steamapps/common",
            "~/.local/share/Steam/steamapps/common",
        ],
        executable_suffixes=[".x86_64", ".x86", ".sh", ".linux", ".bin", ".appimage"],
        blacklist_suffixes=_BLACKLIST_SUFFIXES,
        binary_dir_names=_BINARY_DIR_NAMES + ["bin64", "bin32", "linux", "linux64"],
        check_exec_bit=True,
        placeholder_binary="glitchball_linux.x86_64",
    ),
    "macos": PlatformProfile(
        family="macos",
        default_roots=[
            "~/Library/Application Support/Steam/steamapps/common",
        ],
        executable_suffixes=[".app", ".sh", ".command"],
        blacklist_suffixes=_BLACKLIST_SUFFIXES,
        binary_dir_names=_BINARY_DIR_NAMES + ["macos"],
        check_exec_bit=True,
        placeholder_binary="Glitchball.app",
    ),
    "windows": PlatformProfile(
        family="windows",
        default_roots=[
            "C:/Program Files (x86)/Steam/steamapps/common",
            "C:/Program Files/Steam/steamapps/common",
        ],
        executable_suffixes=[".exe", ".bat", ".cmd"],
        blacklist_suffixes=_BLACKLIST_SUFFIXES,
        binary_dir_names=_BINARY_DIR_NAMES + ["win64", "win32", "x64"],
        check_exec_bit=False,
        placeholder_binary="Glitchball.exe",
    ),
}


def detect_family(system: str | None = None) -> PlatformFamily:
    """Map ``platform.system()`` output to a platform family."""
    name = (system if system is not None else platform.system()).lower()
    if name == "linux":
        return "linux"
    if name == "darwin":
        return "macos"
    if name == "windows":
        return "windows"
    return "unknown"


def select_profile(system: str | None = None) -> PlatformProfile:
    """Select the profile for the running (or given) platform.

    Unknown platforms fall back to the Linux tables with family
    ``unknown``, which is what the launcher has always assumed.
    """
    family = detect_family(system)
    if family in PROFILES:
        return PROFILES[family].model_copy(deep=True)

    logger.debug("Unknown platform %r, using Linux tables", system or platform.system())
    return PROFILES["linux"].model_copy(update={"family": "unknown"}, deep=True)
