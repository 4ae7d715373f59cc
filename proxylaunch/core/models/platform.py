"""
Platform profile — every OS-dependent constant in one value.

A profile is selected once at startup (see ``core.config.platform``) and
passed explicitly to the locator and the classifier.  Nothing below the
CLI looks at ``platform.system()`` itself.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

PlatformFamily = Literal["linux", "macos", "windows", "unknown"]


class PlatformProfile(BaseModel):
    """Paths and name tables used for discovery on one platform family.

    All suffixes and directory names are lowercase; matching is done on
    lowercased file names.
    """

    family: PlatformFamily = "unknown"

    # Library roots probed by default.  A leading "~" is the user's home.
    default_roots: list[str] = Field(default_factory=list)

    # ── Classification tables ───────────────────────────────────
    executable_suffixes: list[str] = Field(default_factory=list)
    blacklist_suffixes: list[str] = Field(default_factory=list)
    binary_dir_names: list[str] = Field(default_factory=list)
    check_exec_bit: bool = False

    # File name of the placeholder game's binary inside its directory
    placeholder_binary: str = ""

    @property
    def is_supported(self) -> bool:
        """Whether the swap is known to work here (symlinks Steam follows)."""
        return self.family == "linux"
