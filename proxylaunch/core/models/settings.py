"""
Settings model — the optional, user-authored settings file.

The file is only ever read.  Every field has a default, so an empty or
absent file is equivalent to the built-in behaviour.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# Walk depth cap for binary discovery
DEFAULT_MAX_DEPTH = 32


class PlaceholderSettings(BaseModel):
    """The Steam app whose install directory gets repointed."""

    name: str = "Glitchball"
    app_id: int = 823470
    dir_name: str = "Glitchball"
    binary: str | None = None    # overrides PlatformProfile.placeholder_binary

    @field_validator("app_id")
    @classmethod
    def _positive_app_id(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("app_id must be a positive integer")
        return v

    @field_validator("dir_name")
    @classmethod
    def _plain_dir_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"dir_name must be a plain directory name, got {v!r}")
        return v


class Settings(BaseModel):
    """Top-level settings."""

    placeholder: PlaceholderSettings = Field(default_factory=PlaceholderSettings)
    extra_roots: list[str] = Field(default_factory=list)
    max_depth: int = DEFAULT_MAX_DEPTH

    @field_validator("max_depth")
    @classmethod
    def _positive_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_depth must be at least 1")
        return v
