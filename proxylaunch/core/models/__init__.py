"""
Domain models — pydantic types for proxylaunch.

All models are re-exported here for convenient access:

    from proxylaunch.core.models import CandidateBinary, PlaceholderTarget, PlatformProfile
"""

from proxylaunch.core.models.action import Action, Receipt
from proxylaunch.core.models.game import (
    CandidateBinary,
    Choice,
    GamePath,
    PlaceholderTarget,
    binary_choices,
    installation_choices,
)
from proxylaunch.core.models.platform import PlatformFamily, PlatformProfile
from proxylaunch.core.models.settings import PlaceholderSettings, Settings

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # game.py
    "CandidateBinary",
    "Choice",
    "GamePath",
    "PlaceholderTarget",
    "binary_choices",
    "installation_choices",
    # platform.py
    "PlatformFamily",
    "PlatformProfile",
    # settings.py
    "PlaceholderSettings",
    "Settings",
]
