"""
Adapter base — the contract for side effects outside the process.

Use cases never open URIs or touch OS-level services themselves; they
send an Action through the registry and an adapter carries it out.
Adapters report every outcome, failures included, as a Receipt.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from proxylaunch.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """The action being run and whether this is a dry run."""

    action: Action
    dry_run: bool = False
    params: dict[str, Any] = Field(default_factory=dict)


class Adapter(ABC):
    """One kind of side effect, registered under ``name``."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Registry key, matched against ``Action.adapter``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the OS facility or tool behind this adapter exists."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Check params before anything runs.

        Returns:
            (valid, reason); reason is empty when valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Carry out the action.  Must not raise."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
