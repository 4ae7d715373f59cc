"""
Action and Receipt models — what use cases ask adapters for, and the answer.

Use cases ask for side effects outside the process (open a Steam URI,
sync the filesystem) by sending an Action through the adapter registry.
Adapters answer with a Receipt, never an exception.  A receipt only
says whether the request could be *issued*, not what Steam did with it.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

ReceiptStatus = Literal["ok", "skipped", "failed"]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()


class Action(BaseModel):
    """A requested side effect, dispatched to one adapter by name."""

    id: str                         # e.g. "steam:run:823470"
    name: str = ""
    adapter: str                    # registry key, e.g. "steam"
    params: dict[str, Any] = Field(default_factory=dict)


class Receipt(BaseModel):
    """Outcome of dispatching one Action."""

    adapter: str
    action_id: str
    status: ReceiptStatus = "ok"
    issued_at: str = Field(default_factory=_utc_now)
    duration_ms: int = 0

    output: str = ""                # URI sent, dry-run note, ...
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, adapter: str, action_id: str, output: str = "", **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, output=output, **kwargs)

    @classmethod
    def failure(cls, adapter: str, action_id: str, error: str, **kwargs: Any) -> Receipt:
        return cls(adapter=adapter, action_id=action_id, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, adapter: str, action_id: str, reason: str = "", **kwargs: Any) -> Receipt:
        """Not executed: dry run, or nothing to do."""
        return cls(adapter=adapter, action_id=action_id, status="skipped", output=reason, **kwargs)
