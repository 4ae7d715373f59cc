"""
Recording adapter for tests: stands in for Steam or the filesystem sync.
"""

from __future__ import annotations

from proxylaunch.adapters.base import Adapter, ExecutionContext
from proxylaunch.core.models.action import Receipt


class MockAdapter(Adapter):
    """Records every context it executes; succeeds unless told to fail."""

    def __init__(self, adapter_name: str = "mock"):
        self._name = adapter_name
        self._failures: dict[str, str] = {}   # action id -> error
        self.call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.call_log)

    @property
    def called_ids(self) -> list[str]:
        return [ctx.action.id for ctx in self.call_log]

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        self._failures[action_id] = error

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self.call_log.append(context)
        action_id = context.action.id
        if action_id in self._failures:
            return Receipt.failure(self._name, action_id, self._failures[action_id])
        return Receipt.success(self._name, action_id, output=f"[mock] {action_id}")
