"""Adapters — bindings for Steam and OS-level side effects.

Public re-exports for convenient access.
"""

from proxylaunch.adapters.base import Adapter, ExecutionContext
from proxylaunch.adapters.mock import MockAdapter
from proxylaunch.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
