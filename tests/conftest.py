"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from proxylaunch.adapters.mock import MockAdapter
from proxylaunch.adapters.registry import AdapterRegistry
from proxylaunch.core.config.platform import select_profile
from proxylaunch.core.models.platform import PlatformProfile


def make_exe(path: Path, content: str = "#!/bin/sh\n") -> Path:
    """Create an executable file, parents included."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(0o755)
    return path


def make_file(path: Path, content: str = "data") -> Path:
    """Create a plain, non-executable file, parents included."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(0o644)
    return path


@pytest.fixture
def linux_profile() -> PlatformProfile:
    """The Linux profile, whatever the host runs."""
    return select_profile("Linux")


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fake home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def library(home: Path) -> Path:
    """The first Linux default library root, created under the fake home."""
    path = home / ".steam" / "steam" / "steamapps" / "common"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def steam_mock() -> MockAdapter:
    return MockAdapter(adapter_name="steam")


@pytest.fixture
def sync_mock() -> MockAdapter:
    return MockAdapter(adapter_name="fs-sync")


@pytest.fixture
def registry(steam_mock: MockAdapter, sync_mock: MockAdapter) -> AdapterRegistry:
    """Registry whose Steam and sync adapters only record calls."""
    reg = AdapterRegistry()
    reg.register(steam_mock)
    reg.register(sync_mock)
    return reg


@pytest.fixture
def exe():
    """Factory: ``exe(path)`` creates an executable file."""
    return make_exe


@pytest.fixture
def plain():
    """Factory: ``plain(path)`` creates a non-executable file."""
    return make_file
