"""
Tests for CLI commands — global options, library inspection, steam, launch.
"""

import json
import os
from pathlib import Path

import pytest
from click.testing import CliRunner

from proxylaunch.adapters import registry as registry_module
from proxylaunch.adapters.mock import MockAdapter
from proxylaunch.adapters.registry import AdapterRegistry
from proxylaunch.main import cli

BINARY = "glitchball_linux.x86_64"


@pytest.fixture(autouse=True)
def isolated_env(home: Path, tmp_path: Path, monkeypatch):
    """Fake home, no user settings file, Linux tables."""
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("PXL_CONFIG", raising=False)
    monkeypatch.delenv("PXL_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PXL_LOG_FILE", raising=False)
    monkeypatch.setattr("platform.system", lambda: "Linux")


@pytest.fixture
def installed(library: Path, exe) -> Path:
    exe(library / "Glitchball" / BINARY)
    exe(library / "GameA" / "bin" / "gamea.x86_64")
    return library


@pytest.fixture
def mocked_registry(registry: AdapterRegistry, monkeypatch) -> AdapterRegistry:
    monkeypatch.setattr(registry_module, "default_registry", lambda: registry)
    return registry


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "placeholder" in result.output
        for command in ("launch", "roots", "games", "bins", "check", "steam", "config"):
            assert command in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_missing_explicit_config(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.yml"), "roots"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_config(self, tmp_path: Path):
        config = tmp_path / "config.yml"
        config.write_text("max_depth: 0\n")
        result = CliRunner().invoke(cli, ["-c", str(config), "roots"])
        assert result.exit_code == 1
        assert "Invalid settings" in result.output


class TestConfigShow:
    def test_defaults_json(self):
        result = CliRunner().invoke(cli, ["config", "show", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["placeholder"]["app_id"] == 823470
        assert data["max_depth"] == 32

    def test_from_file(self, tmp_path: Path):
        config = tmp_path / "config.yml"
        config.write_text("extra_roots: [/srv/games]\n")
        result = CliRunner().invoke(cli, ["-c", str(config), "config", "show"])
        assert result.exit_code == 0
        assert str(config) in result.output
        assert "/srv/games" in result.output


class TestRootsAndGames:
    def test_roots_json(self, library: Path):
        result = CliRunner().invoke(cli, ["roots", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"roots": [str(library.resolve())]}

    def test_roots_extra_from_settings(self, tmp_path: Path, home: Path):
        (home / "Games").mkdir()
        config = tmp_path / "config.yml"
        config.write_text("extra_roots: ['~/Games']\n")
        result = CliRunner().invoke(cli, ["-c", str(config), "roots", "--json"])
        assert json.loads(result.output)["roots"] == [str((home / "Games").resolve())]

    def test_roots_none(self):
        result = CliRunner().invoke(cli, ["roots"])
        assert result.exit_code == 0
        assert "No library roots found" in result.output

    def test_games_json(self, installed: Path):
        result = CliRunner().invoke(cli, ["games", "--json"])
        assert result.exit_code == 0
        games = json.loads(result.output)["games"]
        assert [Path(g).name for g in games] == ["GameA", "Glitchball"]

    def test_games_text(self, installed: Path):
        result = CliRunner().invoke(cli, ["games"])
        assert result.exit_code == 0
        assert "GameA" in result.output


class TestBinsAndCheck:
    def test_bins_json(self, installed: Path):
        result = CliRunner().invoke(cli, ["bins", str(installed / "GameA"), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "binaries": [str(installed / "GameA" / "bin" / "gamea.x86_64")],
        }

    def test_bins_limit(self, tmp_path: Path, exe):
        for i in range(3):
            exe(tmp_path / "Game" / f"run{i}.sh")
        result = CliRunner().invoke(cli, ["bins", str(tmp_path / "Game"), "-n", "2", "--json"])
        assert len(json.loads(result.output)["binaries"]) == 2

    def test_bins_unlistable_is_fatal(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["bins", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Cannot list directory" in result.output

    def test_check_binary(self, installed: Path):
        path = installed / "GameA" / "bin" / "gamea.x86_64"
        result = CliRunner().invoke(cli, ["check", str(path), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "path": str(path), "is_binary": True, "signal": "binary-dir",
        }

    def test_check_blacklisted(self, tmp_path: Path, exe):
        path = exe(tmp_path / "Game" / "bin" / "libfoo.so")
        result = CliRunner().invoke(cli, ["check", str(path)])
        assert result.exit_code == 0
        assert "not a binary" in result.output
        assert "blacklist" in result.output


class TestSteamCommand:
    def test_dry_run(self):
        result = CliRunner().invoke(cli, ["steam", "install", "--dry-run", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "skipped"
        assert data["action_id"] == "steam:install:823470"

    def test_sends_request(self, mocked_registry: AdapterRegistry, steam_mock: MockAdapter):
        result = CliRunner().invoke(cli, ["steam", "validate", "--app-id", "42"])
        assert result.exit_code == 0
        assert steam_mock.called_ids == ["steam:validate:42"]

    def test_failure(self, mocked_registry: AdapterRegistry, steam_mock: MockAdapter):
        steam_mock.set_failure("steam:run:823470", error="no opener")
        result = CliRunner().invoke(cli, ["steam", "run"])
        assert result.exit_code == 1
        assert "no opener" in result.output

    def test_unknown_operation(self):
        result = CliRunner().invoke(cli, ["steam", "launch"])
        assert result.exit_code == 2


class TestLaunchCommand:
    def test_launch_game_argument(self, installed: Path, mocked_registry: AdapterRegistry,
                                  steam_mock: MockAdapter):
        game = installed / "GameA" / "bin" / "gamea.x86_64"
        result = CliRunner().invoke(cli, ["launch", str(game)])

        assert result.exit_code == 0, result.output
        assert "Starting" in result.output
        assert os.readlink(installed / "Glitchball" / BINARY) == str(game.resolve())
        assert steam_mock.called_ids == ["steam:run:823470"]

    def test_launch_json(self, installed: Path, mocked_registry: AdapterRegistry):
        game = installed / "GameA" / "bin" / "gamea.x86_64"
        result = CliRunner().invoke(cli, ["launch", str(game), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["link"] == str(installed / "Glitchball" / BINARY)
        assert data["game"]["bin"] == str(game.resolve())

    def test_launch_dry_run(self, installed: Path, mocked_registry: AdapterRegistry,
                            steam_mock: MockAdapter):
        game = installed / "GameA" / "bin" / "gamea.x86_64"
        result = CliRunner().invoke(cli, ["launch", str(game), "--dry-run"])

        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert not (installed / "Glitchball" / BINARY).is_symlink()
        assert steam_mock.call_count == 0

    def test_launch_without_placeholder(self, library: Path, exe,
                                        mocked_registry: AdapterRegistry):
        game = exe(library / "GameA" / "bin" / "gamea.x86_64")
        result = CliRunner().invoke(cli, ["launch", str(game)])

        assert result.exit_code == 1
        assert "not installed" in result.output

    def test_launch_interactive(self, installed: Path, mocked_registry: AdapterRegistry):
        # game list: GameA only (placeholder excluded); binary list: one entry
        result = CliRunner().invoke(cli, ["launch"], input="1\n1\n")

        assert result.exit_code == 0, result.output
        target = os.readlink(installed / "Glitchball" / BINARY)
        assert target == str(installed / "GameA" / "bin" / "gamea.x86_64")

    def test_launch_interactive_cancel(self, installed: Path, mocked_registry: AdapterRegistry):
        result = CliRunner().invoke(cli, ["launch"], input="\n")
        assert result.exit_code == 1
        assert "Did not select game" in result.output
