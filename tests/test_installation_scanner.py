"""
Tests for installation scanning — binary walk, limits, cycles, depth cap.
"""

import os
from pathlib import Path

import pytest

from proxylaunch.core.errors import ListingFailed
from proxylaunch.core.models.platform import PlatformProfile
from proxylaunch.core.services import installation_scanner
from proxylaunch.core.services.installation_scanner import (
    UNBOUNDED,
    find_binaries,
    list_installations,
)


class TestFindBinaries:
    def test_game_a(self, library: Path, exe, plain, linux_profile: PlatformProfile):
        exe(library / "GameA" / "bin" / "gamea.x86_64")
        plain(library / "GameA" / "readme.txt")

        assert list_installations([library], linux_profile) == [library / "GameA"]

        found = find_binaries(library / "GameA", 10, linux_profile)
        assert [b.path for b in found] == [library / "GameA" / "bin" / "gamea.x86_64"]

    def test_depth_first_name_order(self, tmp_path: Path, exe, linux_profile: PlatformProfile):
        game = tmp_path / "Game"
        exe(game / "b.sh")
        exe(game / "a" / "z.sh")
        exe(game / "a" / "y.sh")
        exe(game / "c.sh")

        found = find_binaries(game, UNBOUNDED, linux_profile)
        assert [b.path.relative_to(game) for b in found] == [
            Path("a/y.sh"), Path("a/z.sh"), Path("b.sh"), Path("c.sh"),
        ]

    def test_limit_one_short_circuits(self, tmp_path: Path, exe, monkeypatch,
                                      linux_profile: PlatformProfile):
        game = tmp_path / "Game"
        for i in range(5):
            exe(game / f"run{i}.sh")

        seen: list[Path] = []
        real = installation_scanner.is_binary

        def counting(path, profile):
            seen.append(path)
            return real(path, profile)

        monkeypatch.setattr(installation_scanner, "is_binary", counting)

        found = find_binaries(game, 1, linux_profile)
        assert [b.path for b in found] == [game / "run0.sh"]
        assert seen == [game / "run0.sh"]

    def test_limit(self, tmp_path: Path, exe, linux_profile: PlatformProfile):
        game = tmp_path / "Game"
        for i in range(5):
            exe(game / f"run{i}.sh")
        assert len(find_binaries(game, 3, linux_profile)) == 3

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit(self, tmp_path: Path, exe, limit: int,
                                linux_profile: PlatformProfile):
        exe(tmp_path / "Game" / "run.sh")
        assert find_binaries(tmp_path / "Game", limit, linux_profile) == []

    def test_relative_directory_made_absolute(self, tmp_path: Path, exe, monkeypatch,
                                              linux_profile: PlatformProfile):
        exe(tmp_path / "Game" / "run.sh")
        monkeypatch.chdir(tmp_path)
        found = find_binaries(Path("Game"), UNBOUNDED, linux_profile)
        assert [b.path for b in found] == [tmp_path / "Game" / "run.sh"]

    def test_unlistable_top_level(self, tmp_path: Path, linux_profile: PlatformProfile):
        with pytest.raises(ListingFailed):
            find_binaries(tmp_path / "missing", UNBOUNDED, linux_profile)

    def test_symlink_cycle(self, tmp_path: Path, exe, linux_profile: PlatformProfile):
        game = tmp_path / "Game"
        exe(game / "sub" / "run.sh")
        (game / "sub" / "loop").symlink_to(game)

        found = find_binaries(game, UNBOUNDED, linux_profile)
        assert [b.path for b in found] == [game / "sub" / "run.sh"]

    def test_depth_cap(self, tmp_path: Path, exe, linux_profile: PlatformProfile):
        game = tmp_path / "Game"
        exe(game / "top.sh")
        exe(game / "d1" / "d2" / "deep.sh")

        found = find_binaries(game, UNBOUNDED, linux_profile, max_depth=2)
        assert [b.path.name for b in found] == ["top.sh"]

        found = find_binaries(game, UNBOUNDED, linux_profile, max_depth=3)
        assert [b.path.name for b in found] == ["deep.sh", "top.sh"]

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
    def test_unlistable_subdirectory_skipped(self, tmp_path: Path, exe,
                                             linux_profile: PlatformProfile):
        game = tmp_path / "Game"
        exe(game / "locked" / "hidden.sh")
        exe(game / "run.sh")
        (game / "locked").chmod(0o000)
        try:
            found = find_binaries(game, UNBOUNDED, linux_profile)
        finally:
            (game / "locked").chmod(0o755)
        assert [b.path.name for b in found] == ["run.sh"]

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
    def test_unsearchable_subdirectory_skipped(self, tmp_path: Path, exe,
                                               linux_profile: PlatformProfile):
        game = tmp_path / "Game"
        exe(game / "zz" / "hidden.sh")
        exe(game / "run.sh")
        # Listable, but its entries cannot be stat'ed
        (game / "zz").chmod(0o644)
        try:
            found = find_binaries(game, UNBOUNDED, linux_profile)
        finally:
            (game / "zz").chmod(0o755)
        assert [b.path.name for b in found] == ["run.sh"]

    def test_unstatable_entry_skipped(self, tmp_path: Path, exe, monkeypatch,
                                      linux_profile: PlatformProfile):
        game = tmp_path / "Game"
        exe(game / "aa" / "hidden.sh")
        exe(game / "run.sh")
        blocked = game / "aa"

        real_stat = Path.stat

        def guarded_stat(self, *args, **kwargs):
            if self == blocked:
                raise PermissionError(13, "Permission denied", str(self))
            return real_stat(self, *args, **kwargs)

        monkeypatch.setattr(Path, "stat", guarded_stat)

        found = find_binaries(game, UNBOUNDED, linux_profile)
        assert [b.path.name for b in found] == ["run.sh"]


class TestListInstallations:
    def test_only_dirs_with_binaries(self, library: Path, exe, plain,
                                     linux_profile: PlatformProfile):
        exe(library / "Celeste" / "Celeste")
        plain(library / "Docs" / "manual.pdf")
        plain(library / "stray.txt")

        assert list_installations([library], linux_profile) == [library / "Celeste"]

    def test_roots_concatenated_in_order(self, tmp_path: Path, exe,
                                         linux_profile: PlatformProfile):
        first = tmp_path / "lib1"
        second = tmp_path / "lib2"
        exe(second / "Zeta" / "zeta.sh")
        exe(first / "Omega" / "omega.sh")
        exe(first / "Alpha" / "alpha.sh")

        assert list_installations([second, first], linux_profile) == [
            second / "Zeta",
            first / "Alpha",
            first / "Omega",
        ]

    def test_unreadable_root_contributes_nothing(self, library: Path, tmp_path: Path, exe,
                                                 linux_profile: PlatformProfile):
        exe(library / "Game" / "game.sh")
        roots = [tmp_path / "missing", library]
        assert list_installations(roots, linux_profile) == [library / "Game"]

    @pytest.mark.skipif(os.geteuid() == 0, reason="root ignores directory permissions")
    def test_unsearchable_branch_does_not_abort(self, library: Path, exe,
                                                linux_profile: PlatformProfile):
        exe(library / "GameA" / "zz" / "run.sh")
        exe(library / "GameB" / "run.sh")
        (library / "GameA" / "zz").chmod(0o644)
        try:
            found = list_installations([library], linux_profile)
        finally:
            (library / "GameA" / "zz").chmod(0o755)
        assert found == [library / "GameB"]

    def test_unstatable_child_skipped(self, library: Path, exe, monkeypatch,
                                      linux_profile: PlatformProfile):
        blocked = library / "GameA"
        exe(blocked / "run.sh")
        exe(library / "GameB" / "run.sh")

        real_stat = Path.stat

        def guarded_stat(self, *args, **kwargs):
            if self == blocked:
                raise PermissionError(13, "Permission denied", str(self))
            return real_stat(self, *args, **kwargs)

        monkeypatch.setattr(Path, "stat", guarded_stat)

        assert list_installations([library], linux_profile) == [library / "GameB"]

    def test_empty(self, library: Path, linux_profile: PlatformProfile):
        assert list_installations([library], linux_profile) == []
