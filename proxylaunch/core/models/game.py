"""
Game models — discovered binaries, selected games and the placeholder.

None of these are persisted.  A CandidateBinary only says the file
passed classification when it was found; it may be gone a moment later.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

# (display label, output value) pair handed to the selection UI
Choice = tuple[str, str]


class CandidateBinary(BaseModel):
    """A file believed to be a game's entry point."""

    path: Path

    @property
    def name(self) -> str:
        """Display name: the binary's file name."""
        return self.path.name

    def as_choice(self) -> Choice:
        return (self.name, str(self.path))


class GamePath(BaseModel):
    """Root directory and binary of a game."""

    dir: Path
    bin: Path

    @property
    def name(self) -> str:
        return self.dir.name

    @classmethod
    def from_bin(cls, path: Path) -> GamePath:
        """Build from a binary path, guessing the game directory.

        The binary must exist.  Its canonical parent directory is taken
        as the game root.

        Raises:
            ValueError: If ``path`` is not a file.
        """
        if not path.is_file():
            raise ValueError(f"Given binary path is not a file: {path}")
        path = path.resolve()
        return cls(dir=path.parent, bin=path)


class PlaceholderTarget(GamePath):
    """Directory and binary path of the placeholder game.

    The binary path is computed from platform convention, never scanned:
    after a swap it is a symlink, before the first swap it is the real
    placeholder binary.
    """

    @classmethod
    def in_dir(cls, directory: Path, binary_name: str) -> PlaceholderTarget:
        return cls(dir=directory, bin=directory / binary_name)


def installation_choices(dirs: list[Path]) -> list[Choice]:
    """Selection choices for installation directories."""
    return [(d.name, str(d)) for d in dirs]


def binary_choices(bins: list[CandidateBinary]) -> list[Choice]:
    """Selection choices for candidate binaries."""
    return [b.as_choice() for b in bins]
