"""
Binary classifier — is this file a game's entry point?

No single signal is reliable: Linux binaries often have no extension,
vendors name things however they like.  The policy is a table of named
signals evaluated in order.  Each returns:

    False  veto, the file is not a binary
    True   accept, the file is a binary
    None   no opinion, ask the next signal

Vetoes come first (not a file, unnamed, blacklisted suffix, missing
execute bit), then the positive signals.  A file no signal accepts is
not a binary.

Pure logic on the file's metadata and name — no side effects.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from proxylaunch.core.models.platform import PlatformProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileFacts:
    """What the signals may look at, gathered with a single stat."""

    path: Path
    is_file: bool
    mode: int = 0
    name: str = ""          # lowercased file name
    parent_name: str = ""   # lowercased containing directory name

    @classmethod
    def of(cls, path: Path) -> FileFacts:
        try:
            st = os.stat(path)
        except (OSError, ValueError):
            return cls(path=path, is_file=False)

        absolute = path.absolute()
        return cls(
            path=path,
            is_file=stat.S_ISREG(st.st_mode),
            mode=st.st_mode,
            name=absolute.name.lower(),
            parent_name=absolute.parent.name.lower(),
        )


Verdict = bool | None
SignalCheck = Callable[[FileFacts, PlatformProfile], Verdict]


@dataclass(frozen=True)
class Signal:
    name: str
    check: SignalCheck


@dataclass(frozen=True)
class Classification:
    """Verdict plus the signal that decided it."""

    is_binary: bool
    signal: str


# ── Vetoes ──────────────────────────────────────────────────────


def _regular_file(facts: FileFacts, profile: PlatformProfile) -> Verdict:
    return None if facts.is_file else False


def _names(facts: FileFacts, profile: PlatformProfile) -> Verdict:
    return None if facts.name and facts.parent_name else False


def _blacklist(facts: FileFacts, profile: PlatformProfile) -> Verdict:
    if facts.name.endswith(tuple(profile.blacklist_suffixes)):
        return False
    return None


def _exec_bit(facts: FileFacts, profile: PlatformProfile) -> Verdict:
    if not profile.check_exec_bit:
        return None
    if facts.mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
        return None
    return False


# ── Positive signals ────────────────────────────────────────────


def _self_named(facts: FileFacts, profile: PlatformProfile) -> Verdict:
    # e.g. Celeste/Celeste
    return True if facts.parent_name == facts.name else None


def _binary_dir(facts: FileFacts, profile: PlatformProfile) -> Verdict:
    return True if facts.parent_name in profile.binary_dir_names else None


def _exec_suffix(facts: FileFacts, profile: PlatformProfile) -> Verdict:
    if profile.executable_suffixes and facts.name.endswith(tuple(profile.executable_suffixes)):
        return True
    return None


SIGNALS: tuple[Signal, ...] = (
    Signal("regular-file", _regular_file),
    Signal("names", _names),
    Signal("blacklist", _blacklist),
    Signal("exec-bit", _exec_bit),
    Signal("self-named", _self_named),
    Signal("binary-dir", _binary_dir),
    Signal("exec-suffix", _exec_suffix),
)

NO_SIGNAL = "no-signal"


def classify(
    path: Path,
    profile: PlatformProfile,
    signals: tuple[Signal, ...] = SIGNALS,
) -> Classification:
    """Run the signal table against ``path``; first verdict wins."""
    facts = FileFacts.of(path)
    for signal in signals:
        verdict = signal.check(facts, profile)
        if verdict is not None:
            return Classification(is_binary=verdict, signal=signal.name)
    return Classification(is_binary=False, signal=NO_SIGNAL)


def is_binary(path: Path, profile: PlatformProfile) -> bool:
    """Whether ``path`` looks like a runnable game binary."""
    return classify(path, profile).is_binary
