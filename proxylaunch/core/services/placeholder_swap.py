"""
Placeholder swap — point the placeholder game at another game's binary.

The placeholder directory is wiped and its binary path becomes a
symlink to the chosen binary, so Steam starts the chosen game when it
thinks it starts the placeholder.

Order of operations:

    1. stage     symlink to the target, created beside the placeholder
                 directory (same parent, same filesystem)
    2. clear     every first-level entry of the placeholder directory
    3. commit    atomic rename of the staged link onto the binary path

A failure or crash during 2 leaves the complete link lying beside the
directory, ready to be moved into place by hand.  There is no rollback: once
clearing starts, old content that is gone stays gone.  Every failure is
raised as ``SwapFailed``.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from proxylaunch.core.errors import ListingFailed, SwapFailed
from proxylaunch.core.models.game import PlaceholderTarget
from proxylaunch.core.services.path_catalog import is_dir, remove_dir_contents

logger = logging.getLogger(__name__)

_STAGE_MARKER = "proxylaunch-stage"


def _is_within(path: Path, directory: Path) -> bool:
    for p, d in ((path.absolute(), directory.absolute()), (path.resolve(), directory.resolve())):
        try:
            p.relative_to(d)
            return True
        except ValueError:
            continue
    return False


def _stage_link(directory: Path, target_binary: Path) -> Path:
    staged = directory.parent / f".{directory.name}.{_STAGE_MARKER}-{uuid.uuid4().hex[:8]}"
    try:
        os.symlink(str(target_binary), staged)
    except OSError as e:
        raise SwapFailed(f"Failed to stage link to {target_binary}: {e}") from e
    logger.debug("Staged link %s -> %s", staged, target_binary)
    return staged


def _discard(staged: Path) -> None:
    try:
        staged.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove staged link %s: %s", staged, e)


def replace(placeholder: PlaceholderTarget, target_binary: Path) -> Path:
    """Replace the placeholder's contents with a link to ``target_binary``.

    Args:
        placeholder: Placeholder directory and binary path.
        target_binary: Binary to link to.  A relative path is taken
            against the current directory; the link text is the
            absolute path.

    Returns:
        The placeholder binary path, now a symlink.

    Raises:
        SwapFailed: On a violated precondition (checked before anything
            is touched) or any I/O error while staging, clearing or
            committing.
    """
    directory = placeholder.dir
    target_binary = target_binary.absolute()

    if not is_dir(directory):
        raise SwapFailed(f"Placeholder directory does not exist: {directory}")
    if not os.path.isfile(target_binary):
        raise SwapFailed(f"Target binary is not a file: {target_binary}")
    if _is_within(target_binary, directory):
        raise SwapFailed(
            f"Target binary {target_binary} lives inside the placeholder directory "
            f"{directory} and would be deleted"
        )

    staged = _stage_link(directory, target_binary)

    try:
        removed = remove_dir_contents(directory)
    except (OSError, ListingFailed) as e:
        # Staged link stays: moving it onto the binary path finishes the swap
        raise SwapFailed(
            f"Failed to clear placeholder directory {directory}: {e}; "
            f"link to {target_binary} left at {staged}"
        ) from e
    logger.info("Cleared %d entr%s from %s", removed, "y" if removed == 1 else "ies", directory)

    try:
        placeholder.bin.parent.mkdir(parents=True, exist_ok=True)
        os.replace(staged, placeholder.bin)
    except OSError as e:
        _discard(staged)
        raise SwapFailed(f"Failed to link {target_binary} to {placeholder.bin}: {e}") from e

    logger.info("Linked %s -> %s", placeholder.bin, target_binary)
    return placeholder.bin
