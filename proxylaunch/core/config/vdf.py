"""
VDF reader — Valve's nested key/value text format.

Steam keeps its library list in ``steamapps/libraryfolders.vdf``::

    "LibraryFolders"
    {
        "TimeNextStatsReport"   "1589112345"
        "1"                     "/mnt/games/SteamLibrary"
        "2"                     "D:\\\\SteamLibrary"
    }

Newer clients nest a table per library instead of a plain string::

    "libraryfolders"
    {
        "0" { "path" "/home/user/.local/share/Steam" "label" "" }
    }

Only the subset Steam writes for these manifests is supported: quoted
or bare tokens, ``{``/``}`` nesting, ``//`` line comments, backslash
escapes in quoted strings.  ``[$PLATFORM]`` conditionals are skipped.
Duplicate keys: last one wins.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Union

from proxylaunch.core.errors import ConfigMalformed, ConfigUnreadable

logger = logging.getLogger(__name__)

VdfValue = Union[str, "VdfTable"]
VdfTable = dict[str, VdfValue]

_ESCAPES = {"n": "\n", "t": "\t", "\\": "\\", '"': '"'}

# Sentinels for structural tokens (never equal to a string token)
_OPEN = object()
_CLOSE = object()


def _tokenize(text: str) -> Iterator[object]:
    i, n = 0, len(text)
    while i < n:
        ch = text[i]

        if ch.isspace():
            i += 1
        elif text.startswith("//", i):
            nl = text.find("\n", i)
            i = n if nl == -1 else nl + 1
        elif ch == "{":
            yield _OPEN
            i += 1
        elif ch == "}":
            yield _CLOSE
            i += 1
        elif ch == '"':
            i += 1
            buf: list[str] = []
            while True:
                if i >= n:
                    raise ValueError("unterminated quoted string")
                ch = text[i]
                if ch == "\\" and i + 1 < n:
                    buf.append(_ESCAPES.get(text[i + 1], "\\" + text[i + 1]))
                    i += 2
                elif ch == '"':
                    i += 1
                    break
                else:
                    buf.append(ch)
                    i += 1
            yield "".join(buf)
        else:
            start = i
            while i < n and not text[i].isspace() and text[i] not in '{}"':
                i += 1
            token = text[start:i]
            # [$WIN32] style conditionals
            if token.startswith("[") and token.endswith("]"):
                continue
            yield token


def loads(text: str) -> VdfTable:
    """Parse VDF text into nested dicts.

    Raises:
        ValueError: If the text is not well-formed.
    """
    tokens = _tokenize(text)
    root: VdfTable = {}
    stack: list[VdfTable] = [root]

    for token in tokens:
        if token is _CLOSE:
            if len(stack) == 1:
                raise ValueError("unbalanced '}'")
            stack.pop()
            continue
        if token is _OPEN:
            raise ValueError("table without a key")

        key = token
        value = next(tokens, None)
        if value is None:
            raise ValueError(f"key {key!r} has no value")
        if value is _CLOSE:
            raise ValueError(f"key {key!r} has no value")
        if value is _OPEN:
            table: VdfTable = {}
            stack[-1][key] = table
            stack.append(table)
        else:
            stack[-1][key] = value

    if len(stack) != 1:
        raise ValueError("unbalanced '{'")
    return root


def load(path: Path) -> VdfTable:
    """Read and parse a VDF file.

    Raises:
        ConfigUnreadable: The file is missing or cannot be read.
        ConfigMalformed: The content is not valid VDF.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ConfigUnreadable(path, str(e)) from e

    try:
        return loads(text)
    except ValueError as e:
        raise ConfigMalformed(path, str(e)) from e


def get_table(data: VdfTable, key: str) -> VdfTable | None:
    """Case-insensitive lookup of a nested table."""
    wanted = key.lower()
    for k, v in data.items():
        if k.lower() == wanted and isinstance(v, dict):
            return v
    return None
