"""Project root path normalisation."""

from __future__ import annotations

import os
import re

_REPEATED_SLASHES = re.compile(r"(?<=.)/+")


def normalize_path(path: str, realpath: bool = True) -> str:
    """Return an absolute, forward-slash path with exactly one trailing slash.

    Two spellings of the same location (relative segments, symlinks,
    backslashes, doubled separators) normalise to the same string.
    """
    if realpath:
        path = os.path.realpath(path)

    path = path.replace("\\", "/")
    path = _REPEATED_SLASHES.sub("/", path)
    if path[1:2] == ":":
        path = path[0].upper() + path[1:]

    return path.rstrip("/") + "/"
