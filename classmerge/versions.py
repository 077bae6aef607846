"""Fixed-weight integer encoding of dotted version strings."""

from __future__ import annotations

import re

_DIGITS = re.compile(r"[0-9]+")

# Weights for major, minor, patch, build
_WEIGHTS = (1_000_000_000, 1_000_000, 1_000, 1)


def downgrade_prerelease(parts: list[str]) -> list[int]:
    """Convert version segments to integers.

    The first segment that is not all decimal digits, and every segment
    after it, becomes 0. ``["1", "2", "3-alpha", "4"]`` -> ``[1, 2, 0, 0]``.
    """
    result: list[int] = []
    found_non_integer = False
    for part in parts:
        if found_non_integer or not _DIGITS.fullmatch(part):
            found_non_integer = True
            result.append(0)
        else:
            result.append(int(part))
    return result


def encode_version(version: str) -> int:
    """Encode a version string as a single comparable integer.

    Never raises: empty or garbage input encodes to 0.
    """
    if version.startswith("v"):
        version = version[1:]
    parts = downgrade_prerelease(version.split(".")[: len(_WEIGHTS)])
    return sum(part * weight for part, weight in zip(parts, _WEIGHTS))
