"""Phase 5: Fold per-root class maps into one map, first writer wins."""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable

logger = logging.getLogger(__name__)


def _merge_missing(merged: dict[str, str], class_map: dict[str, str]) -> dict[str, str]:
    for name, file_path in class_map.items():
        if name not in merged:
            merged[name] = file_path
    return merged


def merge_class_maps(
    class_maps: dict[str, dict[str, str]], order: Iterable[str],
) -> dict[str, str]:
    """Merge class maps in precedence order into a fresh dict.

    A name already present is never overwritten, so higher-precedence roots
    win collisions. Roots without a class map contribute nothing.
    """
    maps = []
    for root_path in order:
        class_map = class_maps.get(root_path)
        if not class_map:
            logger.debug(f"No class map for {root_path}")
            continue
        maps.append(class_map)

    return reduce(_merge_missing, maps, {})
