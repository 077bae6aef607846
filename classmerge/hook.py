"""Import hook that loads modules from the merged class map."""

from __future__ import annotations

import importlib.abc
import importlib.util
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ClassMapFinder(importlib.abc.MetaPathFinder):
    """``sys.meta_path`` finder backed by a name -> file lookup.

    On a miss ``find_spec`` returns None and the normal import chain
    carries on.
    """

    def __init__(self, lookup: Callable[[str], str | None]) -> None:
        self._lookup = lookup

    def find_spec(self, fullname, path=None, target=None):
        file_path = self._lookup(fullname)
        if file_path is None:
            return None
        logger.debug(f"Resolved {fullname} -> {file_path}")
        return importlib.util.spec_from_file_location(fullname, file_path)
