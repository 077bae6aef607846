"""Resolver facade: run the pipeline, publish the merged map, answer lookups."""

from __future__ import annotations

import logging
import sys
import threading
from types import MappingProxyType
from typing import Mapping

from classmerge.config import ResolveResult, ResolverConfig
from classmerge.discovery import Discovery
from classmerge.hook import ClassMapFinder
from classmerge.pipeline import run_pipeline

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, str] = MappingProxyType({})


class ClassResolver:
    """Holds the last published merged class map.

    ``run()`` builds a complete new map off to the side and publishes it
    with a single reference swap, so ``lookup()`` never sees a partial map.
    Concurrent ``run()`` calls are serialised.
    """

    def __init__(
        self,
        discovery: Discovery | None = None,
        config: ResolverConfig | None = None,
    ) -> None:
        self.config = config or ResolverConfig()
        self.discovery = discovery
        self._run_lock = threading.Lock()
        # (class map, result) swapped together in one assignment
        self._published: tuple[Mapping[str, str], ResolveResult | None] = (_EMPTY, None)

    @property
    def class_map(self) -> Mapping[str, str]:
        return self._published[0]

    @property
    def result(self) -> ResolveResult | None:
        """Full result of the last successful run, or None."""
        return self._published[1]

    def run(self, progress_callback=None) -> Mapping[str, str]:
        """Recompute the merged class map from scratch and publish it.

        On failure the error propagates and the previous map stays published.
        """
        with self._run_lock:
            result = run_pipeline(self.config, self.discovery, progress_callback)
            class_map = MappingProxyType(dict(result.class_map))
            self._published = (class_map, result)
            logger.info(
                f"Merged {len(class_map)} classes from "
                f"{len(result.order)} projects"
            )
            return class_map

    def lookup(self, name: str) -> str | None:
        """Return the winning file path for ``name``, or None."""
        return self._published[0].get(name)


class HookHandle:
    """Host-owned handle tying a resolver to an import finder list."""

    def __init__(self, resolver: ClassResolver, meta_path: list | None = None) -> None:
        self.resolver = resolver
        self.finder = ClassMapFinder(resolver.lookup)
        self._meta_path = sys.meta_path if meta_path is None else meta_path

    @property
    def registered(self) -> bool:
        return any(f is self.finder for f in self._meta_path)

    def register(self) -> None:
        """Put the finder at the front of the import chain."""
        if not self.registered:
            self._meta_path.insert(0, self.finder)

    def unregister(self) -> None:
        self._meta_path[:] = [f for f in self._meta_path if f is not self.finder]

    def run(self, progress_callback=None) -> Mapping[str, str]:
        """Re-register the finder at the front of the chain, then rebuild."""
        self.unregister()
        self.register()
        return self.resolver.run(progress_callback)

    def lookup(self, name: str) -> str | None:
        return self.resolver.lookup(name)


def install(
    discovery: Discovery | None = None,
    config: ResolverConfig | None = None,
    run: bool = True,
    meta_path: list | None = None,
) -> HookHandle:
    """Create a resolver, register its import hook, and optionally run it.

    If the first run fails the hook is removed again before the error
    propagates.
    """
    handle = HookHandle(ClassResolver(discovery, config), meta_path)
    handle.register()
    if run:
        try:
            handle.resolver.run()
        except BaseException:
            handle.unregister()
            raise
    return handle
