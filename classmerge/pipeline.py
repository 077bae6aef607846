"""Sequential phase orchestrator with timing."""

from __future__ import annotations

import time

from classmerge.config import Catalog, ResolveResult, ResolverConfig
from classmerge.discovery import Discovery, FilesystemDiscovery
from classmerge.output import build_result
from classmerge.phases.catalog import build_catalog
from classmerge.phases.merging import merge_class_maps
from classmerge.phases.ranking import rank_projects
from classmerge.phases.scoring import compute_latest, compute_weights


_PHASE_LABELS = {
    "catalog": "Collecting projects",
    "latest": "Finding contested packages",
    "weights": "Scoring projects",
    "ranking": "Ranking projects",
    "merge": "Merging class maps",
}


def run_pipeline(
    config: ResolverConfig,
    discovery: Discovery | None = None,
    progress_callback=None,
) -> ResolveResult:
    """Execute the five-phase resolution pipeline and return the result.

    Args:
        config: Resolver configuration.
        discovery: Source of loaders and installed state. Defaults to
            reading the configured vendor directories from disk.
        progress_callback: Optional callable(phase_name, label) invoked
            when each phase starts. Used by the CLI for Rich progress.
    """
    if discovery is None:
        discovery = FilesystemDiscovery(config)

    state: dict = {}
    timings: dict[str, float] = {}
    total_start = time.monotonic()

    def _catalog() -> None:
        state["catalog"] = build_catalog(
            discovery.discover_loaders(), discovery.all_raw_data(), config,
        )

    def _latest() -> None:
        state["latest"] = compute_latest(state["catalog"].versions)

    def _weights() -> None:
        state["weights"] = compute_weights(state["catalog"].versions, state["latest"])

    def _ranking() -> None:
        state["order"] = rank_projects(state["weights"])

    def _merge() -> None:
        state["class_map"] = merge_class_maps(state["catalog"].class_maps, state["order"])

    phases = [
        ("catalog", _catalog),
        ("latest", _latest),
        ("weights", _weights),
        ("ranking", _ranking),
        ("merge", _merge),
    ]

    for name, phase_fn in phases:
        if progress_callback:
            progress_callback(name, _PHASE_LABELS.get(name, name))
        start = time.monotonic()
        phase_fn()
        timings[name] = time.monotonic() - start

    total_ms = (time.monotonic() - total_start) * 1000

    catalog: Catalog = state["catalog"]
    return build_result(
        catalog, state["latest"], state["weights"], state["order"],
        state["class_map"], timings, total_ms,
    )
