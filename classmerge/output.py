"""JSON serialisation of a resolution result."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from classmerge import __version__
from classmerge.config import Catalog, ResolveResult


def _contested_roots(catalog: Catalog, latest: dict[str, int]) -> int:
    """Count roots that declare at least one contested package."""
    return sum(
        1 for details in catalog.versions.values()
        if any(package in latest for package in details)
    )


def build_result(
    catalog: Catalog,
    latest: dict[str, int],
    weights: dict[str, int],
    order: list[str],
    class_map: dict[str, str],
    timings: dict[str, float],
    total_ms: float,
) -> ResolveResult:
    """Build the ResolveResult from the phase outputs."""
    return ResolveResult(
        version="1.0",
        metadata={
            "resolved_at": datetime.now(timezone.utc).isoformat(),
            "classmerge_version": __version__,
            "resolution_duration_ms": round(total_ms, 1),
            "phase_timings": timings,
        },
        stats={
            "projects": len(catalog.versions),
            "class_maps": len(catalog.class_maps),
            "contested_packages": len(latest),
            "contested_projects": _contested_roots(catalog, latest),
            "classes": len(class_map),
            "source_classes": sum(len(m) for m in catalog.class_maps.values()),
        },
        latest=dict(latest),
        weights={root_path: weights[root_path] for root_path in order},
        order=list(order),
        class_map=dict(class_map),
    )


def write_output(result: ResolveResult, output_path: str) -> None:
    """Write the resolution result to a JSON file."""
    data = asdict(result)
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, default=str)
