"""Phases 2-3: Latest contested versions and per-project freshness weights."""

from __future__ import annotations


def compute_latest(versions: dict[str, dict[str, int]]) -> dict[str, int]:
    """Return the newest version of every contested package.

    A package is contested when two or more distinct versions of it are
    observed across all roots. Uncontested packages are left out.
    """
    observed: dict[str, set[int]] = {}
    for details in versions.values():
        for package, version in details.items():
            if package not in observed:
                observed[package] = set()
            observed[package].add(version)

    return {
        package: max(seen)
        for package, seen in observed.items()
        if len(seen) >= 2
    }


def compute_weights(
    versions: dict[str, dict[str, int]], latest: dict[str, int],
) -> dict[str, int]:
    """Score each root by how close its contested packages are to latest.

    Contested: subtract the gap to latest, where a zero gap counts as -1
    (so being current adds 1). Uncontested: add 1.
    """
    weights: dict[str, int] = {}
    for root_path, details in versions.items():
        score = 0
        for package, version in details.items():
            if package in latest:
                score -= (latest[package] - version) or -1
            else:
                score += 1
        weights[root_path] = score
    return weights
