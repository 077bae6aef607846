"""Phase 4: Deterministic precedence order over project roots."""

from __future__ import annotations


def rank_projects(weights: dict[str, int]) -> list[str]:
    """Return roots highest score first; ties broken by ascending root path."""
    ranked = sorted(weights.items(), key=lambda item: item[0])
    ranked.sort(key=lambda item: item[1], reverse=True)
    return [root_path for root_path, _ in ranked]
