"""Core data types and configuration for classmerge resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ROOT_SENTINEL = "__root__"
MANIFEST_FILENAME = "composer.json"
DEFAULT_VERSION = "0.0.0"


@dataclass
class InstalledState:
    """Installed-state metadata written by one package-manager instance.

    versions: package -> {"version": str | None, ...}
    """
    install_path: str
    versions: dict[str, dict[str, Any]] = field(default_factory=dict)

    def root_version(self, sentinel: str = ROOT_SENTINEL) -> str | None:
        """Version recorded for the project's own self-reference entry."""
        details = self.versions.get(sentinel) or {}
        version = details.get("version")
        return version if isinstance(version, str) else None


@dataclass
class DiscoveredLoader:
    """One registered package-manager instance found in the process."""
    vendor_dir: str
    class_map: dict[str, str] = field(default_factory=dict)
    installed: InstalledState | None = None


@dataclass
class ManifestInfo:
    """Identity fields read from a project manifest. Both are optional."""
    path: str
    name: str | None = None
    version: str | None = None


@dataclass
class Catalog:
    """Per-root class maps and package version sets."""
    class_maps: dict[str, dict[str, str]] = field(default_factory=dict)
    versions: dict[str, dict[str, int]] = field(default_factory=dict)


@dataclass
class ResolverConfig:
    vendor_dirs: list[str] = field(default_factory=list)
    installed_files: list[str] = field(default_factory=list)
    manifest_filename: str = MANIFEST_FILENAME
    sentinel: str = ROOT_SENTINEL
    output_path: str | None = None
    verbose: bool = False
    quiet: bool = False


@dataclass
class ResolveResult:
    version: str = "1.0"
    metadata: dict[str, Any] = field(default_factory=dict)
    stats: dict[str, Any] = field(default_factory=dict)
    latest: dict[str, int] = field(default_factory=dict)
    weights: dict[str, int] = field(default_factory=dict)
    order: list[str] = field(default_factory=list)
    class_map: dict[str, str] = field(default_factory=dict)
