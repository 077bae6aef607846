"""Phase 1: Per-root class maps and package version sets."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from classmerge.config import (
    DEFAULT_VERSION,
    Catalog,
    DiscoveredLoader,
    InstalledState,
    ResolverConfig,
)
from classmerge.manifest import read_manifest
from classmerge.paths import normalize_path
from classmerge.versions import encode_version

logger = logging.getLogger(__name__)


def versions_from_data(
    versions: dict[str, int], data: dict[str, dict[str, Any]],
) -> dict[str, int]:
    """Set package versions from installed-state entries.

    Entries without a recorded version are skipped.
    """
    for package, details in data.items():
        version = details.get("version")
        if isinstance(version, str):
            versions[package] = encode_version(version)
    return versions


def versions_from_manifest(
    versions: dict[str, int],
    root_path: str,
    config: ResolverConfig,
    installed: InstalledState | None = None,
) -> dict[str, int]:
    """Overlay the manifest's own identity and version onto ``versions``.

    The self-reference sentinel is always removed afterwards.
    """
    manifest = read_manifest(root_path, config.manifest_filename)
    if manifest is not None:
        name = config.sentinel if manifest.name is None else manifest.name
        version = manifest.version
        if version is None and installed is not None:
            version = installed.root_version(config.sentinel)
        if version is None:
            version = DEFAULT_VERSION
        versions[name] = encode_version(version)
        logger.debug(f"Manifest {manifest.path}: {name} {version}")

    versions.pop(config.sentinel, None)
    return versions


def _seed_root(
    catalog: Catalog, installed: InstalledState, config: ResolverConfig,
) -> str:
    root_path = normalize_path(installed.install_path)
    versions = catalog.versions.setdefault(root_path, {})
    versions_from_data(versions, installed.versions)
    versions_from_manifest(versions, root_path, config, installed)
    return root_path


def collect_projects(
    loaders: Iterable[DiscoveredLoader], config: ResolverConfig,
) -> Catalog:
    """Gather class maps and version sets from the discovered loaders."""
    catalog = Catalog()

    for loader in loaders:
        vendor_path = normalize_path(loader.vendor_dir)
        root_path = normalize_path(f"{vendor_path}../")

        catalog.class_maps[root_path] = dict(loader.class_map)
        catalog.versions.setdefault(root_path, {})

        if loader.installed is not None:
            versions_root = _seed_root(catalog, loader.installed, config)
            if versions_root != root_path:
                logger.debug(
                    f"Loader {vendor_path} reports install path {versions_root}"
                )
        else:
            versions_from_manifest(catalog.versions[root_path], root_path, config)

    return catalog


def add_fallback_projects(
    catalog: Catalog, all_raw_data: Iterable[InstalledState], config: ResolverConfig,
) -> Catalog:
    """Add roots from the global installed-state listing not seen yet.

    Roots already in the catalog are never touched.
    """
    for installed in all_raw_data:
        root_path = normalize_path(installed.install_path)
        if root_path in catalog.versions:
            continue
        _seed_root(catalog, installed, config)
        logger.debug(f"Added fallback project {root_path}")
    return catalog


def build_catalog(
    loaders: Iterable[DiscoveredLoader],
    all_raw_data: Iterable[InstalledState],
    config: ResolverConfig,
) -> Catalog:
    """Build the full catalog: loaders first, then the fallback listing."""
    catalog = collect_projects(loaders, config)
    return add_fallback_projects(catalog, all_raw_data, config)
