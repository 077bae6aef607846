"""Tests for Phase 1: Catalog."""

from __future__ import annotations

import json
import os
import tempfile

import pytest

from classmerge.config import DiscoveredLoader, InstalledState, ResolverConfig
from classmerge.errors import ManifestError
from classmerge.paths import normalize_path
from classmerge.phases.catalog import (
    add_fallback_projects,
    build_catalog,
    collect_projects,
    versions_from_data,
    versions_from_manifest,
)
from classmerge.versions import encode_version


def _make_project(base: str, name: str, manifest: dict | None = None) -> tuple[str, str]:
    """Create ``base/name/vendor`` and an optional manifest. Returns (root, vendor)."""
    root = os.path.join(base, name)
    vendor = os.path.join(root, "vendor")
    os.makedirs(vendor)
    if manifest is not None:
        with open(os.path.join(root, "composer.json"), "w") as f:
            json.dump(manifest, f)
    return root, vendor


class TestVersionsFromData:
    def test_skips_entries_without_version(self):
        versions = versions_from_data({}, {
            "a/one": {"version": "1.0.0"},
            "a/two": {},
            "a/three": {"version": None},
        })
        assert versions == {"a/one": encode_version("1.0.0")}


class TestVersionsFromManifest:
    def test_no_manifest_drops_sentinel(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            versions = versions_from_manifest(
                {"__root__": 5, "a/b": 1}, normalize_path(tmpdir), ResolverConfig(),
            )
            assert versions == {"a/b": 1}

    def test_manifest_overrides_installed_entry(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, _ = _make_project(tmpdir, "app", {"name": "acme/app", "version": "3.0.0"})
            versions = versions_from_manifest(
                {"acme/app": encode_version("1.0.0")}, normalize_path(root), ResolverConfig(),
            )
            assert versions == {"acme/app": encode_version("3.0.0")}

    def test_version_falls_back_to_installed_root(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, _ = _make_project(tmpdir, "app", {"name": "acme/app"})
            installed = InstalledState(
                install_path=root, versions={"__root__": {"version": "2.2.0"}},
            )
            versions = versions_from_manifest({}, normalize_path(root), ResolverConfig(), installed)
            assert versions == {"acme/app": encode_version("2.2.0")}

    def test_version_defaults_to_zero(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, _ = _make_project(tmpdir, "app", {"name": "acme/app"})
            versions = versions_from_manifest({}, normalize_path(root), ResolverConfig())
            assert versions == {"acme/app": 0}

    def test_unnamed_manifest_never_leaks_sentinel(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, _ = _make_project(tmpdir, "app", {"version": "1.0.0"})
            versions = versions_from_manifest({}, normalize_path(root), ResolverConfig())
            assert "__root__" not in versions
            assert versions == {}

    def test_empty_name_is_kept(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, _ = _make_project(tmpdir, "app", {"name": "", "version": "1.0.0"})
            versions = versions_from_manifest({}, normalize_path(root), ResolverConfig())
            assert versions == {"": encode_version("1.0.0")}

    def test_unreadable_manifest_raises(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, _ = _make_project(tmpdir, "app")
            with open(os.path.join(root, "composer.json"), "w") as f:
                f.write("{")
            with pytest.raises(ManifestError):
                versions_from_manifest({}, normalize_path(root), ResolverConfig())


class TestCollectProjects:
    def test_class_map_recorded_under_root(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, vendor = _make_project(tmpdir, "app")
            catalog = collect_projects(
                [DiscoveredLoader(vendor_dir=vendor, class_map={"Foo": "/f.php"})],
                ResolverConfig(),
            )
            assert catalog.class_maps == {normalize_path(root): {"Foo": "/f.php"}}
            assert catalog.versions == {normalize_path(root): {}}

    def test_installed_state_seeds_then_manifest_overlays(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, vendor = _make_project(tmpdir, "app", {"name": "acme/app", "version": "1.1.0"})
            installed = InstalledState(install_path=root, versions={
                "acme/app": {"version": "1.0.0"},
                "acme/lib": {"version": "2.0.0"},
                "__root__": {"version": "9.9.9"},
            })
            catalog = collect_projects(
                [DiscoveredLoader(vendor_dir=vendor, installed=installed)], ResolverConfig(),
            )
            assert catalog.versions[normalize_path(root)] == {
                "acme/app": encode_version("1.1.0"),
                "acme/lib": encode_version("2.0.0"),
            }

    def test_spelled_differently_same_root(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root, vendor = _make_project(tmpdir, "app")
            catalog = collect_projects([
                DiscoveredLoader(vendor_dir=vendor, class_map={"A": "a"}),
                DiscoveredLoader(vendor_dir=vendor + "//../vendor/", class_map={"B": "b"}),
            ], ResolverConfig())
            assert list(catalog.class_maps) == [normalize_path(root)]
            assert catalog.class_maps[normalize_path(root)] == {"B": "b"}


class TestFallback:
    def test_adds_only_unseen_roots(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root_a, vendor_a = _make_project(tmpdir, "a")
            root_b, _ = _make_project(tmpdir, "b", {"name": "acme/b", "version": "1.0.0"})
            catalog = collect_projects(
                [DiscoveredLoader(vendor_dir=vendor_a, installed=InstalledState(
                    install_path=root_a, versions={"x/y": {"version": "1.0.0"}},
                ))],
                ResolverConfig(),
            )
            add_fallback_projects(catalog, [
                InstalledState(install_path=root_a, versions={"x/y": {"version": "5.0.0"}}),
                InstalledState(install_path=root_b, versions={"x/y": {"version": "2.0.0"}}),
            ], ResolverConfig())

            assert catalog.versions[normalize_path(root_a)] == {"x/y": encode_version("1.0.0")}
            assert catalog.versions[normalize_path(root_b)] == {
                "x/y": encode_version("2.0.0"),
                "acme/b": encode_version("1.0.0"),
            }
            assert normalize_path(root_b) not in catalog.class_maps

    def test_build_catalog_sentinel_never_leaks(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root_a, vendor_a = _make_project(tmpdir, "a", {})
            root_b, _ = _make_project(tmpdir, "b")
            sentinel = {"__root__": {"version": "1.0.0"}}
            catalog = build_catalog(
                [DiscoveredLoader(vendor_dir=vendor_a, installed=InstalledState(
                    install_path=root_a, versions=dict(sentinel),
                ))],
                [InstalledState(install_path=root_b, versions=dict(sentinel))],
                ResolverConfig(),
            )
            for versions in catalog.versions.values():
                assert "__root__" not in versions
