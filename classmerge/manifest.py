"""Read project manifests and installed-state files (JSON)."""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from classmerge.config import InstalledState, ManifestInfo
from classmerge.errors import InstalledStateError, ManifestError

logger = logging.getLogger(__name__)


def _load_json_object(path: str) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8-sig") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _string_field(data: dict[str, Any], key: str, path: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    logger.warning(f"Ignoring non-string '{key}' in {path}: {value!r}")
    return None


def read_manifest(root_path: str, filename: str) -> ManifestInfo | None:
    """Read the manifest at ``root_path``. Returns None if there is none.

    A manifest that exists but cannot be read or parsed raises ManifestError.
    """
    manifest_path = os.path.join(root_path, filename)
    if not os.path.isfile(manifest_path):
        return None

    try:
        data = _load_json_object(manifest_path)
    except (OSError, ValueError) as e:
        raise ManifestError(f"Failed to read manifest {manifest_path}: {e}") from e

    return ManifestInfo(
        path=manifest_path,
        name=_string_field(data, "name", manifest_path),
        version=_string_field(data, "version", manifest_path),
    )


def parse_installed_state(data: dict[str, Any], base_dir: str = "") -> InstalledState:
    """Build an InstalledState from its decoded JSON form.

    Expected shape::

        {"root": {"install_path": "..."},
         "versions": {"vendor/pkg": {"version": "1.2.3"}, ...}}

    A relative install_path is resolved against ``base_dir``.
    """
    root = data.get("root")
    if not isinstance(root, dict) or not isinstance(root.get("install_path"), str):
        raise ValueError("missing root.install_path")

    install_path = root["install_path"]
    if base_dir and not os.path.isabs(install_path):
        install_path = os.path.join(base_dir, install_path)

    versions = data.get("versions") or {}
    if not isinstance(versions, dict):
        raise ValueError("'versions' must be a JSON object")

    return InstalledState(
        install_path=install_path,
        versions={
            package: details
            for package, details in versions.items()
            if isinstance(details, dict)
        },
    )


def read_installed_state(path: str) -> InstalledState | None:
    """Read an installed-state file. Returns None if the file does not exist."""
    if not os.path.isfile(path):
        return None

    try:
        data = _load_json_object(path)
        return parse_installed_state(data, os.path.dirname(os.path.abspath(path)))
    except (OSError, ValueError) as e:
        raise InstalledStateError(f"Failed to read installed state {path}: {e}") from e
