"""Sources of discovered loaders and installed-state listings."""

from __future__ import annotations

import json
import logging
import os
from typing import Protocol, runtime_checkable

from classmerge.config import DiscoveredLoader, InstalledState, ResolverConfig
from classmerge.errors import ClassMapError
from classmerge.manifest import read_installed_state

logger = logging.getLogger(__name__)

CLASSMAP_FILE = os.path.join("composer", "autoload_classmap.json")
INSTALLED_FILE = os.path.join("composer", "installed.json")


@runtime_checkable
class Discovery(Protocol):
    """Protocol that all loader discovery sources must implement."""

    def discover_loaders(self) -> list[DiscoveredLoader]:
        """Return the registered loaders, in registration order."""
        ...

    def all_raw_data(self) -> list[InstalledState]:
        """Return installed state for every known project."""
        ...


class StaticDiscovery:
    """Discovery over data the host already holds in memory."""

    def __init__(
        self,
        loaders: list[DiscoveredLoader] | None = None,
        raw_data: list[InstalledState] | None = None,
    ) -> None:
        self.loaders = list(loaders or [])
        self.raw_data = list(raw_data or [])

    def discover_loaders(self) -> list[DiscoveredLoader]:
        return list(self.loaders)

    def all_raw_data(self) -> list[InstalledState]:
        return list(self.raw_data)


def read_class_map(vendor_dir: str) -> dict[str, str]:
    """Read ``<vendor>/composer/autoload_classmap.json``.

    Relative file paths are resolved against the vendor directory.
    Returns an empty map when the file does not exist.
    """
    path = os.path.join(vendor_dir, CLASSMAP_FILE)
    if not os.path.isfile(path):
        return {}

    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ClassMapError(f"Failed to read class map {path}: {e}") from e
    if not isinstance(data, dict):
        raise ClassMapError(f"Class map {path} is not a JSON object")

    class_map: dict[str, str] = {}
    for name, file_path in data.items():
        if not isinstance(file_path, str):
            logger.warning(f"Skipping non-string path for {name} in {path}")
            continue
        if not os.path.isabs(file_path):
            file_path = os.path.normpath(os.path.join(vendor_dir, file_path))
        class_map[name] = file_path
    return class_map


class FilesystemDiscovery:
    """Discovery over vendor directories on disk.

    Each vendor directory may hold ``composer/autoload_classmap.json`` and
    ``composer/installed.json``. Missing files are skipped.
    """

    def __init__(self, config: ResolverConfig) -> None:
        self.config = config

    def discover_loaders(self) -> list[DiscoveredLoader]:
        loaders = []
        for vendor_dir in self.config.vendor_dirs:
            if not os.path.isdir(vendor_dir):
                logger.warning(f"Vendor directory not found: {vendor_dir}")
                continue
            loaders.append(DiscoveredLoader(
                vendor_dir=vendor_dir,
                class_map=read_class_map(vendor_dir),
                installed=read_installed_state(os.path.join(vendor_dir, INSTALLED_FILE)),
            ))
        return loaders

    def all_raw_data(self) -> list[InstalledState]:
        paths = [os.path.join(v, INSTALLED_FILE) for v in self.config.vendor_dirs]
        paths.extend(self.config.installed_files)

        raw_data = []
        for path in paths:
            installed = read_installed_state(path)
            if installed is not None:
                raw_data.append(installed)
        return raw_data
