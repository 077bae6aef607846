"""classmerge - Pick the freshest copy of each class across vendored projects."""

__version__ = "0.1.0"

from classmerge.resolver import ClassResolver, HookHandle, install  # noqa: E402

__all__ = ["ClassResolver", "HookHandle", "install", "__version__"]
