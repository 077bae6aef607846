"""classmerge error types."""


class ClassMergeError(Exception):
    """Base error for all classmerge failures."""


class ManifestError(ClassMergeError):
    """A project manifest exists but could not be read or parsed."""


class InstalledStateError(ClassMergeError):
    """An installed-state file exists but could not be read or parsed."""


class ClassMapError(ClassMergeError):
    """A class map file exists but could not be read or parsed."""
