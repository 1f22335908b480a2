"""Exceptions raised by the entry manifest generator."""


class DSEError(Exception):
    """Base class for all generator errors.

    The CLI catches this at its boundary, reports it on stderr and exits
    with status 1 without writing anything.
    """


class VersionError(DSEError):
    """Missing plugin version, or a malformed part in strict mode."""


class BuildInfoError(DSEError):
    """The build-info file exists but could not be read or parsed."""


class ConfigError(DSEError):
    """plugin.yaml is unreadable or has the wrong shape."""


class ManifestError(DSEError):
    """The manifest tree is inconsistent (duplicate ids, bad placeholders)."""
