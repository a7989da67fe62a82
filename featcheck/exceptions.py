"""Custom exceptions for featcheck.

Each class names a failure mode that aborts the whole run. Soft conditions
(an unparsable line, a feature missing from a manifest) never raise.
"""


class FeatCheckError(Exception):
    """Base class for every hard failure of a featcheck run.

    Attributes:
        message: Human-readable error description
        details: Dict with context useful for debugging (paths, exit codes)
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ScanError(FeatCheckError):
    """Raised when the source tree cannot be walked or a file cannot be read."""


class ManifestResolutionError(FeatCheckError):
    """Raised when a source file has no ancestor manifest."""


class ManifestParseError(FeatCheckError):
    """Raised when a manifest cannot be read or is not valid TOML."""


class EngineStateError(FeatCheckError):
    """Raised when an engine operation is invoked out of order."""
