"""featcheck utilities package."""

from .constants import (
    BACKEND_NATIVE,
    BACKEND_RIPGREP,
    BACKENDS,
    BUILD_DIR,
    CONFIG_FILE,
    FEATURES_TABLE,
    MANIFEST_NAME,
    SOURCE_EXTENSION,
)
from .error_handler import RunFailed, handle_exceptions
from .exit_codes import ExitCodes
from .logging import logger

__all__ = [
    "BACKEND_NATIVE",
    "BACKEND_RIPGREP",
    "BACKENDS",
    "BUILD_DIR",
    "CONFIG_FILE",
    "FEATURES_TABLE",
    "MANIFEST_NAME",
    "SOURCE_EXTENSION",
    "RunFailed",
    "handle_exceptions",
    "ExitCodes",
    "logger",
]
