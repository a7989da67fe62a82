"""Centralized constants for featcheck.

This module provides a single source of truth for file names, directories,
and configuration values used across the package.
"""

from pathlib import Path

# ============================================================================
# CRATE LAYOUT
# ============================================================================

# Manifest file that governs its whole directory subtree
MANIFEST_NAME = "Cargo.toml"

# Top-level manifest table holding feature declarations
FEATURES_TABLE = "features"

# Only files with this extension are scanned for guards
SOURCE_EXTENSION = ".rs"

# Build-output directory, excluded under the scan root by convention
BUILD_DIR = "target"

# ============================================================================
# CONFIGURATION
# ============================================================================

# Per-project config directory (hidden, so the walk never descends into it)
CONFIG_DIR = Path(".featcheck")
CONFIG_FILE = CONFIG_DIR / "config.json"

# Environment variable prefix for runtime overrides
ENV_PREFIX = "FEATCHECK"

# ============================================================================
# SCANNER BACKENDS
# ============================================================================

BACKEND_NATIVE = "native"
BACKEND_RIPGREP = "rg"
BACKENDS = (BACKEND_NATIVE, BACKEND_RIPGREP)

# ============================================================================
# REPORT FORMATS
# ============================================================================

FORMAT_TEXT = "text"
FORMAT_JSON = "json"
REPORT_FORMATS = (FORMAT_TEXT, FORMAT_JSON)
