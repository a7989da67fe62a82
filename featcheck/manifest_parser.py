"""Declared-feature loading from Cargo manifests."""

import tomllib
from collections.abc import Collection
from pathlib import Path

from featcheck.exceptions import ManifestParseError
from featcheck.models import ExposedFeature
from featcheck.utils.constants import FEATURES_TABLE
from featcheck.utils.logging import logger


class ManifestParser:
    """Parser for Cargo.toml manifests."""

    def parse_toml(self, path: Path) -> dict:
        """Parse TOML with tomllib.

        Unlike the soft per-line handling elsewhere, a manifest that cannot be
        read or parsed aborts the run: reconciling against unknown declared
        state would produce a wrong report.
        """
        try:
            with open(path, "rb") as f:
                return tomllib.load(f)
        except OSError as e:
            raise ManifestParseError(
                f"Failed to read manifest {path}: {e}", {"path": str(path)}
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ManifestParseError(
                f"Failed to parse TOML {path}: {e}", {"path": str(path)}
            ) from e

    def declared_features(
        self,
        path: Path,
        excluded_features: Collection[str] = (),
        table: str = FEATURES_TABLE,
    ) -> dict[str, ExposedFeature]:
        """Return the features declared in the manifest's feature table.

        Only the keys matter; `default = ["std"]` declares `default`.
        A missing table (or a non-table value under that key) declares nothing.
        """
        data = self.parse_toml(path)
        features = data.get(table)
        if not isinstance(features, dict):
            logger.debug(f"No [{table}] table in {path}")
            return {}

        return {
            name: ExposedFeature(name=name)
            for name in features
            if name not in excluded_features
        }


def load_declared_features(
    manifest_path: Path,
    excluded_features: Collection[str] = (),
    table: str = FEATURES_TABLE,
) -> dict[str, ExposedFeature]:
    """Convenience wrapper around ManifestParser.declared_features."""
    return ManifestParser().declared_features(Path(manifest_path), excluded_features, table)
