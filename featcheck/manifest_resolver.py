"""Owning-manifest resolution for source files.

A manifest governs its whole directory subtree, so the owner of a file is the
nearest ancestor directory holding a manifest.
"""

import os
from collections.abc import Container
from pathlib import Path

from featcheck.utils.constants import MANIFEST_NAME
from featcheck.utils.logging import logger


class ManifestResolver:
    """Resolves a source file to its owning manifest, memoizing per directory."""

    def __init__(
        self,
        known_manifests: Container[Path] = (),
        manifest_name: str = MANIFEST_NAME,
    ):
        """Initialize resolver.

        Args:
            known_manifests: Manifests already discovered (typically the
                engine's mapping). A hit here skips the disk check.
            manifest_name: File name of a manifest, e.g. Cargo.toml
        """
        self.known_manifests = known_manifests
        self.manifest_name = manifest_name
        self._cache: dict[Path, Path | None] = {}

    def resolve(self, file_path: str | Path) -> Path | None:
        """Return the nearest ancestor manifest of file_path, or None."""
        start = Path(os.path.abspath(file_path)).parent
        visited: list[Path] = []
        directory = start
        result: Path | None = None

        while True:
            if directory in self._cache:
                result = self._cache[directory]
                break

            visited.append(directory)
            candidate = directory / self.manifest_name
            if candidate in self.known_manifests or candidate.is_file():
                result = candidate
                break

            parent = directory.parent
            if parent == directory:
                break
            directory = parent

        if visited:
            logger.debug(f"Resolved {start} -> {result} after probing {len(visited)} directories")
        for seen in visited:
            self._cache[seen] = result
        return result

    def cache_size(self) -> int:
        return len(self._cache)
