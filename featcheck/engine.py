"""Feature reconciliation engine.

Owns the mapping manifest -> ManifestRecord and runs one audit:

    engine = FeatureEngine(excluded_paths, excluded_features)
    engine.collect_used(root)   # scan, resolve owners, bucket used features
    engine.load_exposed()       # parse [features] of every owning manifest
    engine.compute_hidden()     # hidden = used - exposed, per manifest
    report = engine.report()

Only manifests that own at least one used feature are entered in the mapping,
so manifests elsewhere in the tree are never parsed.
"""

from collections.abc import Iterable
from pathlib import Path

from featcheck.exceptions import EngineStateError, ManifestResolutionError, ScanError
from featcheck.manifest_parser import ManifestParser
from featcheck.manifest_resolver import ManifestResolver
from featcheck.models import (
    EngineState,
    HiddenFeatureReport,
    ManifestRecord,
    Occurrence,
    UsedFeature,
)
from featcheck.scanners import NativeScanner, PathExclusions, create_scanner
from featcheck.utils.constants import FEATURES_TABLE, MANIFEST_NAME
from featcheck.utils.logging import logger


class FeatureEngine:
    """Reconciles used cfg features against declared manifest features."""

    def __init__(
        self,
        excluded_paths: Iterable[str | Path] = (),
        excluded_features: Iterable[str] = (),
        scanner=None,
        manifest_name: str = MANIFEST_NAME,
        features_table: str = FEATURES_TABLE,
    ):
        self.excluded_paths = frozenset(Path(p) for p in excluded_paths)
        self.excluded_features = frozenset(excluded_features)
        self.scanner = scanner or NativeScanner()
        self.features_table = features_table
        self.parser = ManifestParser()

        self.mapping: dict[Path, ManifestRecord] = {}
        self.resolver = ManifestResolver(self.mapping, manifest_name)
        self.state = EngineState.EMPTY

    @classmethod
    def from_config(cls, config) -> "FeatureEngine":
        """Build an engine from an AuditConfig."""
        scanner = create_scanner(
            config.backend,
            config.source_extension,
            config.rg_binary,
            config.rg_timeout,
        )
        return cls(
            config.excluded_paths,
            config.excluded_features,
            scanner=scanner,
            manifest_name=config.manifest_name,
            features_table=config.features_table,
        )

    def _require(self, operation: str, *allowed: EngineState) -> None:
        if self.state not in allowed:
            expected = ", ".join(s.value for s in allowed)
            raise EngineStateError(
                f"Cannot run {operation} in state '{self.state.value}' (expected: {expected})",
                {"operation": operation, "state": self.state.value},
            )

    # ------------------------------------------------------------------
    # Step 1: used features
    # ------------------------------------------------------------------

    def collect_used(self, root: str | Path) -> None:
        """Scan the tree under root and bucket every used feature by manifest.

        Raises:
            ScanError: root empty or missing, unreadable directory or file
            ManifestResolutionError: a source file has no ancestor manifest
        """
        self._require("collect_used", EngineState.EMPTY)
        # Path("") would silently become the working directory
        if not str(root):
            raise ScanError("Scan root is empty", {"path": ""})
        self.state = EngineState.COLLECTING

        root = Path(root)
        exclusions = PathExclusions(self.excluded_paths, root)
        count = 0
        for occurrence in self.scanner.scan(root, exclusions):
            if self.add_occurrence(occurrence, exclusions):
                count += 1

        logger.debug(
            f"Collected {count} used features across {len(self.mapping)} manifests under {root}"
        )
        self.state = EngineState.COLLECTED

    def add_occurrence(self, occurrence: Occurrence, exclusions: PathExclusions | None = None) -> bool:
        """Record one occurrence under its owning manifest.

        Returns:
            True if the feature name was new to that manifest

        Raises:
            EngineStateError: once collection has finished
        """
        self._require("add_occurrence", EngineState.EMPTY, EngineState.COLLECTING)
        if occurrence.name in self.excluded_features:
            return False
        if exclusions is None:
            exclusions = PathExclusions(self.excluded_paths)
        if exclusions.matches(occurrence.path):
            return False

        manifest = self.resolver.resolve(occurrence.path)
        if manifest is None:
            raise ManifestResolutionError(
                f"Could not find an owning {self.resolver.manifest_name} for {occurrence.path}",
                {"path": str(occurrence.path)},
            )

        record = self.mapping.get(manifest)
        if record is None:
            logger.debug(f"Discovered manifest {manifest}")
            record = ManifestRecord(path=manifest)
            self.mapping[manifest] = record

        return record.add_used(
            UsedFeature(occurrence.name, occurrence.path, occurrence.line_number)
        )

    # ------------------------------------------------------------------
    # Step 2: exposed features
    # ------------------------------------------------------------------

    def load_exposed(self) -> None:
        """Load the declared features of every manifest in the mapping.

        Raises:
            ManifestParseError: on the first unreadable or invalid manifest
        """
        self._require("load_exposed", EngineState.COLLECTED)
        for record in self.mapping.values():
            record.exposed = self.parser.declared_features(
                record.path, self.excluded_features, self.features_table
            )
            logger.debug(f"{record.path}: {len(record.exposed)} declared features")
        self.state = EngineState.EXPOSED

    # ------------------------------------------------------------------
    # Step 3: hidden features
    # ------------------------------------------------------------------

    def compute_hidden(self) -> None:
        """Set hidden = used - exposed for every manifest. Idempotent."""
        self._require("compute_hidden", EngineState.EXPOSED, EngineState.RECONCILED)
        for record in self.mapping.values():
            record.reconcile()
        self.state = EngineState.RECONCILED

    def run(self, root: str | Path) -> None:
        """collect_used, load_exposed and compute_hidden in order."""
        self.collect_used(root)
        self.load_exposed()
        self.compute_hidden()

    # ------------------------------------------------------------------
    # Step 4: report
    # ------------------------------------------------------------------

    def report(self) -> HiddenFeatureReport:
        """Snapshot the reconciled mapping for the reporter."""
        self._require("report", EngineState.RECONCILED, EngineState.REPORTED)
        self.state = EngineState.REPORTED
        return HiddenFeatureReport(records=self.records())

    def records(self) -> list[ManifestRecord]:
        """Manifest records sorted by path."""
        return [self.mapping[path] for path in sorted(self.mapping, key=str)]

    def hidden_feature_names(self) -> set[str]:
        """Names of all hidden features, across manifests."""
        return {name for record in self.mapping.values() for name in record.hidden}

    def used_feature_names(self) -> set[str]:
        return {name for record in self.mapping.values() for name in record.used}
