"""Audit configuration - one structure with named, independently defaulted fields."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from featcheck.config_runtime import load_runtime_config
from featcheck.utils.constants import (
    BACKEND_NATIVE,
    BACKENDS,
    FEATURES_TABLE,
    FORMAT_TEXT,
    MANIFEST_NAME,
    REPORT_FORMATS,
    SOURCE_EXTENSION,
)


@dataclass(frozen=True)
class AuditConfig:
    """Everything a single featcheck run needs to know."""

    root: Path = field(default_factory=lambda: Path("."))
    excluded_paths: frozenset[Path] = frozenset()
    excluded_features: frozenset[str] = frozenset()
    show_exposed: bool = False
    show_used: bool = False
    output_format: str = FORMAT_TEXT
    backend: str = BACKEND_NATIVE
    source_extension: str = SOURCE_EXTENSION
    manifest_name: str = MANIFEST_NAME
    features_table: str = FEATURES_TABLE
    rg_binary: str = "rg"
    rg_timeout: int = 300

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown scanner backend '{self.backend}', expected one of {BACKENDS}")
        if self.output_format not in REPORT_FORMATS:
            raise ValueError(
                f"Unknown report format '{self.output_format}', expected one of {REPORT_FORMATS}"
            )

    @classmethod
    def from_runtime(
        cls,
        root: str | Path = ".",
        excluded_paths: Iterable[str | Path] = (),
        excluded_features: Iterable[str] = (),
        show_exposed: bool = False,
        show_used: bool = False,
        backend: str | None = None,
        output_format: str | None = None,
    ) -> "AuditConfig":
        """Build a config from CLI values layered over the runtime config.

        Exclusions from the command line are added to the configured ones,
        and the build-output directory under the root is always excluded.
        """
        root = Path(root)
        runtime = load_runtime_config(str(root))
        scan = runtime["scan"]

        build_base = root if not root.is_file() else root.parent
        paths = {Path(p) for p in scan["excluded_paths"]}
        paths.update(Path(p) for p in excluded_paths)
        paths.add(build_base / scan["build_dir"])

        features = set(scan["excluded_features"])
        features.update(excluded_features)

        return cls(
            root=root,
            excluded_paths=frozenset(paths),
            excluded_features=frozenset(features),
            show_exposed=show_exposed,
            show_used=show_used,
            output_format=output_format or runtime["report"]["format"],
            backend=backend or scan["backend"],
            source_extension=scan["source_extension"],
            manifest_name=scan["manifest_name"],
            features_table=scan["features_table"],
            rg_binary=scan["rg_binary"],
            rg_timeout=runtime["timeouts"]["rg_scan"],
        )
