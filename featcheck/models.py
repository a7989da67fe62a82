"""Data contracts shared by scanners, the engine and the reporter."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, NamedTuple


class Occurrence(NamedTuple):
    """A raw (name, path, line) triple produced by a scanner backend."""

    name: str
    path: Path
    line_number: int


@dataclass(frozen=True)
class UsedFeature:
    """A feature referenced by a cfg guard in source code.

    line_number is 1-based so that `location` is directly clickable.
    """

    name: str
    path: Path
    line_number: int

    @property
    def location(self) -> str | None:
        return f"{self.path}:{self.line_number}"

    @property
    def display_location(self) -> str:
        return self.location


@dataclass(frozen=True)
class ExposedFeature:
    """A feature declared in a manifest's feature table."""

    name: str

    @property
    def location(self) -> str | None:
        return None

    @property
    def display_location(self) -> str:
        # No source site; the report falls back to the name itself.
        return self.name


Feature = UsedFeature | ExposedFeature


@dataclass
class ManifestRecord:
    """Per-manifest feature sets.

    `used` and `exposed` map a feature name to its representative Feature.
    Identity is the name alone, so the first occurrence inserted for a name
    is the one whose location is kept. `hidden` is derived by `reconcile()`
    and exposed read-only.
    """

    path: Path
    used: dict[str, Feature] = field(default_factory=dict)
    exposed: dict[str, Feature] = field(default_factory=dict)
    _hidden: dict[str, Feature] = field(default_factory=dict, init=False, repr=False)

    def add_used(self, feature: UsedFeature) -> bool:
        """Insert a used feature unless its name is already present.

        Returns:
            True if the name was new to this manifest
        """
        if feature.name in self.used:
            return False
        self.used[feature.name] = feature
        return True

    def reconcile(self) -> None:
        """Recompute hidden as used - exposed, by name."""
        self._hidden = {
            name: feature for name, feature in self.used.items() if name not in self.exposed
        }

    @property
    def hidden(self) -> Mapping[str, Feature]:
        return MappingProxyType(self._hidden)


class EngineState(Enum):
    """Lifecycle of a FeatureEngine over one run."""

    EMPTY = "empty"
    COLLECTING = "collecting"
    COLLECTED = "collected"
    EXPOSED = "exposed"
    RECONCILED = "reconciled"
    REPORTED = "reported"


@dataclass
class HiddenFeatureReport:
    """Read-only snapshot of a reconciled engine, consumed by the reporter."""

    records: list[ManifestRecord]

    @property
    def offenders(self) -> list[ManifestRecord]:
        """Records with at least one hidden feature, sorted by manifest path."""
        return sorted((r for r in self.records if r.hidden), key=lambda r: str(r.path))

    @property
    def hidden_count(self) -> int:
        return sum(len(r.hidden) for r in self.records)

    @property
    def success(self) -> bool:
        return not self.offenders

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "summary": {
                "manifests": len(self.records),
                "manifests_with_hidden": len(self.offenders),
                "hidden_features": self.hidden_count,
            },
            "manifests": [
                {
                    "path": str(record.path),
                    "used": sorted(record.used),
                    "exposed": sorted(record.exposed),
                    "hidden": [
                        {"name": name, "location": record.hidden[name].location}
                        for name in sorted(record.hidden)
                    ],
                }
                for record in sorted(self.records, key=lambda r: str(r.path))
            ],
        }
