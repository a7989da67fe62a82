"""Report formatting - pure functions over a reconciled engine's records.

Text output is tab-separated and ASCII-only so that `path:line` locators stay
clickable in terminals and greppable in CI logs.
"""

import json
from pathlib import Path

from featcheck.models import Feature, HiddenFeatureReport, ManifestRecord


def display_path(path: Path) -> str:
    """Show a path relative to the working directory when it lies beneath it."""
    path = Path(path)
    cwd = Path.cwd()
    if path.is_absolute() and cwd in path.parents:
        return str(path.relative_to(cwd))
    return str(path)


def feature_line(feature: Feature) -> str:
    """`\\t<name>\\t<path>:<line>`, or the name twice without a location."""
    if feature.location is None:
        return f"\t{feature.name}\t{feature.display_location}"
    return f"\t{feature.name}\t{display_path(feature.path)}:{feature.line_number}"


def _section(record: ManifestRecord, features: dict) -> list[str]:
    lines = [f"path: {display_path(record.path)}"]
    for name in sorted(features):
        lines.append(feature_line(features[name]))
    return lines


def format_hidden(report: HiddenFeatureReport) -> str:
    """One header per offending manifest, one indented line per hidden feature."""
    lines: list[str] = []
    for record in report.offenders:
        lines.extend(_section(record, record.hidden))
    return "\n".join(lines)


def format_exposed(records: list[ManifestRecord]) -> str:
    """Dump every declared feature, per manifest."""
    lines: list[str] = []
    for record in records:
        lines.extend(_section(record, record.exposed))
    return "\n".join(lines)


def format_used(records: list[ManifestRecord]) -> str:
    """Dump every used feature with its first-seen location, per manifest."""
    lines: list[str] = []
    for record in records:
        lines.extend(_section(record, record.used))
    return "\n".join(lines)


def format_json(report: HiddenFeatureReport) -> str:
    """Format as JSON for CI/CD."""
    return json.dumps(report.to_dict(), indent=2)


def format_summary(report: HiddenFeatureReport) -> str:
    """One-line verdict for the status line."""
    if report.success:
        return f"No hidden features in {len(report.records)} manifest(s)"
    return (
        f"Hidden features detected: {report.hidden_count} in "
        f"{len(report.offenders)} of {len(report.records)} manifest(s)"
    )
