"""Feature listing commands: dump used or declared features per manifest.

Usage:
    featcheck used [PATH]
    featcheck exposed [PATH]
"""

import click

from featcheck.commands.options import scan_options
from featcheck.config import AuditConfig
from featcheck.engine import FeatureEngine
from featcheck.reporter import format_exposed, format_used
from featcheck.utils.error_handler import handle_exceptions


def _collect(path, ignored_paths, ignored_features, backend) -> FeatureEngine:
    config = AuditConfig.from_runtime(
        path,
        excluded_paths=ignored_paths,
        excluded_features=ignored_features,
        backend=backend,
    )
    engine = FeatureEngine.from_config(config)
    engine.collect_used(config.root)
    return engine


@click.command("used")
@scan_options
@handle_exceptions
def used(path, ignored_paths, ignored_features, backend):
    """List every feature referenced by cfg guards, grouped by owning manifest.

    Each feature is shown once per manifest with its first-seen location.
    """
    engine = _collect(path, ignored_paths, ignored_features, backend)
    output = format_used(engine.records())
    if output:
        click.echo(output)


@click.command("exposed")
@scan_options
@handle_exceptions
def exposed(path, ignored_paths, ignored_features, backend):
    """List the [features] declared by every manifest that uses features.

    Manifests whose crates never reference a feature are not listed.
    """
    engine = _collect(path, ignored_paths, ignored_features, backend)
    engine.load_exposed()
    output = format_exposed(engine.records())
    if output:
        click.echo(output)
