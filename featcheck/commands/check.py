"""Hidden feature check CLI command.

Usage: featcheck check [PATH]
"""

import click

from featcheck.commands.options import scan_options
from featcheck.config import AuditConfig
from featcheck.engine import FeatureEngine
from featcheck.reporter import (
    format_exposed,
    format_hidden,
    format_json,
    format_summary,
    format_used,
)
from featcheck.ui import print_success
from featcheck.utils.constants import FORMAT_JSON, REPORT_FORMATS
from featcheck.utils.error_handler import handle_exceptions


@click.command("check")
@scan_options
@click.option("--show-exposed", is_flag=True, help="Also dump every declared feature per manifest")
@click.option("--show-used", is_flag=True, help="Also dump every used feature with its location")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(REPORT_FORMATS),
    default=None,
    help="Output format (default: from config, else text)",
)
@handle_exceptions
def check(path, ignored_paths, ignored_features, backend, show_exposed, show_used, output_format):
    """Detect cfg features that are used in code but never declared in Cargo.toml.

    Walks PATH (default: current directory), finds every `feature = "..."`
    inside .rs files, assigns each occurrence to the nearest ancestor
    Cargo.toml, and compares the used names against that manifest's
    [features] table. A used-but-undeclared feature is "hidden": it can never
    be enabled by dependents and usually means a typo or a forgotten
    declaration.

    AI ASSISTANT CONTEXT:
      Purpose: Finds cfg feature names missing from their crate's [features]
      Input: Rust source tree with one or more Cargo.toml manifests
      Output: Per-manifest list of hidden features with path:line locators
      Prerequisites: None (no build, no cargo invocation)
      Performance: Single pass over the tree, one TOML parse per owning crate

    ALGORITHM:
      1. Walk the tree (skipping dot-directories and excluded paths)
      2. Extract feature names from each line of every .rs file
      3. Resolve each file to its nearest ancestor Cargo.toml (memoized)
      4. Parse [features] of every manifest that uses at least one feature
      5. hidden = used - declared, per manifest (one location per name)

    EXAMPLES:
      featcheck check
      featcheck check path/to/workspace --ignored-features nightly
      featcheck check --ignored-paths vendor --backend rg
      featcheck check --format json > hidden.json

    EXIT CODES:
      0 = No hidden features
      1 = Hidden features found
      2 = Run aborted (unreadable tree, orphan source file, invalid manifest)

    NOTE: <PATH>/target is always excluded.
    """
    config = AuditConfig.from_runtime(
        path,
        excluded_paths=ignored_paths,
        excluded_features=ignored_features,
        show_exposed=show_exposed,
        show_used=show_used,
        backend=backend,
        output_format=output_format,
    )

    engine = FeatureEngine.from_config(config)
    engine.run(config.root)
    report = engine.report()

    if config.output_format == FORMAT_JSON:
        click.echo(format_json(report))
    else:
        if config.show_exposed and report.records:
            click.echo("# exposed features")
            click.echo(format_exposed(report.records))
        if config.show_used and report.records:
            click.echo("# used features")
            click.echo(format_used(report.records))
        hidden = format_hidden(report)
        if hidden:
            click.echo(hidden)

    if not report.success:
        raise click.ClickException(format_summary(report))

    print_success(format_summary(report))
