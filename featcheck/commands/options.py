"""Options shared by every command that scans a source tree."""

from pathlib import Path

import click

from featcheck.utils.constants import BACKENDS


def scan_options(func):
    """Attach PATH, exclusion and backend options to a command."""
    func = click.option(
        "--backend",
        type=click.Choice(BACKENDS),
        default=None,
        help="Occurrence scanner: native walk or ripgrep (default: from config, else native)",
    )(func)
    func = click.option(
        "--ignored-features",
        multiple=True,
        help="Feature names to ignore entirely (repeatable)",
    )(func)
    func = click.option(
        "--ignored-paths",
        multiple=True,
        type=click.Path(path_type=Path),
        help=(
            "Paths to skip, with everything beneath them (repeatable). Relative paths "
            "are taken from PATH and from the current directory"
        ),
    )(func)
    func = click.argument(
        "path",
        default=".",
        type=click.Path(path_type=Path),
    )(func)
    return func
