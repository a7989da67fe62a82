"""Central UI handler for featcheck.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from featcheck.ui import console, print_success

    print_success("No hidden features")
"""

from rich.console import Console
from rich.theme import Theme

FEATCHECK_THEME = Theme({
    "info": "bold cyan",
    "warning": "bold yellow",
    "error": "bold red",
    "success": "bold green",
    "path": "bold cyan",
    "feature": "bold magenta",
    "dim": "dim white",
})

# Single console instance on stderr - stdout carries the report itself
console = Console(theme=FEATCHECK_THEME, stderr=True, highlight=False)


def print_success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[success]OK:[/success] {msg}")
