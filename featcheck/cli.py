"""featcheck CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click

from featcheck import __version__


class VerboseGroup(click.Group):
    """Groups commands by category in --help output."""

    COMMAND_CATEGORIES = {
        "AUDIT": {
            "title": "AUDIT",
            "commands": ["check"],
            "command_meta": {
                "check": {"run_when": "In CI, or before publishing a crate"},
            },
        },
        "INSPECTION": {
            "title": "INSPECTION",
            "commands": ["used", "exposed"],
            "command_meta": {
                "used": {"use_when": "Need every cfg feature with a location"},
                "exposed": {"use_when": "Need the declared [features] per crate"},
            },
        },
    }

    def list_commands(self, ctx):
        """Keep registration order instead of alphabetical."""
        return list(self.commands)

    def format_commands(self, ctx, formatter):
        """Write one definition list per category."""
        registered = {
            name: cmd
            for name, cmd in self.commands.items()
            if not getattr(cmd, "hidden", False)
        }

        for category_data in self.COMMAND_CATEGORIES.values():
            rows = []
            for cmd_name in category_data["commands"]:
                if cmd_name not in registered:
                    continue
                short_help = registered[cmd_name].get_short_help_str(limit=60)
                meta = category_data.get("command_meta", {}).get(cmd_name, {})
                if "use_when" in meta:
                    short_help = f"{short_help} (USE: {meta['use_when']})"
                elif "run_when" in meta:
                    short_help = f"{short_help} (RUN: {meta['run_when']})"
                rows.append((cmd_name, short_help))

            if rows:
                with formatter.section(category_data["title"]):
                    formatter.write_dl(rows)


@click.group(cls=VerboseGroup)
@click.version_option(version=__version__, prog_name="featcheck")
@click.help_option("-h", "--help")
def cli():
    """featcheck - find Cargo features used in code but never declared

    \b
    QUICK START:
      featcheck check                       # Audit the current workspace
      featcheck check --ignored-features x  # Ignore a feature name
      featcheck used                        # List used features

    \b
    For detailed options: featcheck <command> --help"""
    pass


from featcheck.commands.check import check
from featcheck.commands.features import exposed, used

cli.add_command(check)
cli.add_command(used)
cli.add_command(exposed)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
