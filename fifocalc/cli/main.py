"""Main CLI entry point for fifocalc.

This module provides the main click group and lazy loading
of subcommand modules.
"""

import importlib

import click
from rich.console import Console

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """Group whose subcommands are imported on first use."""

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        # command name -> module holding a click command of that name
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self._lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        module_path = self._lazy_subcommands.get(cmd_name)
        if cmd_name in self.commands or module_path is None:
            return super().get_command(ctx, cmd_name)

        cmd = getattr(importlib.import_module(module_path), cmd_name, None)
        if not isinstance(cmd, click.Command):
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "calculate": "fifocalc.cli.calculate",
    "clients": "fifocalc.cli.calculate",
    "init": "fifocalc.cli.setup",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="fifocalc")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """fifocalc - FIFO profit/loss calculator for trade ledgers.

    Loads a semicolon-delimited trade file, filters it to one client
    and cutoff date, and matches sells against the oldest buys.

    \b
    Quick Start:
      fifocalc init                      # Create a config file
      fifocalc clients trades.csv        # List clients in a file
      fifocalc calculate trades.csv      # Calculate profit/loss
    """
    from fifocalc.config import load_config
    from fifocalc.logging_setup import setup_logging

    ctx.ensure_object(dict)

    settings = load_config()
    setup_logging("DEBUG" if verbose else settings.logging.level)
    ctx.obj["settings"] = settings


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
