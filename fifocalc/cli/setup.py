"""Configuration commands for fifocalc CLI."""

import click
from rich.console import Console
from rich.panel import Panel

from fifocalc.config import CONFIG_PATH, create_template_config
from fifocalc.exceptions import ConfigError

console = Console()


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config file.")
def init(force: bool) -> None:
    """Create a template configuration file.

    \b
    Examples:
      fifocalc init
      fifocalc init --force
    """
    if CONFIG_PATH.exists() and not force:
        console.print(Panel(
            f"[yellow]Config already exists:[/yellow] [cyan]{CONFIG_PATH}[/cyan]\n\n"
            "Use [cyan]--force[/cyan] to overwrite it.",
            title="[bold yellow]Config[/bold yellow]",
            border_style="yellow",
        ))
        return

    try:
        path = create_template_config(CONFIG_PATH)
    except ConfigError as e:
        console.print(Panel(
            f"[red]{e}[/red]",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    console.print(Panel(
        f"Config written to [cyan]{path}[/cyan]",
        title="[bold cyan]Config[/bold cyan]",
        border_style="cyan",
    ))
