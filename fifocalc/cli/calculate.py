"""FIFO calculation commands for fifocalc CLI.

Handles loading trade files, client selection, profit/loss display
and report output.
"""

from datetime import date, datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from fifocalc import constants as c
from fifocalc.models import FifoResult, TradeProcessResult, TradeReadResult

console = Console()


def _get_settings(ctx: click.Context):
    """Get settings loaded by the main group, or load them now."""
    settings = (ctx.obj or {}).get("settings")
    if settings is None:
        from fifocalc.config import load_config

        settings = load_config()
    return settings


def _error_panel(message: str, title: str = "Error") -> None:
    console.print(Panel(
        f"[red]{escape(message)}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def _load(file: Optional[Path], settings) -> TradeReadResult:
    from fifocalc.readers import TradeCsvReader

    path = file or Path(settings.input.path)
    console.print(f"[dim]Loading trades from {path}...[/dim]")
    return TradeCsvReader(path, delimiter=settings.input.delimiter).load_trades()


def print_read_errors(read_result: TradeReadResult) -> None:
    """Print every read error followed by a summary line."""
    for error in read_result.errors:
        console.print(f"[red]{escape(error.format())}[/red]", highlight=False, soft_wrap=True)

    if not read_result.fatal:
        total = len(read_result.trades) + len({e.line_number for e in read_result.errors})
        console.print(c.MSG_COMPLETED_WITH_ERRORS.format(len(read_result.trades), total))
    console.print(f"[bold]Errors found:[/bold] {len(read_result.errors)}")


def parse_target_date(value: str) -> date:
    """Parse a yyyy-MM-dd date; an empty value means today.

    Raises:
        click.BadParameter: If the value is not a valid date.
    """
    value = value.strip()
    if not value:
        return date.today()
    try:
        return datetime.strptime(value, c.DATE_FORMAT).date()
    except ValueError:
        raise click.BadParameter(
            f"Invalid date format. Please use {c.DATE_FORMAT_DISPLAY} format"
        ) from None


def _color(amount) -> str:
    return "green" if amount >= 0 else "red"


def build_profit_loss_table(results: list[FifoResult]) -> Table:
    """Build the per-security profit/loss table."""
    from fifocalc.report import format_signed

    table = Table(title="Profit/Loss", show_header=True, header_style="bold cyan")
    table.add_column("Security", style="bold")
    table.add_column("Total P/L", justify="right")
    table.add_column("Shares Left", justify="right")

    for result in results:
        color = _color(result.total_profit_loss)
        table.add_row(
            result.security,
            f"[{color}]{format_signed(result.total_profit_loss)}[/{color}]",
            str(result.remaining_quantity),
        )
    return table


def build_left_over_table(results: list[FifoResult]) -> Optional[Table]:
    """Build the left-over lots table, or None when nothing is left."""
    rows = [(r.security, lot) for r in results for lot in r.left_over_lots]
    if not rows:
        return None

    table = Table(title="Left Shares", show_header=True, header_style="bold cyan")
    table.add_column("Security", style="bold")
    table.add_column("Trade ID", justify="right", style="dim")
    table.add_column("Date")
    table.add_column("Amount", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Fee", justify="right")

    for security, lot in rows:
        table.add_row(
            security,
            str(lot.trade_id),
            lot.date.isoformat(),
            str(lot.quantity),
            f"{lot.price:,.2f}",
            f"{lot.fee:,.2f}",
        )
    return table


def print_process_result(result: TradeProcessResult) -> None:
    """Render a processing result to the console."""
    from fifocalc.report import format_signed

    if not result.is_success:
        console.print("\n[bold red]=== Trade Processing Failed ===[/bold red]")
        for error in result.errors:
            console.print(f"[red]Error: {escape(error)}[/red]", highlight=False, soft_wrap=True)
        return

    console.print(build_profit_loss_table(result.fifo_results))

    total = result.total_profit_loss
    color = _color(total)
    console.print(f"\n[bold]Total Profit/Loss:[/bold] [{color}]{format_signed(total)}[/{color}]")

    left_over = build_left_over_table(result.fifo_results)
    if left_over is not None:
        console.print(left_over)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {escape(warning)}[/yellow]", highlight=False, soft_wrap=True)


@click.command()
@click.argument("file", required=False, type=click.Path(path_type=Path))
@click.option("--client", "client_name", type=str, default=None, help="Client to calculate for.")
@click.option(
    "--date",
    "target_date",
    type=str,
    default=None,
    help="Cutoff date (YYYY-MM-DD), inclusive. Defaults to today.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Report file path.",
)
@click.option("--no-report", is_flag=True, default=False, help="Do not write a report file.")
@click.option(
    "--skip-invalid",
    is_flag=True,
    default=False,
    help="Continue with the valid rows when some rows fail to parse.",
)
@click.pass_context
def calculate(
    ctx: click.Context,
    file: Optional[Path],
    client_name: Optional[str],
    target_date: Optional[str],
    output: Optional[Path],
    no_report: bool,
    skip_invalid: bool,
) -> None:
    """Calculate FIFO profit/loss for one client.

    Prompts for the client and cutoff date when they are not given.

    \b
    Examples:
      fifocalc calculate trades.csv
      fifocalc calculate trades.csv --client "Jonas" --date 2024-12-31
      fifocalc calculate --no-report
    """
    from fifocalc.engine import TradeProcessor
    from fifocalc.exceptions import ReportWriteError
    from fifocalc.report import ReportWriter
    from fifocalc.utils import match_client

    settings = _get_settings(ctx)
    read_result = _load(file, settings)

    if read_result.fatal or (read_result.has_errors and not skip_invalid):
        print_read_errors(read_result)
        raise SystemExit(1)

    if read_result.has_errors:
        print_read_errors(read_result)
    else:
        console.print(c.MSG_COMPLETED.format(len(read_result.trades)))

    if not read_result.clients:
        _error_panel("No clients found in the trade data")
        raise SystemExit(1)

    if client_name is None:
        console.print("\n[bold]Available clients:[/bold]")
        for name in read_result.clients:
            console.print(f"  - {escape(name)}", highlight=False, soft_wrap=True)
        client_name = click.prompt("\nEnter client name", default="", show_default=False)

    if not client_name.strip():
        _error_panel("No client name entered")
        raise SystemExit(1)

    client = match_client(client_name, read_result.clients)
    if client is None:
        _error_panel(f"Client '{client_name}' not found in the data")
        raise SystemExit(1)

    if target_date is None:
        target_date = click.prompt(
            f"Enter date ({c.DATE_FORMAT_DISPLAY} or press Enter for today)",
            default="",
            show_default=False,
        )

    try:
        cutoff = parse_target_date(target_date)
    except click.BadParameter as e:
        _error_panel(e.message)
        raise SystemExit(1)

    result = TradeProcessor().process_trades(read_result.trades, client, cutoff)
    print_process_result(result)

    if not result.is_success:
        raise SystemExit(1)

    if no_report:
        return

    report_path = output or Path(settings.output.path)
    try:
        written = ReportWriter().write(result.fifo_results, client, cutoff, report_path)
    except ReportWriteError as e:
        _error_panel(str(e), title="Report Not Written")
        return

    console.print(f"\nResults written to '[cyan]{written}[/cyan]'")


@click.command()
@click.argument("file", required=False, type=click.Path(path_type=Path))
@click.pass_context
def clients(ctx: click.Context, file: Optional[Path]) -> None:
    """List the clients found in a trade file.

    \b
    Examples:
      fifocalc clients trades.csv
    """
    settings = _get_settings(ctx)
    read_result = _load(file, settings)

    if read_result.fatal:
        print_read_errors(read_result)
        raise SystemExit(1)

    if not read_result.clients:
        console.print(Panel(
            "[dim]No clients found[/dim]",
            title="[bold]Clients[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Clients", show_header=True, header_style="bold cyan")
    table.add_column("Client", style="bold")
    table.add_column("Trades", justify="right")

    for name in read_result.clients:
        count = sum(1 for t in read_result.trades if t.client == name)
        table.add_row(name, str(count))

    console.print(table)

    if read_result.has_errors:
        failed_rows = len({e.line_number for e in read_result.errors})
        console.print(f"[yellow]{failed_rows} rows could not be read[/yellow]")
