"""List command implementation."""

import click
from rich.console import Console
from rich.table import Table

from browser_switcher.cli.core import load_registry_snapshot
from browser_switcher.cli.json_output import emit_json
from browser_switcher.cli.json_schemas import BrowserInfo, ListCommandResponse
from browser_switcher.cli.menu import build_menu
from browser_switcher.core.context import SwitcherContext


@click.command("list")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output JSON format",
)
@click.pass_obj
def list_cmd(ctx: SwitcherContext, output_json: bool) -> None:
    """List installed web browsers and mark the default."""
    snapshot = load_registry_snapshot(ctx)

    if output_json:
        response = ListCommandResponse(
            browsers=[
                BrowserInfo.from_entry(browser, snapshot.current_default)
                for browser in snapshot.browsers
            ],
            current_default=snapshot.current_default,
        )
        emit_json(response.model_dump(mode="json"))
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("", no_wrap=True, width=1)
    table.add_column("browser", no_wrap=True)
    table.add_column("id", style="cyan", no_wrap=True)
    table.add_column("icon", no_wrap=True)

    for item in build_menu(snapshot.browsers, snapshot.current_default):
        if not item.reactive:
            table.add_row("", f"[dim]{item.label}[/dim]", "", "")
            continue
        marker = "[green]✓[/green]" if item.checked else ""
        table.add_row(marker, item.label, item.browser_id or "", item.icon or "")

    # Output table to stderr (consistent with user_output convention)
    console = Console(stderr=True, width=200, force_terminal=True)
    console.print(table)
