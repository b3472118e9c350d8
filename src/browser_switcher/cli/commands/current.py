"""Current command implementation - displays the default web browser."""

import click

from browser_switcher.cli.core import load_registry_snapshot
from browser_switcher.cli.json_output import emit_json
from browser_switcher.cli.json_schemas import CurrentCommandResponse
from browser_switcher.cli.menu import indicator_icon
from browser_switcher.cli.output import machine_output, user_output
from browser_switcher.core.context import SwitcherContext

NO_DEFAULT_MESSAGE = "No default browser configured"


@click.command("current")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output JSON format",
)
@click.pass_obj
def current_cmd(ctx: SwitcherContext, output_json: bool) -> None:
    """Show the desktop file id of the default web browser."""
    snapshot = load_registry_snapshot(ctx)
    current_default = snapshot.current_default
    browser = snapshot.find_browser(current_default)

    if output_json:
        response = CurrentCommandResponse(
            current_default=current_default,
            name=browser.name if browser is not None else None,
            icon=indicator_icon(snapshot.browsers, current_default),
        )
        emit_json(response.model_dump(mode="json"))
        return

    if current_default is None:
        user_output(NO_DEFAULT_MESSAGE)
        return

    machine_output(current_default)
