"""Set command implementation - changes the default web browser."""

import asyncio

import click

from browser_switcher.cli.ensure import Ensure
from browser_switcher.cli.output import user_output
from browser_switcher.core.context import SwitcherContext
from browser_switcher.core.registry import BrowserRegistry

SET_FAILED_MESSAGE = "Could not change the default browser."


async def _set_default_browser(ctx: SwitcherContext, browser_id: str) -> bool | None:
    """Returns None when browser_id is not installed, else the set result."""
    registry = BrowserRegistry(ctx)
    try:
        await registry.initialize(watch_changes=False)
        if registry.find_browser(browser_id) is None:
            return None
        return await registry.set_default(browser_id)
    finally:
        registry.teardown()


@click.command("set")
@click.argument("browser_id")
@click.pass_obj
def set_cmd(ctx: SwitcherContext, browser_id: str) -> None:
    """Make BROWSER_ID (e.g. firefox.desktop) the default web browser."""
    Ensure.invariant(bool(browser_id.strip()), "Browser id must not be empty")

    result = asyncio.run(_set_default_browser(ctx, browser_id))
    Ensure.invariant(
        result is not None,
        f"No installed browser with id '{browser_id}'. "
        "Run 'browser-switcher list' to see installed browsers.",
    )

    if not result:
        user_output(click.style(SET_FAILED_MESSAGE, fg="red"))
        raise SystemExit(1)

    if not ctx.dry_run:
        user_output(click.style(f"✓ Default browser set to {browser_id}", fg="green"))
