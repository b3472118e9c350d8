"""Watch command implementation - follows default browser changes."""

import asyncio

import click

from browser_switcher.cli.menu import indicator_icon
from browser_switcher.cli.output import user_output
from browser_switcher.core.context import SwitcherContext
from browser_switcher.core.registry import BrowserRegistry


def describe_default(registry: BrowserRegistry, browser_id: str | None) -> str:
    """One-line description of a default browser value."""
    if browser_id is None:
        return "Default browser: none"

    icon = indicator_icon(registry.get_installed_browsers(), browser_id)
    browser = registry.find_browser(browser_id)
    if browser is None:
        return f"Default browser: {browser_id} (not installed) [icon: {icon}]"
    return f"Default browser: {browser.name} ({browser_id}) [icon: {icon}]"


async def watch_default_browser(ctx: SwitcherContext, *, max_changes: int | None) -> int:
    """Print the default browser, then every change until max_changes is reached.

    Args:
        ctx: Application context
        max_changes: Stop after this many changes; None runs until cancelled

    Returns:
        Number of changes observed
    """
    registry = BrowserRegistry(ctx)
    done = asyncio.Event()
    changes = 0

    def on_change(browser_id: str | None) -> None:
        nonlocal changes
        changes += 1
        user_output(describe_default(registry, browser_id))
        if max_changes is not None and changes >= max_changes:
            done.set()

    registry.watch_default_browser(on_change)
    try:
        initial = await registry.initialize()
        user_output(describe_default(registry, initial))
        if max_changes == 0:
            return 0
        await done.wait()
        return changes
    finally:
        registry.teardown()


@click.command("watch")
@click.option(
    "--max-changes",
    type=click.IntRange(min=0),
    default=None,
    help="Exit after this many changes.",
)
@click.pass_obj
def watch_cmd(ctx: SwitcherContext, max_changes: int | None) -> None:
    """Print the default web browser whenever it changes.

    Runs until interrupted with Ctrl-C.
    """
    try:
        asyncio.run(watch_default_browser(ctx, max_changes=max_changes))
    except KeyboardInterrupt:
        user_output("Stopped watching")
