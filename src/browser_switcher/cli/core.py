"""Shared helpers for CLI commands."""

import asyncio
from dataclasses import dataclass

from browser_switcher.core.context import SwitcherContext
from browser_switcher.core.models import BrowserEntry
from browser_switcher.core.registry import BrowserRegistry


@dataclass(frozen=True)
class RegistrySnapshot:
    """Installed browsers and the default browser at one point in time."""

    browsers: tuple[BrowserEntry, ...]
    current_default: str | None

    def find_browser(self, browser_id: str | None) -> BrowserEntry | None:
        for browser in self.browsers:
            if browser.id == browser_id:
                return browser
        return None


async def _take_snapshot(ctx: SwitcherContext) -> RegistrySnapshot:
    registry = BrowserRegistry(ctx)
    try:
        current_default = await registry.initialize(watch_changes=False)
        return RegistrySnapshot(
            browsers=registry.get_installed_browsers(),
            current_default=current_default,
        )
    finally:
        registry.teardown()


def load_registry_snapshot(ctx: SwitcherContext) -> RegistrySnapshot:
    """Scan for browsers and query the default once, without watching for changes."""
    return asyncio.run(_take_snapshot(ctx))
