"""No-op wrapper for default browser changes."""

from browser_switcher.cli.output import user_output
from browser_switcher.integrations.default_handler.abc import DefaultBrowserHandler


class DryRunDefaultBrowserHandler(DefaultBrowserHandler):
    """No-op wrapper that prevents changing the default browser.

    Queries are delegated to the wrapped implementation. set_default() prints
    what would have happened and reports success.

    Usage:
        real_handler = RealDefaultBrowserHandler()
        noop_handler = DryRunDefaultBrowserHandler(real_handler)

        # Prints instead of running xdg-settings set
        await noop_handler.set_default("firefox.desktop")
    """

    def __init__(self, wrapped: DefaultBrowserHandler) -> None:
        """Create a dry-run wrapper around a DefaultBrowserHandler.

        Args:
            wrapped: The implementation to wrap (usually RealDefaultBrowserHandler)
        """
        self._wrapped = wrapped

    async def query_default(self) -> str | None:
        """Query the default browser (read-only, delegates to wrapped)."""
        return await self._wrapped.query_default()

    async def set_default(self, browser_id: str) -> bool:
        """Print dry-run message instead of changing the default."""
        user_output(f"[DRY RUN] Would set default web browser to {browser_id}")
        return True
