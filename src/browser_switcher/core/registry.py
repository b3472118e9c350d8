"""The browser registry: installed browsers plus the current default.

BrowserRegistry composes the manifest scanner, the default-browser handler and
the change watcher. It owns the cached default and tells subscribers whenever
that value changes, whether the change came from set_default() or from some
other program rewriting mimeapps.list.

Typical lifecycle:

    registry = BrowserRegistry(ctx)
    registry.watch_default_browser(on_change)
    await registry.initialize()
    ...
    await registry.set_default("firefox.desktop")
    ...
    registry.teardown()
"""

import asyncio
import logging
from collections.abc import Callable

from browser_switcher.core.context import SwitcherContext
from browser_switcher.core.models import BrowserEntry

logger = logging.getLogger(__name__)

DefaultBrowserCallback = Callable[[str | None], None]


class BrowserRegistry:
    """Installed browsers, the cached default browser, and its subscribers.

    All methods must be called from the event loop thread. Subscribers are
    invoked synchronously, in registration order, only when the cached default
    actually changes (including to and from None).
    """

    def __init__(self, ctx: SwitcherContext) -> None:
        """Create BrowserRegistry with its dependencies.

        Args:
            ctx: Context providing the scanner, handler and watcher
        """
        self._ctx = ctx
        self._browsers: tuple[BrowserEntry, ...] = ()
        self._current_default: str | None = None
        self._subscribers: list[DefaultBrowserCallback] = []
        self._refresh_task: asyncio.Task[None] | None = None
        self._refresh_requested = False
        # Bumped by teardown(); results of awaits started before it are discarded
        self._generation = 0

    async def initialize(self, *, watch_changes: bool = True) -> str | None:
        """Scan for browsers, query the default and start watching for changes.

        Subscribers are not notified of the initial value.

        Args:
            watch_changes: Arm the change watcher. One-shot callers (listing,
                printing the default) pass False.

        Returns:
            The initial default browser id, or None if none is configured or
            teardown() ran while the query was in flight
        """
        generation = self._generation
        self._browsers = self._ctx.scanner.scan()

        initial = await self._ctx.default_handler.query_default()
        if generation != self._generation:
            logger.debug("Registry torn down during initialization")
            return None

        self._current_default = initial
        logger.info("Initial default browser is %s", initial)

        if watch_changes:
            self._ctx.change_watcher.arm(self._on_config_changed)
        return initial

    def get_installed_browsers(self) -> tuple[BrowserEntry, ...]:
        return self._browsers

    def find_browser(self, browser_id: str | None) -> BrowserEntry | None:
        """Look up an installed browser by desktop file id."""
        if browser_id is None:
            return None
        for browser in self._browsers:
            if browser.id == browser_id:
                return browser
        return None

    def get_cached_default(self) -> str | None:
        """Last observed default browser. Does no I/O."""
        return self._current_default

    async def refresh_default(self) -> str | None:
        """Re-query the default browser and notify subscribers if it changed.

        Returns:
            The queried default browser id (None if not configured)
        """
        generation = self._generation
        new_default = await self._ctx.default_handler.query_default()
        if generation != self._generation:
            return None

        self._update_default(new_default)
        return new_default

    async def set_default(self, browser_id: str | None) -> bool:
        """Ask the OS to make browser_id the default web browser.

        Args:
            browser_id: Desktop file id of the browser

        Returns:
            True if the handler reported success, even when browser_id already
            was the default; False on failure or for an empty id
        """
        if not browser_id:
            logger.error("Invalid browser id: %r", browser_id)
            return False

        generation = self._generation
        success = await self._ctx.default_handler.set_default(browser_id)
        if not success:
            logger.warning("Could not set default browser to %s", browser_id)
            return False

        if generation == self._generation:
            self._update_default(browser_id)
        return True

    def subscribe(self, callback: DefaultBrowserCallback) -> None:
        """Register a callback invoked with the new default id on every change."""
        if not callable(callback):
            raise TypeError(f"Subscriber must be callable, got {type(callback).__name__}")
        self._subscribers.append(callback)

    def unsubscribe(self, callback: DefaultBrowserCallback) -> None:
        """Remove a previously registered callback. Unknown callbacks are ignored."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    watch_default_browser = subscribe

    def teardown(self) -> None:
        """Stop watching and drop all state.

        Safe to call repeatedly, and before initialize() has completed.
        """
        self._ctx.change_watcher.disarm()
        self._generation += 1

        task = self._refresh_task
        self._refresh_task = None
        self._refresh_requested = False
        if task is not None and not task.done():
            task.cancel()

        self._subscribers.clear()
        self._browsers = ()
        self._current_default = None

    def _update_default(self, new_default: str | None) -> None:
        if new_default == self._current_default:
            return

        logger.info("Default browser changed from %s to %s", self._current_default, new_default)
        self._current_default = new_default
        self._notify(new_default)

    def _notify(self, browser_id: str | None) -> None:
        # Copy: a subscriber may unsubscribe or tear down the registry
        for callback in list(self._subscribers):
            try:
                callback(browser_id)
            except Exception:
                logger.exception("Default browser subscriber %r failed", callback)

    def _on_config_changed(self) -> None:
        if self._refresh_task is not None and not self._refresh_task.done():
            # Picked up by the running refresh once its query returns
            self._refresh_requested = True
            return

        loop = asyncio.get_running_loop()
        self._refresh_task = loop.create_task(self._run_refreshes())

    async def _run_refreshes(self) -> None:
        while True:
            self._refresh_requested = False
            try:
                await self.refresh_default()
            except Exception:
                logger.exception("Error checking for a default browser change")
            if not self._refresh_requested:
                return
