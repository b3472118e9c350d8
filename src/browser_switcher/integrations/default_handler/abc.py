"""Abstract interface for reading and changing the default web browser."""

from abc import ABC, abstractmethod


class DefaultBrowserHandler(ABC):
    """Abstract interface to the OS default-browser association.

    Implementations include:
    - RealDefaultBrowserHandler: xdg-settings subprocesses
    - FakeDefaultBrowserHandler: in-memory for testing
    - DryRunDefaultBrowserHandler: reads delegate, writes are skipped

    Neither method raises for expected conditions such as a missing utility or
    an unconfigured default; those are reported through the return value.
    """

    @abstractmethod
    async def query_default(self) -> str | None:
        """Get the currently configured default browser.

        Returns:
            Desktop file id (e.g. "firefox.desktop"), or None if no default is
            configured or it could not be determined
        """
        ...

    @abstractmethod
    async def set_default(self, browser_id: str) -> bool:
        """Make browser_id the default web browser.

        Does not retry on failure.

        Args:
            browser_id: Desktop file id of the browser

        Returns:
            True if the OS utility reported success, False otherwise
        """
        ...
