"""In-memory fake implementation of DefaultBrowserHandler for testing."""

from browser_switcher.integrations.default_handler.abc import DefaultBrowserHandler


class FakeDefaultBrowserHandler(DefaultBrowserHandler):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods. A successful set_default() changes
    what later queries return, just like the real utility.
    """

    def __init__(
        self,
        *,
        current_default: str | None = None,
        set_succeeds: bool = True,
        query_results: list[str | None] | None = None,
    ) -> None:
        """Create FakeDefaultBrowserHandler.

        Args:
            current_default: Value returned by query_default()
            set_succeeds: Whether set_default() reports success
            query_results: Values returned by successive queries, consumed in order
                before falling back to current_default
        """
        self._current_default = current_default
        self._set_succeeds = set_succeeds
        self._query_results = list(query_results or [])
        self._query_calls = 0
        self._set_calls: list[str] = []

    @property
    def current_default(self) -> str | None:
        """Value the fake OS association currently holds."""
        return self._current_default

    @property
    def query_calls(self) -> int:
        """Number of query_default() calls, for test assertions."""
        return self._query_calls

    @property
    def set_calls(self) -> list[str]:
        """Browser ids passed to set_default(), for test assertions."""
        return self._set_calls.copy()

    async def query_default(self) -> str | None:
        """Return the next queued result, or the current default."""
        self._query_calls += 1
        if self._query_results:
            return self._query_results.pop(0)
        return self._current_default

    async def set_default(self, browser_id: str) -> bool:
        """Record the call and update the fake association on success."""
        self._set_calls.append(browser_id)
        if not self._set_succeeds:
            return False
        self._current_default = browser_id
        return True
