"""Fake ChangeWatcher implementation for testing."""

import asyncio
from collections.abc import Callable

from browser_switcher.core.debounce import Debouncer
from browser_switcher.integrations.change_watcher.abc import ChangeWatcher


class FakeChangeWatcher(ChangeWatcher):
    """In-memory fake that is driven by simulate_event() instead of the filesystem.

    Raw events go through a real Debouncer, so bursts coalesce exactly as they
    do in production. Arm/disarm calls are tracked for assertions.
    """

    def __init__(self, *, debounce_seconds: float = 0.01) -> None:
        """Create FakeChangeWatcher.

        Args:
            debounce_seconds: Debounce window applied to simulated events
        """
        self._debounce_seconds = debounce_seconds
        self._debouncer: Debouncer | None = None
        self._on_settled: Callable[[], None] | None = None
        self._arm_calls = 0
        self._disarm_calls = 0

    @property
    def arm_calls(self) -> int:
        """Number of arm() calls, for test assertions."""
        return self._arm_calls

    @property
    def disarm_calls(self) -> int:
        """Number of disarm() calls, for test assertions."""
        return self._disarm_calls

    @property
    def is_armed(self) -> bool:
        return self._on_settled is not None

    @property
    def timer_pending(self) -> bool:
        """Whether a debounce timer is currently scheduled."""
        return self._debouncer is not None and self._debouncer.pending

    def arm(self, on_settled: Callable[[], None]) -> None:
        self._arm_calls += 1
        if self._debouncer is not None:
            self._debouncer.cancel()
        self._debouncer = Debouncer(self._debounce_seconds, asyncio.get_running_loop())
        self._on_settled = on_settled

    def disarm(self) -> None:
        self._disarm_calls += 1
        if self._debouncer is not None:
            self._debouncer.cancel()
        self._debouncer = None
        self._on_settled = None

    def simulate_event(self) -> None:
        """Feed one raw change event. Ignored while disarmed."""
        if self._debouncer is None or self._on_settled is None:
            return
        self._debouncer.trigger(self._on_settled)
