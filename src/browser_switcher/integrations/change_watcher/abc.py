"""Abstract interface for watching the default-applications config file."""

from abc import ABC, abstractmethod
from collections.abc import Callable


class ChangeWatcher(ABC):
    """Signals when the watched configuration file has settled after a change.

    Bursts of raw filesystem events are coalesced: on_settled runs once the
    events have been quiet for the debounce window. The watcher does not
    interpret the change; callers re-read whatever state they care about.

    arm() must be called from a running asyncio event loop; on_settled is
    always invoked on that loop.
    """

    @property
    @abstractmethod
    def is_armed(self) -> bool:
        """Whether arm() has been called without a matching disarm()."""
        ...

    @abstractmethod
    def arm(self, on_settled: Callable[[], None]) -> None:
        """Start watching. Re-arming replaces the previous callback.

        Args:
            on_settled: Invoked once per settled burst of changes
        """
        ...

    @abstractmethod
    def disarm(self) -> None:
        """Stop watching and cancel any pending debounce timer.

        Idempotent, and safe to call on a watcher that was never armed.
        """
        ...
