"""Single-slot debounce timer on the asyncio event loop."""

import asyncio
from collections.abc import Callable


class Debouncer:
    """Coalesces bursts of triggers into one deferred callback.

    Each trigger() cancels the pending callback (if any) and schedules the new
    one delay_seconds later, so the callback only runs once the triggers have
    been quiet for a whole window. The slot is cleared before the callback
    runs, which lets the callback trigger again safely.
    """

    def __init__(self, delay_seconds: float, loop: asyncio.AbstractEventLoop) -> None:
        """Create a debouncer.

        Args:
            delay_seconds: Quiet period required before the callback fires
            loop: Event loop the timer is scheduled on
        """
        self._delay_seconds = delay_seconds
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def delay_seconds(self) -> float:
        return self._delay_seconds

    @property
    def pending(self) -> bool:
        """Whether a callback is scheduled and has not fired yet."""
        return self._handle is not None

    def trigger(self, callback: Callable[[], None]) -> None:
        """(Re)start the window; callback runs when it elapses undisturbed."""
        self.cancel()
        self._handle = self._loop.call_later(self._delay_seconds, self._fire, callback)

    def cancel(self) -> None:
        """Drop the pending callback. No-op when nothing is pending."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        callback()
