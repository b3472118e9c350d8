"""Filesystem change watcher backed by watchdog."""

import asyncio
import logging
import os
from collections.abc import Callable
from pathlib import Path

from watchdog.events import (
    EVENT_TYPE_CLOSED,
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from browser_switcher.core.config import DEFAULT_DEBOUNCE_SECONDS
from browser_switcher.core.debounce import Debouncer
from browser_switcher.integrations.change_watcher.abc import ChangeWatcher

logger = logging.getLogger(__name__)

# Reads (opened, closed_no_write) are ignored: xdg-settings reads the file on every query.
WRITE_EVENT_TYPES = frozenset(
    {
        EVENT_TYPE_CLOSED,
        EVENT_TYPE_CREATED,
        EVENT_TYPE_DELETED,
        EVENT_TYPE_MODIFIED,
        EVENT_TYPE_MOVED,
    }
)


def _normalize(path: str | bytes) -> str:
    return os.path.abspath(os.fsdecode(path))


class ConfigFileEventHandler(FileSystemEventHandler):
    """Forwards write events that touch one specific file.

    The parent directory is what gets observed, because tools commonly replace
    the file with a rename; both the source and destination of a move are
    matched against the target.
    """

    def __init__(self, target: Path, on_change: Callable[[], None]) -> None:
        super().__init__()
        self._target = _normalize(str(target))
        self._on_change = on_change

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in WRITE_EVENT_TYPES:
            return

        paths = [event.src_path]
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            paths.append(dest_path)

        if any(_normalize(path) == self._target for path in paths):
            self._on_change()


class RealChangeWatcher(ChangeWatcher):
    """Production implementation watching a file with a watchdog observer.

    The observer delivers events on its own thread; they are handed to the
    event loop with call_soon_threadsafe, and everything else (debouncing,
    invoking on_settled) happens on the loop.
    """

    def __init__(
        self,
        path: Path,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        observer_factory: Callable[[], BaseObserver] = Observer,
    ) -> None:
        """Create RealChangeWatcher.

        Args:
            path: File to watch (usually $XDG_CONFIG_HOME/mimeapps.list)
            debounce_seconds: Quiet period before on_settled fires
            observer_factory: Creates the watchdog observer (e.g. PollingObserver)
        """
        self._path = path
        self._debounce_seconds = debounce_seconds
        self._observer_factory = observer_factory
        self._loop: asyncio.AbstractEventLoop | None = None
        self._debouncer: Debouncer | None = None
        self._on_settled: Callable[[], None] | None = None
        self._observer: BaseObserver | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_armed(self) -> bool:
        return self._on_settled is not None

    @property
    def is_observing(self) -> bool:
        """Whether a filesystem observer is running for the watched file."""
        return self._observer is not None

    def arm(self, on_settled: Callable[[], None]) -> None:
        self.disarm()
        self._loop = asyncio.get_running_loop()
        self._debouncer = Debouncer(self._debounce_seconds, self._loop)
        self._on_settled = on_settled
        self._observer = self._start_observer()

    def disarm(self) -> None:
        if self._debouncer is not None:
            self._debouncer.cancel()
        self._debouncer = None
        self._on_settled = None

        observer = self._observer
        self._observer = None
        if observer is not None:
            observer.stop()
            observer.join()
            logger.debug("Stopped watching %s", self._path)

        self._loop = None

    def handle_raw_event(self) -> None:
        """Register one raw change event. Must run on the event loop thread.

        Ignored once the watcher has been disarmed, which covers events the
        observer thread queued just before it was stopped.
        """
        if self._debouncer is None or self._on_settled is None:
            return
        self._debouncer.trigger(self._on_settled)

    def _start_observer(self) -> BaseObserver | None:
        directory = self._path.parent
        if not directory.is_dir():
            logger.error("Could not watch %s: %s does not exist", self._path, directory)
            return None

        handler = ConfigFileEventHandler(self._path, self._dispatch_from_observer)
        observer = self._observer_factory()
        try:
            observer.schedule(handler, str(directory), recursive=False)
            observer.start()
        except OSError as e:
            logger.error("Could not watch %s: %s", self._path, e)
            return None

        logger.debug("Watching %s", self._path)
        return observer

    def _dispatch_from_observer(self) -> None:
        # Runs on the observer thread
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(self.handle_raw_event)
        except RuntimeError:
            # Loop closed between the check and the call; the watcher is being torn down
            logger.debug("Dropped change event for %s: event loop closed", self._path)
