"""Change notification for the default-applications config file."""

from browser_switcher.integrations.change_watcher.abc import ChangeWatcher
from browser_switcher.integrations.change_watcher.fake import FakeChangeWatcher
from browser_switcher.integrations.change_watcher.real import RealChangeWatcher

__all__ = ["ChangeWatcher", "FakeChangeWatcher", "RealChangeWatcher"]
