"""Default web browser handler integration (xdg-settings)."""

from browser_switcher.integrations.default_handler.abc import DefaultBrowserHandler
from browser_switcher.integrations.default_handler.dry_run import DryRunDefaultBrowserHandler
from browser_switcher.integrations.default_handler.fake import FakeDefaultBrowserHandler
from browser_switcher.integrations.default_handler.real import RealDefaultBrowserHandler

__all__ = [
    "DefaultBrowserHandler",
    "DryRunDefaultBrowserHandler",
    "FakeDefaultBrowserHandler",
    "RealDefaultBrowserHandler",
]
