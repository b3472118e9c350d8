"""Toolkit-neutral model of the browser switcher menu.

A panel applet renders these items as a popup menu with a check mark next to
the default browser; the CLI renders them as a table. Keeping the model here
lets both share the same ordering, placeholder and icon rules.
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace

from browser_switcher.core.models import FALLBACK_ICON, BrowserEntry

NO_BROWSERS_LABEL = "No browsers found"


@dataclass(frozen=True)
class MenuItem:
    """One row of the menu.

    Attributes:
        label: Text shown to the user
        icon: Icon name or path, None for the placeholder row
        browser_id: Desktop file id to activate, None for the placeholder row
        checked: Whether this is the current default browser
        reactive: Whether the row can be activated
    """

    label: str
    icon: str | None
    browser_id: str | None
    checked: bool
    reactive: bool


def build_menu(browsers: Sequence[BrowserEntry], current_default: str | None) -> list[MenuItem]:
    """Build menu items in registry order.

    An empty registry yields a single inert "No browsers found" item.
    """
    if not browsers:
        return [
            MenuItem(
                label=NO_BROWSERS_LABEL,
                icon=None,
                browser_id=None,
                checked=False,
                reactive=False,
            )
        ]

    return [
        MenuItem(
            label=browser.name,
            icon=browser.icon or FALLBACK_ICON,
            browser_id=browser.id,
            checked=browser.id == current_default,
            reactive=True,
        )
        for browser in browsers
    ]


def mark_current(items: Sequence[MenuItem], browser_id: str | None) -> list[MenuItem]:
    """Move the check mark to browser_id (or clear it for None)."""
    return [
        replace(item, checked=item.browser_id is not None and item.browser_id == browser_id)
        for item in items
    ]


def indicator_icon(browsers: Sequence[BrowserEntry], browser_id: str | None) -> str:
    """Icon for the panel indicator: the default browser's icon, else the generic one."""
    if browser_id is None:
        return FALLBACK_ICON
    for browser in browsers:
        if browser.id == browser_id:
            return browser.icon or FALLBACK_ICON
    return FALLBACK_ICON
