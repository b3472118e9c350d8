"""Pydantic models for JSON output schemas.

These models validate the JSON documents printed by commands run with --json.
"""

from pydantic import BaseModel, ConfigDict

from browser_switcher.core.models import BrowserEntry


class BrowserInfo(BaseModel):
    """One installed browser.

    Attributes:
        id: Desktop file id
        name: Display name
        icon: Icon name or path
        exec_path: Executable from the Exec key
        desktop_file: Absolute path of the manifest
        is_default: Whether this browser is the current default
    """

    model_config = ConfigDict(strict=True)

    id: str
    name: str
    icon: str
    exec_path: str
    desktop_file: str
    is_default: bool

    @classmethod
    def from_entry(cls, entry: BrowserEntry, current_default: str | None) -> "BrowserInfo":
        """Create from a registry entry."""
        return cls(
            id=entry.id,
            name=entry.name,
            icon=entry.icon,
            exec_path=entry.exec_path,
            desktop_file=str(entry.desktop_file),
            is_default=entry.id == current_default,
        )


class ListCommandResponse(BaseModel):
    """JSON response schema for the `browser-switcher list` command.

    Attributes:
        browsers: Installed browsers in registry order
        current_default: Desktop file id of the default browser, None if unset
    """

    model_config = ConfigDict(strict=True)

    browsers: list[BrowserInfo]
    current_default: str | None


class CurrentCommandResponse(BaseModel):
    """JSON response schema for the `browser-switcher current` command.

    Attributes:
        current_default: Desktop file id of the default browser, None if unset
        name: Display name when the default browser is installed
        icon: Indicator icon for the default browser
    """

    model_config = ConfigDict(strict=True)

    current_default: str | None
    name: str | None
    icon: str
