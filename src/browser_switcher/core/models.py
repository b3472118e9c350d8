"""Browser registry data models."""

from dataclasses import dataclass
from pathlib import Path

FALLBACK_ICON = "web-browser"


@dataclass(frozen=True)
class BrowserEntry:
    """A browser-capable application discovered from a .desktop manifest.

    Attributes:
        id: Manifest file name (e.g. "firefox.desktop"), as understood by xdg-settings
        name: Human-readable label from the Name key
        icon: Icon name or path, FALLBACK_ICON when the manifest has none
        exec_path: First token of the Exec key, arguments and field codes stripped
        desktop_file: Absolute path of the manifest the entry was read from
    """

    id: str
    name: str
    icon: str
    exec_path: str
    desktop_file: Path
