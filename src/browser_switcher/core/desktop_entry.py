"""Parsing of freedesktop.org .desktop manifests.

Only the handful of keys needed to recognise a web browser are extracted.
Parsing is lenient: anything that cannot be read as a key file yields None
instead of raising, so one broken manifest never aborts a directory scan.
"""

import configparser
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DESKTOP_ENTRY_GROUP = "Desktop Entry"
DESKTOP_FILE_SUFFIX = ".desktop"
WEB_BROWSER_CATEGORY = "WebBrowser"


@dataclass(frozen=True)
class DesktopEntry:
    """Raw values of the [Desktop Entry] group.

    Missing keys are None. Values are stripped but otherwise untouched.
    """

    name: str | None
    exec_line: str | None
    icon: str | None
    categories: tuple[str, ...] | None

    @property
    def is_web_browser(self) -> bool:
        """Whether the entry lists the WebBrowser category."""
        if self.categories is None:
            return False
        return WEB_BROWSER_CATEGORY in self.categories

    @property
    def exec_path(self) -> str | None:
        """First whitespace-delimited token of Exec, or None if Exec is empty."""
        if not self.exec_line:
            return None
        return self.exec_line.split(maxsplit=1)[0]


def _new_parser() -> configparser.RawConfigParser:
    parser = configparser.RawConfigParser(
        delimiters=("=",),
        comment_prefixes=("#",),
        inline_comment_prefixes=None,
        strict=False,
        interpolation=None,
        default_section="__no_default_section__",
    )
    # Desktop entry keys are case sensitive (Name vs name)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _is_decodable(value: str) -> bool:
    """False for values holding bytes that were not valid UTF-8 (surrogate escapes)."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _optional(section: configparser.SectionProxy, key: str) -> str | None:
    value = section.get(key)
    if value is None or not _is_decodable(value):
        return None
    stripped = value.strip()
    if not stripped:
        return None
    return stripped


def parse_categories(raw: str) -> tuple[str, ...]:
    """Split a Categories value ("Network;WebBrowser;") into its entries."""
    return tuple(part.strip() for part in raw.split(";") if part.strip())


def parse_desktop_entry_text(text: str) -> DesktopEntry | None:
    """Parse the text of a .desktop file.

    Args:
        text: Full file contents

    Returns:
        DesktopEntry, or None if the text is not a key file or has no
        [Desktop Entry] group
    """
    parser = _new_parser()
    try:
        parser.read_string(text)
    except configparser.Error as e:
        logger.debug("Unparseable desktop entry: %s", e)
        return None

    if not parser.has_section(DESKTOP_ENTRY_GROUP):
        return None

    section = parser[DESKTOP_ENTRY_GROUP]
    categories_raw = _optional(section, "Categories")
    return DesktopEntry(
        name=_optional(section, "Name"),
        exec_line=_optional(section, "Exec"),
        icon=_optional(section, "Icon"),
        categories=parse_categories(categories_raw) if categories_raw is not None else None,
    )


def parse_desktop_entry(path: Path) -> DesktopEntry | None:
    """Read and parse a .desktop file.

    Args:
        path: Path to the manifest

    Returns:
        DesktopEntry, or None if the file cannot be read or parsed. Values that
        are not valid UTF-8 are reported as missing.
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.debug("Could not read %s: %s", path, e)
        return None
    # A stray non-UTF-8 byte only invalidates the value it appears in
    text = data.decode("utf-8", errors="surrogateescape")
    return parse_desktop_entry_text(text)
