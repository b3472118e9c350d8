"""Discovery of installed web browsers from application manifests."""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from browser_switcher.core.desktop_entry import DESKTOP_FILE_SUFFIX, parse_desktop_entry
from browser_switcher.core.models import FALLBACK_ICON, BrowserEntry

logger = logging.getLogger(__name__)


class ManifestScanner:
    """Builds the browser registry from .desktop files.

    Directories are walked in the order given. Within a directory, manifests
    are visited in file name order so that two scans of the same tree always
    produce the same registry. The first manifest seen for a given id or
    executable wins; later duplicates are dropped.
    """

    def __init__(
        self,
        application_dirs: Sequence[Path],
        fallback_icon: str = FALLBACK_ICON,
    ) -> None:
        """Create a scanner.

        Args:
            application_dirs: Ordered directories to search (system dirs first, then user)
            fallback_icon: Icon token used for manifests without an Icon key
        """
        self._application_dirs = tuple(application_dirs)
        self._fallback_icon = fallback_icon

    @property
    def application_dirs(self) -> tuple[Path, ...]:
        return self._application_dirs

    def scan(self) -> tuple[BrowserEntry, ...]:
        """Scan all configured directories.

        Returns:
            Ordered, deduplicated browser entries. Empty if nothing was found.
        """
        browsers: list[BrowserEntry] = []
        seen_ids: dict[str, BrowserEntry] = {}
        seen_exec_paths: dict[str, BrowserEntry] = {}

        for manifest in self._iter_manifests():
            entry = self._read_browser(manifest)
            if entry is None:
                continue

            existing = seen_ids.get(entry.id) or seen_exec_paths.get(entry.exec_path)
            if existing is not None:
                logger.debug(
                    "Skipped duplicate browser %s (%s), already have %s",
                    entry.name,
                    entry.desktop_file,
                    existing.id,
                )
                continue

            seen_ids[entry.id] = entry
            seen_exec_paths[entry.exec_path] = entry
            browsers.append(entry)
            logger.info("Found browser %s (%s) - %s", entry.name, entry.id, entry.exec_path)

        if not browsers:
            logger.warning(
                "No web browsers found in %d application directories",
                len(self._application_dirs),
            )
        else:
            logger.debug("Found %d browsers", len(browsers))

        return tuple(browsers)

    def _iter_manifests(self) -> Iterator[Path]:
        for directory in self._application_dirs:
            try:
                children = sorted(directory.iterdir())
            except OSError as e:
                # Missing application directories are normal
                logger.debug("Skipping %s: %s", directory, e)
                continue

            for child in children:
                if child.name.endswith(DESKTOP_FILE_SUFFIX):
                    yield child

    def _read_browser(self, manifest: Path) -> BrowserEntry | None:
        desktop_entry = parse_desktop_entry(manifest)
        if desktop_entry is None or not desktop_entry.is_web_browser:
            return None

        exec_path = desktop_entry.exec_path
        if desktop_entry.name is None or exec_path is None:
            logger.debug("Skipping %s: browser manifest without Name or Exec", manifest)
            return None

        return BrowserEntry(
            id=manifest.name,
            name=desktop_entry.name,
            icon=desktop_entry.icon or self._fallback_icon,
            exec_path=exec_path,
            desktop_file=manifest.absolute(),
        )
