"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from browser_switcher.core.context import SwitcherContext
from browser_switcher.integrations.change_watcher.fake import FakeChangeWatcher
from browser_switcher.integrations.default_handler.fake import FakeDefaultBrowserHandler

WriteManifest = Callable[..., Path]


@pytest.fixture
def system_apps(tmp_path: Path) -> Path:
    """System-wide applications directory (scanned first)."""
    directory = tmp_path / "usr" / "share" / "applications"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def user_apps(tmp_path: Path) -> Path:
    """The user's applications directory (scanned last)."""
    directory = tmp_path / "home" / ".local" / "share" / "applications"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def write_manifest() -> WriteManifest:
    """Write a .desktop file; pass None for a key to leave it out."""

    def _write(
        directory: Path,
        file_name: str,
        *,
        name: str | None = "Firefox",
        exec_line: str | None = "firefox %u",
        icon: str | None = "firefox",
        categories: str | None = "Network;WebBrowser;",
    ) -> Path:
        lines = ["[Desktop Entry]", "Type=Application"]
        if name is not None:
            lines.append(f"Name={name}")
        if exec_line is not None:
            lines.append(f"Exec={exec_line}")
        if icon is not None:
            lines.append(f"Icon={icon}")
        if categories is not None:
            lines.append(f"Categories={categories}")
        path = directory / file_name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_handler() -> FakeDefaultBrowserHandler:
    """A handler reporting firefox.desktop as the default."""
    return FakeDefaultBrowserHandler(current_default="firefox.desktop")


@pytest.fixture
def fake_watcher() -> FakeChangeWatcher:
    """A watcher driven by simulate_event()."""
    return FakeChangeWatcher(debounce_seconds=0.01)


@pytest.fixture
def browsers_installed(
    system_apps: Path,
    user_apps: Path,
    write_manifest: WriteManifest,
) -> tuple[Path, ...]:
    """Firefox and Chromium installed system-wide; returns the scan directories."""
    write_manifest(system_apps, "firefox.desktop")
    write_manifest(
        system_apps,
        "chromium.desktop",
        name="Chromium",
        exec_line="/usr/bin/chromium %U",
        icon="chromium",
    )
    return (system_apps, user_apps)


@pytest.fixture
def switcher_context(
    browsers_installed: tuple[Path, ...],
    fake_handler: FakeDefaultBrowserHandler,
    fake_watcher: FakeChangeWatcher,
) -> SwitcherContext:
    """Context with two installed browsers and fake integrations."""
    return SwitcherContext.for_test(
        application_dirs=browsers_installed,
        default_handler=fake_handler,
        change_watcher=fake_watcher,
    )
