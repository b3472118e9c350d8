"""Tests for the browser-switcher watch command."""

import asyncio
from pathlib import Path

import pytest
from click.testing import CliRunner

from browser_switcher.cli.cli import cli
from browser_switcher.cli.commands.watch import watch_default_browser
from browser_switcher.core.context import SwitcherContext
from browser_switcher.integrations.change_watcher.fake import FakeChangeWatcher
from browser_switcher.integrations.default_handler.fake import FakeDefaultBrowserHandler


async def _wait_until_armed(watcher: FakeChangeWatcher) -> None:
    while not watcher.is_armed:
        await asyncio.sleep(0.001)


def test_watch_prints_initial_default(switcher_context: SwitcherContext) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["watch", "--max-changes", "0"], obj=switcher_context)

    assert result.exit_code == 0, result.output
    assert "Default browser: Firefox (firefox.desktop) [icon: firefox]" in result.output


def test_watch_prints_none_without_default(browsers_installed: tuple[Path, ...]) -> None:
    ctx = SwitcherContext.for_test(
        application_dirs=browsers_installed,
        default_handler=FakeDefaultBrowserHandler(),
    )
    runner = CliRunner()

    result = runner.invoke(cli, ["watch", "--max-changes", "0"], obj=ctx)

    assert result.exit_code == 0, result.output
    assert "Default browser: none" in result.output


def test_watch_rejects_negative_max_changes(switcher_context: SwitcherContext) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["watch", "--max-changes", "-1"], obj=switcher_context)

    assert result.exit_code == 2


async def test_watch_reports_external_changes(
    browsers_installed: tuple[Path, ...],
    fake_watcher: FakeChangeWatcher,
    capsys: pytest.CaptureFixture[str],
) -> None:
    handler = FakeDefaultBrowserHandler(
        query_results=["firefox.desktop", "chromium.desktop", "opera.desktop"]
    )
    ctx = SwitcherContext.for_test(
        application_dirs=browsers_installed,
        default_handler=handler,
        change_watcher=fake_watcher,
    )

    task = asyncio.create_task(watch_default_browser(ctx, max_changes=2))
    await asyncio.wait_for(_wait_until_armed(fake_watcher), timeout=1)

    fake_watcher.simulate_event()
    await asyncio.sleep(0.05)
    fake_watcher.simulate_event()
    changes = await asyncio.wait_for(task, timeout=1)

    assert changes == 2
    assert not fake_watcher.is_armed
    assert capsys.readouterr().err.splitlines() == [
        "Default browser: Firefox (firefox.desktop) [icon: firefox]",
        "Default browser: Chromium (chromium.desktop) [icon: chromium]",
        "Default browser: opera.desktop (not installed) [icon: web-browser]",
    ]


async def test_watch_cancellation_tears_down(
    switcher_context: SwitcherContext, fake_watcher: FakeChangeWatcher
) -> None:
    task = asyncio.create_task(watch_default_browser(switcher_context, max_changes=None))
    await asyncio.wait_for(_wait_until_armed(fake_watcher), timeout=1)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert not fake_watcher.is_armed
    assert fake_watcher.disarm_calls == 1
