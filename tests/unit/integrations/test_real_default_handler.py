"""Tests for RealDefaultBrowserHandler with mocked subprocess execution.

These tests verify that RealDefaultBrowserHandler runs the right xdg-settings
and gsettings commands and interprets their output. We use pytest monkeypatch
to replace asyncio.create_subprocess_exec.
"""

import asyncio
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import pytest
from pytest import MonkeyPatch

from browser_switcher.core.context import SwitcherContext
from browser_switcher.core.registry import BrowserRegistry
from browser_switcher.integrations.default_handler.real import (
    CommandOutcome,
    RealDefaultBrowserHandler,
    parse_gsettings_string,
    run_command,
)

XDG_GET = ("xdg-settings", "get", "default-web-browser")
GSETTINGS_GET = ("gsettings", "get", "org.gnome.desktop.default-applications.web", "browser")


class FakeProcess:
    """Stands in for asyncio.subprocess.Process."""

    def __init__(self, returncode: int, stdout: str = "", stderr: str = "") -> None:
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr

    async def communicate(self) -> tuple[bytes, bytes]:
        return self._stdout.encode(), self._stderr.encode()


@contextmanager
def mock_subprocesses(
    monkeypatch: MonkeyPatch,
    responses: dict[tuple[str, ...], FakeProcess | OSError],
) -> Iterator[list[tuple[str, ...]]]:
    """Answer commands from responses; unknown commands behave as not installed.

    Yields the list of commands that were started.
    """
    commands: list[tuple[str, ...]] = []

    async def fake_exec(*cmd: str, **kwargs: object) -> FakeProcess:
        commands.append(cmd)
        response = responses.get(cmd, FileNotFoundError(2, "No such file", cmd[0]))
        if isinstance(response, OSError):
            raise response
        return response

    with monkeypatch.context() as m:
        m.setattr(asyncio, "create_subprocess_exec", fake_exec)
        yield commands


class TestQueryDefault:
    """Tests for RealDefaultBrowserHandler.query_default."""

    async def test_returns_trimmed_stdout(self, monkeypatch: MonkeyPatch) -> None:
        responses = {XDG_GET: FakeProcess(0, "firefox.desktop\n")}

        with mock_subprocesses(monkeypatch, responses) as commands:
            result = await RealDefaultBrowserHandler().query_default()

        assert result == "firefox.desktop"
        assert commands == [XDG_GET]

    async def test_empty_output_means_no_default(self, monkeypatch: MonkeyPatch) -> None:
        responses = {XDG_GET: FakeProcess(0, "  \n")}

        with mock_subprocesses(monkeypatch, responses):
            assert await RealDefaultBrowserHandler().query_default() is None

    async def test_non_zero_exit_means_no_default(self, monkeypatch: MonkeyPatch) -> None:
        responses = {XDG_GET: FakeProcess(1, "", "xdg-settings: unknown desktop environment\n")}

        with mock_subprocesses(monkeypatch, responses):
            assert await RealDefaultBrowserHandler().query_default() is None

    async def test_missing_utility_means_no_default(self, monkeypatch: MonkeyPatch) -> None:
        with mock_subprocesses(monkeypatch, {}) as commands:
            assert await RealDefaultBrowserHandler().query_default() is None

        # Fallback is off by default
        assert commands == [XDG_GET]

    async def test_custom_executable(self, monkeypatch: MonkeyPatch) -> None:
        cmd = ("/opt/bin/xdg-settings", "get", "default-web-browser")
        responses = {cmd: FakeProcess(0, "chromium.desktop\n")}

        with mock_subprocesses(monkeypatch, responses):
            handler = RealDefaultBrowserHandler(xdg_settings="/opt/bin/xdg-settings")
            assert await handler.query_default() == "chromium.desktop"


class TestGsettingsFallback:
    """Tests for the optional gsettings fallback."""

    async def test_used_when_xdg_settings_has_no_answer(
        self, monkeypatch: MonkeyPatch
    ) -> None:
        responses = {
            XDG_GET: FakeProcess(0, ""),
            GSETTINGS_GET: FakeProcess(0, "'firefox.desktop'\n"),
        }

        with mock_subprocesses(monkeypatch, responses) as commands:
            result = await RealDefaultBrowserHandler(gsettings_fallback=True).query_default()

        assert result == "firefox.desktop"
        assert commands == [XDG_GET, GSETTINGS_GET]

    async def test_never_overrides_xdg_settings(self, monkeypatch: MonkeyPatch) -> None:
        responses = {
            XDG_GET: FakeProcess(0, "chromium.desktop\n"),
            GSETTINGS_GET: FakeProcess(0, "'firefox.desktop'\n"),
        }

        with mock_subprocesses(monkeypatch, responses) as commands:
            result = await RealDefaultBrowserHandler(gsettings_fallback=True).query_default()

        assert result == "chromium.desktop"
        assert commands == [XDG_GET]

    async def test_missing_schema_means_no_default(self, monkeypatch: MonkeyPatch) -> None:
        responses = {
            XDG_GET: FakeProcess(1),
            GSETTINGS_GET: FakeProcess(1, "", "No such schema\n"),
        }

        with mock_subprocesses(monkeypatch, responses):
            assert await RealDefaultBrowserHandler(gsettings_fallback=True).query_default() is None

    async def test_empty_gsettings_value(self, monkeypatch: MonkeyPatch) -> None:
        responses = {XDG_GET: FakeProcess(0, ""), GSETTINGS_GET: FakeProcess(0, "''\n")}

        with mock_subprocesses(monkeypatch, responses):
            assert await RealDefaultBrowserHandler(gsettings_fallback=True).query_default() is None


class TestSetDefault:
    """Tests for RealDefaultBrowserHandler.set_default."""

    async def test_runs_xdg_settings_set(self, monkeypatch: MonkeyPatch) -> None:
        cmd = ("xdg-settings", "set", "default-web-browser", "chromium.desktop")

        with mock_subprocesses(monkeypatch, {cmd: FakeProcess(0)}) as commands:
            assert await RealDefaultBrowserHandler().set_default("chromium.desktop") is True

        assert commands == [cmd]

    async def test_non_zero_exit_is_failure(
        self, monkeypatch: MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        cmd = ("xdg-settings", "set", "default-web-browser", "bogus.desktop")
        responses = {cmd: FakeProcess(2, "", "xdg-settings: invalid application\n")}

        with mock_subprocesses(monkeypatch, responses):
            assert await RealDefaultBrowserHandler().set_default("bogus.desktop") is False

        assert "invalid application" in caplog.text

    async def test_missing_utility_is_failure(self, monkeypatch: MonkeyPatch) -> None:
        with mock_subprocesses(monkeypatch, {}):
            assert await RealDefaultBrowserHandler().set_default("firefox.desktop") is False

    async def test_id_with_nul_byte_is_failure(self) -> None:
        """Arguments the OS rejects are a failure result, not an exception."""
        handler = RealDefaultBrowserHandler(xdg_settings=sys.executable)

        assert await handler.set_default("fire\x00fox.desktop") is False

    async def test_registry_set_with_nul_byte_returns_false(self) -> None:
        ctx = SwitcherContext.for_test(
            default_handler=RealDefaultBrowserHandler(xdg_settings=sys.executable)
        )

        assert await BrowserRegistry(ctx).set_default("fire\x00fox.desktop") is False


class TestRunCommand:
    """Tests for run_command against real processes."""

    async def test_captures_output_and_exit_code(self) -> None:
        script = "import sys; print('out'); print('err', file=sys.stderr); sys.exit(3)"

        outcome = await run_command([sys.executable, "-c", script])

        assert outcome == CommandOutcome(returncode=3, stdout="out\n", stderr="err\n")
        assert not outcome.success

    async def test_success(self) -> None:
        outcome = await run_command([sys.executable, "-c", "pass"])

        assert outcome is not None
        assert outcome.success

    async def test_missing_executable_returns_none(self) -> None:
        assert await run_command(["browser-switcher-no-such-command-xyz"]) is None

    async def test_embedded_nul_byte_returns_none(self) -> None:
        assert await run_command([sys.executable, "-c", "pass", "a\x00b"]) is None

    async def test_cancellation_kills_and_reaps_child(self, monkeypatch: MonkeyPatch) -> None:
        started: list[asyncio.subprocess.Process] = []
        real_exec = asyncio.create_subprocess_exec

        async def recording_exec(*cmd: str, **kwargs: Any) -> asyncio.subprocess.Process:
            process = await real_exec(*cmd, **kwargs)
            started.append(process)
            return process

        monkeypatch.setattr(asyncio, "create_subprocess_exec", recording_exec)
        task = asyncio.create_task(
            run_command([sys.executable, "-c", "import time; time.sleep(30)"])
        )
        while not started:
            await asyncio.sleep(0.01)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await asyncio.wait_for(task, timeout=10)

        assert started[0].returncode is not None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("'firefox.desktop'\n", "firefox.desktop"),
        ('"firefox.desktop"', "firefox.desktop"),
        ("firefox.desktop", "firefox.desktop"),
        ("''", None),
        ("", None),
    ],
)
def test_parse_gsettings_string(raw: str, expected: str | None) -> None:
    assert parse_gsettings_string(raw) == expected
