"""Default browser handler backed by xdg-settings subprocesses."""

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from browser_switcher.integrations.default_handler.abc import DefaultBrowserHandler

logger = logging.getLogger(__name__)

DEFAULT_BROWSER_PROPERTY = "default-web-browser"
GSETTINGS_SCHEMA = "org.gnome.desktop.default-applications.web"
GSETTINGS_KEY = "browser"


@dataclass(frozen=True)
class CommandOutcome:
    """Result of a finished subprocess."""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


async def run_command(cmd: Sequence[str]) -> CommandOutcome | None:
    """Run a command without blocking the event loop.

    Args:
        cmd: Command and arguments to execute

    Returns:
        CommandOutcome once the process exits, or None if it could not be started
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (OSError, ValueError) as e:
        # ValueError: arguments the OS cannot pass, e.g. an embedded NUL byte
        logger.debug("Could not run %s: %s", cmd[0], e)
        return None

    try:
        stdout, stderr = await process.communicate()
    except asyncio.CancelledError:
        # Already exited if the lookup fails; wait() still reaps it
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()
        raise
    returncode = process.returncode if process.returncode is not None else -1
    return CommandOutcome(
        returncode=returncode,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
    )


def parse_gsettings_string(raw: str) -> str | None:
    """Unwrap a GVariant string as printed by `gsettings get` ("'firefox.desktop'")."""
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        value = value[1:-1]
    value = value.strip()
    if not value:
        return None
    return value


class RealDefaultBrowserHandler(DefaultBrowserHandler):
    """Production implementation using `xdg-settings`.

    Runs:
        xdg-settings get default-web-browser
        xdg-settings set default-web-browser <id>

    When gsettings_fallback is enabled and xdg-settings yields nothing, the
    GNOME default-applications schema is consulted as a last resort. It never
    overrides a value reported by xdg-settings.
    """

    def __init__(
        self,
        *,
        xdg_settings: str = "xdg-settings",
        gsettings_fallback: bool = False,
    ) -> None:
        """Create RealDefaultBrowserHandler.

        Args:
            xdg_settings: Name or path of the xdg-settings executable
            gsettings_fallback: Whether to query gsettings when xdg-settings has no answer
        """
        self._xdg_settings = xdg_settings
        self._gsettings_fallback = gsettings_fallback

    async def query_default(self) -> str | None:
        browser_id = await self._query_xdg_settings()
        if browser_id is not None:
            return browser_id

        if self._gsettings_fallback:
            return await self._query_gsettings()

        return None

    async def set_default(self, browser_id: str) -> bool:
        cmd = [self._xdg_settings, "set", DEFAULT_BROWSER_PROPERTY, browser_id]
        outcome = await run_command(cmd)
        if outcome is None:
            logger.warning("Failed to set default browser: could not run %s", self._xdg_settings)
            return False

        if not outcome.success:
            logger.warning(
                "Failed to set default browser to %s (exit code %d): %s",
                browser_id,
                outcome.returncode,
                outcome.stderr.strip(),
            )
            return False

        logger.info("Set default browser to %s", browser_id)
        return True

    async def _query_xdg_settings(self) -> str | None:
        outcome = await run_command([self._xdg_settings, "get", DEFAULT_BROWSER_PROPERTY])
        if outcome is None:
            return None

        if not outcome.success:
            logger.debug(
                "%s get %s exited with %d: %s",
                self._xdg_settings,
                DEFAULT_BROWSER_PROPERTY,
                outcome.returncode,
                outcome.stderr.strip(),
            )
            return None

        browser_id = outcome.stdout.strip()
        if not browser_id:
            return None
        return browser_id

    async def _query_gsettings(self) -> str | None:
        outcome = await run_command(["gsettings", "get", GSETTINGS_SCHEMA, GSETTINGS_KEY])
        # The schema is missing on most non-GNOME systems
        if outcome is None or not outcome.success:
            return None
        return parse_gsettings_string(outcome.stdout)
