"""Application context with dependency injection."""

from dataclasses import dataclass
from pathlib import Path

from browser_switcher.core.config import SwitcherConfig, load_config
from browser_switcher.core.scanner import ManifestScanner
from browser_switcher.integrations.change_watcher.abc import ChangeWatcher
from browser_switcher.integrations.change_watcher.fake import FakeChangeWatcher
from browser_switcher.integrations.change_watcher.real import RealChangeWatcher
from browser_switcher.integrations.default_handler.abc import DefaultBrowserHandler
from browser_switcher.integrations.default_handler.dry_run import DryRunDefaultBrowserHandler
from browser_switcher.integrations.default_handler.fake import FakeDefaultBrowserHandler
from browser_switcher.integrations.default_handler.real import RealDefaultBrowserHandler


@dataclass(frozen=True)
class SwitcherContext:
    """Immutable context holding all dependencies of the browser registry.

    Created at the CLI entry point and threaded through the application.
    Use for_test() to build one from fakes.
    """

    config: SwitcherConfig
    scanner: ManifestScanner
    default_handler: DefaultBrowserHandler
    change_watcher: ChangeWatcher
    dry_run: bool

    @classmethod
    def for_test(
        cls,
        *,
        application_dirs: tuple[Path, ...] = (),
        default_handler: DefaultBrowserHandler | None = None,
        change_watcher: ChangeWatcher | None = None,
        dry_run: bool = False,
    ) -> "SwitcherContext":
        """Create a test context with fake implementations.

        Args:
            application_dirs: Directories the scanner reads (usually under tmp_path)
            default_handler: Handler to use, FakeDefaultBrowserHandler() if None
            change_watcher: Watcher to use, FakeChangeWatcher() if None
            dry_run: Value of the dry_run flag

        Returns:
            SwitcherContext wired with fakes
        """
        config = SwitcherConfig(
            application_dirs=application_dirs,
            mimeapps_path=Path("/nonexistent/mimeapps.list"),
        )
        return cls(
            config=config,
            scanner=ManifestScanner(application_dirs),
            default_handler=default_handler or FakeDefaultBrowserHandler(),
            change_watcher=change_watcher or FakeChangeWatcher(),
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool, config: SwitcherConfig | None = None) -> SwitcherContext:
    """Create the production context.

    Args:
        dry_run: If True, changing the default browser only prints what would happen
        config: Configuration to use, loaded from the environment if None

    Returns:
        SwitcherContext wired with real implementations

    Raises:
        ValueError: If the configuration file is invalid
    """
    if config is None:
        config = load_config()

    default_handler: DefaultBrowserHandler = RealDefaultBrowserHandler(
        xdg_settings=config.xdg_settings,
        gsettings_fallback=config.gsettings_fallback,
    )
    if dry_run:
        default_handler = DryRunDefaultBrowserHandler(default_handler)

    return SwitcherContext(
        config=config,
        scanner=ManifestScanner(config.application_dirs),
        default_handler=default_handler,
        change_watcher=RealChangeWatcher(
            config.mimeapps_path,
            debounce_seconds=config.debounce_seconds,
        ),
        dry_run=dry_run,
    )
