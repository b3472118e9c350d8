"""Configuration derived from the XDG base directories.

Paths follow the XDG Base Directory Specification. A few tuning knobs can be
set in $XDG_CONFIG_HOME/browser-switcher/config.toml:

    debounce_ms = 250
    xdg_settings = "xdg-settings"
    gsettings_fallback = false
    extra_application_dirs = ["/opt/browsers/share/applications"]
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_DEBOUNCE_SECONDS = 0.25
DEFAULT_XDG_DATA_DIRS = "/usr/local/share:/usr/share"
MIMEAPPS_FILE_NAME = "mimeapps.list"
CONFIG_DIR_NAME = "browser-switcher"
CONFIG_FILE_NAME = "config.toml"


@dataclass(frozen=True)
class SwitcherConfig:
    """Immutable configuration, loaded once at the entry point."""

    application_dirs: tuple[Path, ...]
    mimeapps_path: Path
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    xdg_settings: str = "xdg-settings"
    gsettings_fallback: bool = False


def _absolute_or_none(value: str | None) -> Path | None:
    """XDG values must be absolute; relative ones are ignored."""
    if not value:
        return None
    path = Path(value)
    if not path.is_absolute():
        return None
    return path


def _home(environ: Mapping[str, str]) -> Path:
    home = environ.get("HOME")
    if home:
        return Path(home)
    return Path.home()


def xdg_config_home(environ: Mapping[str, str]) -> Path:
    configured = _absolute_or_none(environ.get("XDG_CONFIG_HOME"))
    if configured is not None:
        return configured
    return _home(environ) / ".config"


def xdg_data_home(environ: Mapping[str, str]) -> Path:
    configured = _absolute_or_none(environ.get("XDG_DATA_HOME"))
    if configured is not None:
        return configured
    return _home(environ) / ".local" / "share"


def xdg_data_dirs(environ: Mapping[str, str]) -> list[Path]:
    raw = environ.get("XDG_DATA_DIRS") or DEFAULT_XDG_DATA_DIRS
    dirs = [_absolute_or_none(part) for part in raw.split(":")]
    return [d for d in dirs if d is not None]


def application_dirs(environ: Mapping[str, str]) -> list[Path]:
    """Application manifest directories: system data dirs first, then the user's.

    Duplicates are removed, keeping the first occurrence.
    """
    candidates = [d / "applications" for d in xdg_data_dirs(environ)]
    candidates.append(xdg_data_home(environ) / "applications")
    return _unique(candidates)


def config_file_path(environ: Mapping[str, str]) -> Path:
    return xdg_config_home(environ) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _unique(paths: list[Path]) -> list[Path]:
    seen: set[Path] = set()
    result: list[Path] = []
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        result.append(path)
    return result


def _read_overrides(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in {path}: {e}") from e


def load_config(environ: Mapping[str, str] | None = None) -> SwitcherConfig:
    """Build the configuration from the environment and the optional config file.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        SwitcherConfig with resolved paths

    Raises:
        ValueError: If the config file is malformed or has values of the wrong type
    """
    if environ is None:
        environ = os.environ

    path = config_file_path(environ)
    data = _read_overrides(path)

    dirs = application_dirs(environ)
    extra = data.get("extra_application_dirs", [])
    if not isinstance(extra, list) or not all(isinstance(item, str) for item in extra):
        raise ValueError(f"'extra_application_dirs' must be a list of strings in {path}")
    dirs = _unique(dirs + [Path(item).expanduser() for item in extra])

    debounce_ms = data.get("debounce_ms", DEFAULT_DEBOUNCE_SECONDS * 1000)
    if isinstance(debounce_ms, bool) or not isinstance(debounce_ms, int | float):
        raise ValueError(f"'debounce_ms' must be a number in {path}")
    if debounce_ms < 0:
        raise ValueError(f"'debounce_ms' must not be negative in {path}")

    xdg_settings = data.get("xdg_settings", "xdg-settings")
    if not isinstance(xdg_settings, str) or not xdg_settings:
        raise ValueError(f"'xdg_settings' must be a non-empty string in {path}")

    gsettings_fallback = data.get("gsettings_fallback", False)
    if not isinstance(gsettings_fallback, bool):
        raise ValueError(f"'gsettings_fallback' must be true or false in {path}")

    return SwitcherConfig(
        application_dirs=tuple(dirs),
        mimeapps_path=xdg_config_home(environ) / MIMEAPPS_FILE_NAME,
        debounce_seconds=debounce_ms / 1000,
        xdg_settings=xdg_settings,
        gsettings_fallback=gsettings_fallback,
    )
