"""Configuration utilities for sitecaps.

Settings live in the ``[tool.sitecaps]`` table of the project's
pyproject.toml. Every key is optional:

    [tool.sitecaps]
    cache_dir = "data/capabilities"
    validity_minutes = 15
    fetch_timeout = 10.0
    match_site_id = true
    api_base = "https://public-api.wordpress.com/wpcom/v2"
    max_workers = 1

The API token is read from the SITECAPS_TOKEN environment variable and
never from the file.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from datetime import timedelta
from pathlib import Path
from typing import Any

from sitecaps.adapters.source.http import DEFAULT_API_BASE
from sitecaps.core.exceptions import ConfigurationError
from sitecaps.core.freshness import DEFAULT_VALIDITY_WINDOW


TOKEN_ENV_VAR = "SITECAPS_TOKEN"


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Settings for wiring a CapabilityResolver.

    Attributes:
        validity_window: How long cached capabilities count as fresh.
        fetch_timeout: Seconds to wait for a remote result, or None to wait
            indefinitely.
        match_site_id: Drop results whose site differs from the pending fetch.
        cache_dir: Directory for the file cache.
        api_base: Root URL of the capabilities API.
        max_workers: Worker threads used by the fetch channel.
    """

    validity_window: timedelta = DEFAULT_VALIDITY_WINDOW
    fetch_timeout: float | None = None
    match_site_id: bool = True
    cache_dir: Path = field(default_factory=lambda: Path("data"))
    api_base: str = DEFAULT_API_BASE
    max_workers: int = 1

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.validity_window <= timedelta(0):
            raise ConfigurationError("validity window must be positive")
        if self.fetch_timeout is not None and self.fetch_timeout <= 0:
            raise ConfigurationError("fetch_timeout must be positive")
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")


def find_project_root(start: Path | None = None) -> Path:
    """Find the project root directory by walking up from start directory.

    Searches for marker files in the following priority order:
    1. .sitecaps - Explicit project marker
    2. pyproject.toml - Python project root
    3. .git - Version control root

    Args:
        start: Directory to start searching from. If None, uses current directory.

    Returns:
        Path to project root directory. Returns start directory if no markers found.
    """
    if start is None:
        start = Path.cwd()

    markers = [".sitecaps", "pyproject.toml", ".git"]
    current = start.resolve()

    for parent in [current, *current.parents]:
        for marker in markers:
            if (parent / marker).exists():
                return parent

    return start.resolve()


def _parse_settings(settings: dict[str, Any], root: Path) -> ResolverConfig:
    known = {
        "cache_dir",
        "validity_minutes",
        "fetch_timeout",
        "match_site_id",
        "api_base",
        "max_workers",
    }
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown [tool.sitecaps] settings: {', '.join(unknown)}"
        )

    config = ResolverConfig(cache_dir=root / "data")
    try:
        if "cache_dir" in settings:
            cache_dir = Path(settings["cache_dir"])
            if not cache_dir.is_absolute():
                cache_dir = root / cache_dir
            config = replace(config, cache_dir=cache_dir)
        if "validity_minutes" in settings:
            config = replace(
                config,
                validity_window=timedelta(minutes=float(settings["validity_minutes"])),
            )
        if "fetch_timeout" in settings:
            config = replace(config, fetch_timeout=float(settings["fetch_timeout"]))
        if "match_site_id" in settings:
            if not isinstance(settings["match_site_id"], bool):
                raise ConfigurationError("match_site_id must be true or false")
            config = replace(config, match_site_id=settings["match_site_id"])
        if "api_base" in settings:
            config = replace(config, api_base=str(settings["api_base"]))
        if "max_workers" in settings:
            config = replace(config, max_workers=int(settings["max_workers"]))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid [tool.sitecaps] setting: {e}") from e
    return config


def load_config(root: Path | None = None) -> ResolverConfig:
    """Load resolver settings from the project's pyproject.toml.

    Args:
        root: Project root. If None, discovered with find_project_root().

    Returns:
        ResolverConfig with file settings applied over the defaults. The
        default cache_dir is ``<root>/data``.

    Raises:
        ConfigurationError: If pyproject.toml is unreadable or a setting is
            unknown or invalid.
    """
    if root is None:
        root = find_project_root()

    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return ResolverConfig(cache_dir=root / "data")

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Cannot parse {pyproject}: {e}") from e

    settings = data.get("tool", {}).get("sitecaps", {})
    if not isinstance(settings, dict):
        raise ConfigurationError("[tool.sitecaps] must be a table")
    return _parse_settings(settings, root)


def api_token() -> str | None:
    """Return the API token from the environment, if set."""
    return os.environ.get(TOKEN_ENV_VAR) or None
