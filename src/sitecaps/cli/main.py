"""CLI entry point and shared wiring for sitecaps."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from sitecaps.adapters.cache import FileCapabilityCache
from sitecaps.adapters.channel import ThreadedFetchChannel
from sitecaps.adapters.executor import ThreadPoolExecutorAdapter
from sitecaps.adapters.source import HttpCapabilitySource
from sitecaps.config import ResolverConfig, api_token, load_config
from sitecaps.core.exceptions import ConfigurationError, SitecapsError
from sitecaps.core.services import CapabilityResolver


if TYPE_CHECKING:
    from sitecaps.core.ports import CapabilitySourcePort


app = typer.Typer(
    name="sitecaps",
    help="Cached lookup of site capabilities and purchased products.",
    no_args_is_help=True,
)


def configure_logging() -> None:
    """Send debug logs to stderr via Rich."""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging.",
    ),
) -> None:
    """Cached lookup of site capabilities and purchased products."""
    if verbose:
        configure_logging()


def fail(error: SitecapsError) -> NoReturn:
    """Print a library error with its recovery hint and exit."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    raise typer.Exit(1)


def load_cli_config() -> ResolverConfig:
    """Load configuration for the current project or exit with an error."""
    try:
        return load_config()
    except ConfigurationError as e:
        fail(e)


def create_source(config: ResolverConfig) -> HttpCapabilitySource:
    """Create the remote capability source described by config."""
    return HttpCapabilitySource(base_url=config.api_base, token=api_token())


@contextmanager
def open_resolver(
    config: ResolverConfig,
    source: CapabilitySourcePort | None = None,
) -> Iterator[CapabilityResolver]:
    """Wire a resolver for one CLI invocation and release it afterwards.

    Args:
        config: Resolver settings.
        source: Capability source. Defaults to an HTTP source for
            config.api_base.

    Yields:
        A CapabilityResolver backed by a file cache and a threaded channel.
    """
    with ExitStack() as stack:
        if source is None:
            source = stack.enter_context(create_source(config))
        executor = stack.enter_context(
            ThreadPoolExecutorAdapter(max_workers=config.max_workers)
        )
        channel = ThreadedFetchChannel(source, executor)
        yield CapabilityResolver.from_config(
            config, channel, cache=FileCapabilityCache(config.cache_dir)
        )


def main() -> None:
    """Entry point for the CLI."""
    app()

