"""Status and clear commands for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from sitecaps.adapters.cache import FileCapabilityCache
from sitecaps.adapters.clock import SystemClock
from sitecaps.cli.formatting import format_capabilities, format_state
from sitecaps.cli.main import app, fail, load_cli_config
from sitecaps.core.exceptions import SitecapsError
from sitecaps.core.freshness import freshness_state
from sitecaps.core.models import EMPTY_CAPABILITIES


@app.command()
def status(
    site_ids: list[int] | None = typer.Argument(
        None,
        help="Sites to show. Defaults to every cached site.",
    ),
) -> None:
    """Show cache state (fresh/stale/missing) and capabilities per site."""
    config = load_cli_config()
    cache = FileCapabilityCache(config.cache_dir)
    targets = site_ids or cache.list_site_ids()

    if not targets:
        typer.echo("No cached sites. Run 'sitecaps products SITE_ID' to fetch one.")
        return

    now = SystemClock().now()
    table = Table()
    table.add_column("Site")
    table.add_column("Status")
    table.add_column("Capabilities")

    for site_id in targets:
        try:
            entry = cache.get(site_id)
        except SitecapsError as e:
            fail(e)
        state = freshness_state(entry, now, config.validity_window)
        capabilities = entry.capabilities if entry is not None else EMPTY_CAPABILITIES
        table.add_row(
            str(site_id), format_state(state), format_capabilities(capabilities)
        )

    console = Console(force_terminal=True)
    console.print(table)


@app.command()
def clear(
    site_ids: list[int] = typer.Argument(..., help="Sites to remove from the cache."),
) -> None:
    """Remove cached capabilities for one or more sites."""
    config = load_cli_config()
    cache = FileCapabilityCache(config.cache_dir)
    for site_id in site_ids:
        cache.clear(site_id)
        typer.echo(f"Cleared site {site_id}")
