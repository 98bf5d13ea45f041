"""Products command for CLI."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.table import Table

from sitecaps.cli.formatting import format_flag
from sitecaps.cli.main import app, fail, load_cli_config, open_resolver
from sitecaps.core.exceptions import SitecapsError


if TYPE_CHECKING:
    from sitecaps.core.models import PurchasedProducts
    from sitecaps.core.services import CapabilityResolver


async def _collect(
    resolver: CapabilityResolver, site_id: int, mode: str
) -> list[tuple[str, PurchasedProducts]]:
    """Run the requested lookup and label each result with where it came from."""
    if mode == "cached":
        return [("cached", resolver.get_cached_products(site_id))]
    if mode == "refresh":
        return [("fetched", await resolver.fetch_products(site_id))]

    rows = []
    async for flags in resolver.observe_products(site_id):
        rows.append(("cached" if not rows else "fetched", flags))
    return rows


@app.command()
def products(
    site_id: int = typer.Argument(..., help="Remote site ID."),
    refresh: bool = typer.Option(
        False,
        "--refresh",
        "-r",
        help="Always fetch from the remote, even if the cache is fresh.",
    ),
    cached: bool = typer.Option(
        False,
        "--cached",
        help="Only read the cache; never fetch.",
    ),
) -> None:
    """Show purchased products (scan, backup) for a site."""
    if refresh and cached:
        typer.echo("Error: --refresh and --cached are mutually exclusive", err=True)
        raise typer.Exit(2)
    mode = "refresh" if refresh else "cached" if cached else "observe"

    config = load_cli_config()
    try:
        with open_resolver(config) as resolver:
            rows = asyncio.run(_collect(resolver, site_id, mode))
    except SitecapsError as e:
        fail(e)

    table = Table(title=f"Site {site_id}")
    table.add_column("Source")
    table.add_column("Scan")
    table.add_column("Backup")
    for label, result in rows:
        table.add_row(label, format_flag(result.scan), format_flag(result.backup))

    console = Console(force_terminal=True)
    console.print(table)
