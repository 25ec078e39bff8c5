# ABOUTME: The `mediadb providers` command listing registered metadata providers.
# ABOUTME: Shows each provider's name, covered media types, and description.

import click
from rich.console import Console
from rich.table import Table

from mediadb.metadata.http import MediaDbHttpClient
from mediadb.metadata.registry import build_router


@click.command("providers")
def providers() -> None:
    """List registered providers in query order."""
    console = Console()
    http = MediaDbHttpClient()
    try:
        router = build_router(http_client=http)
    finally:
        http.close()

    table = Table()
    table.add_column("Name", style="bold")
    table.add_column("Types")
    table.add_column("Description")

    for provider in router.providers:
        kinds = ", ".join(sorted(kind.value for kind in provider.covered_kinds))
        table.add_row(provider.name, kinds, provider.description)

    console.print(table)
