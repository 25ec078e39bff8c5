# ABOUTME: The `mediadb search` command for querying every matching provider.
# ABOUTME: Prints one table row per result in provider order.

import click
from rich.console import Console
from rich.table import Table

from mediadb.cli.options import build_settings, settings_options
from mediadb.metadata.errors import MediaDbError
from mediadb.metadata.http import MediaDbHttpClient
from mediadb.metadata.registry import build_router
from mediadb.metadata.types import MediaType


@click.command("search")
@click.argument("query")
@click.option(
    "-t",
    "--type",
    "kinds",
    multiple=True,
    type=click.Choice([media_type.value for media_type in MediaType]),
    help="Restrict to a media type; repeat for several (default: all).",
)
@settings_options
def search(
    query: str, kinds: tuple[str, ...], omdb_key: str | None, sfw: bool, contact: str
) -> None:
    """Search providers by title."""
    console = Console()
    settings = build_settings(omdb_key, sfw, contact)
    http = MediaDbHttpClient(user_agent=settings.user_agent)

    try:
        router = build_router(settings, http_client=http)
        results = router.query(query, [MediaType(kind) for kind in kinds])
    except MediaDbError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc
    finally:
        http.close()

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    table = Table()
    table.add_column("#", style="dim", width=3)
    table.add_column("Type")
    table.add_column("Title", style="bold")
    table.add_column("Year", width=4)
    table.add_column("Source")
    table.add_column("ID", style="dim")
    table.add_column("Summary")

    for i, record in enumerate(results, start=1):
        table.add_row(
            str(i),
            record.kind.value,
            record.title,
            record.year or "?",
            record.data_source,
            record.id,
            record.summary(),
        )

    console.print(table)
    console.print(f"\n[dim]{len(results)} result(s)[/dim]")
