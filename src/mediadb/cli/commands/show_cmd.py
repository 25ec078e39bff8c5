# ABOUTME: The `mediadb show` command for fetching one detailed record.
# ABOUTME: Routes to the named provider and prints every field, or JSON with --json.

import json

import click
from rich.console import Console
from rich.table import Table

from mediadb.cli.options import build_settings, settings_options
from mediadb.metadata.errors import MediaDbError
from mediadb.metadata.http import MediaDbHttpClient
from mediadb.metadata.registry import build_router


def _format_value(value: object) -> str:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value) or "[dim]none[/dim]"
    if value in ("", None):
        return "[dim]none[/dim]"
    return str(value)


@click.command("show")
@click.argument("source")
@click.argument("record_id")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the record as JSON.")
@settings_options
def show(
    source: str,
    record_id: str,
    as_json: bool,
    omdb_key: str | None,
    sfw: bool,
    contact: str,
) -> None:
    """Fetch full details for RECORD_ID from the provider named SOURCE."""
    console = Console()
    settings = build_settings(omdb_key, sfw, contact)
    http = MediaDbHttpClient(user_agent=settings.user_agent)

    try:
        router = build_router(settings, http_client=http)
        record = router.fetch_by_id(source, record_id)
    except MediaDbError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc
    finally:
        http.close()

    data = record.to_dict()
    if as_json:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    data.pop("user_data", None)
    table = Table(title=record.title, show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=18)
    table.add_column("Value")
    for field_name, value in data.items():
        table.add_row(field_name, _format_value(value))

    console.print(table)
