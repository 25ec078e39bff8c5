# ABOUTME: The `mediadb migrate` command for upgrading previously saved records.
# ABOUTME: Loads a legacy JSON object and prints it in the current record shape.

import json
from pathlib import Path

import click
from rich.console import Console

from mediadb.metadata.types import MediaType, record_from_dict


@click.command("migrate")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-t",
    "--type",
    "kind",
    type=click.Choice([media_type.value for media_type in MediaType]),
    default=None,
    help="Media type, when the saved object does not record one.",
)
def migrate(path: Path, kind: str | None) -> None:
    """Upgrade a saved record in PATH (JSON) to the current schema."""
    console = Console()
    try:
        legacy = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        console.print(f"[red]Error:[/red] cannot read {path}: {exc}")
        raise SystemExit(1) from exc

    if not isinstance(legacy, dict):
        console.print(f"[red]Error:[/red] {path} does not contain a JSON object")
        raise SystemExit(1)

    try:
        record = record_from_dict(legacy, kind)
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    click.echo(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
