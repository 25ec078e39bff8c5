# ABOUTME: CLI package for mediadb, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click
from rich.logging import RichHandler

from mediadb.cli.commands import migrate_cmd, providers_cmd, search_cmd, show_cmd


@click.group()
@click.version_option(package_name="mediadb")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log provider requests.")
def cli(verbose: bool) -> None:
    """mediadb - search movies, series, games, anime, music, and books."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


cli.add_command(search_cmd.search)
cli.add_command(show_cmd.show)
cli.add_command(providers_cmd.providers)
cli.add_command(migrate_cmd.migrate)
