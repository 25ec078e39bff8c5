# ABOUTME: Shared Click options for mediadb CLI commands.
# ABOUTME: Provider settings (API key, SFW filter, contact) with environment variable fallbacks.

from collections.abc import Callable
from typing import Any

import click

from mediadb.metadata.config import DEFAULT_CONTACT, ProviderSettings

omdb_key_option = click.option(
    "--omdb-key",
    envvar="MEDIADB_OMDB_KEY",
    default=None,
    help="OMDb API key (env: MEDIADB_OMDB_KEY).",
)

sfw_option = click.option(
    "--sfw/--no-sfw",
    envvar="MEDIADB_SFW",
    default=True,
    help="Exclude adult results where the provider supports it (default: --sfw).",
)

contact_option = click.option(
    "--contact",
    envvar="MEDIADB_CONTACT",
    default=DEFAULT_CONTACT,
    show_default=True,
    help="Contact sent in the User-Agent header (env: MEDIADB_CONTACT).",
)


def settings_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Apply all provider settings options to a command."""
    return omdb_key_option(sfw_option(contact_option(func)))


def build_settings(omdb_key: str | None, sfw: bool, contact: str) -> ProviderSettings:
    return ProviderSettings(omdb_api_key=omdb_key or None, sfw_filter=sfw, contact=contact)
