# ABOUTME: Metadata package: canonical media records, providers, and the query router.
# ABOUTME: Exports the types and entry points the host layer works with.

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.errors import (
    AuthenticationError,
    ConfigurationError,
    MalformedResponseError,
    MediaDbError,
    ProviderError,
)
from mediadb.metadata.migration import migrate_object
from mediadb.metadata.provider import DegradedProvider, MetadataProvider
from mediadb.metadata.registry import build_router
from mediadb.metadata.router import QueryRouter
from mediadb.metadata.types import MediaRecord, MediaType, record_from_dict

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "DegradedProvider",
    "MalformedResponseError",
    "MediaDbError",
    "MediaRecord",
    "MediaType",
    "MetadataProvider",
    "ProviderError",
    "ProviderSettings",
    "QueryRouter",
    "build_router",
    "migrate_object",
    "record_from_dict",
]
