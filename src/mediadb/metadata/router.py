# ABOUTME: QueryRouter fans a title query out to registered providers in order.
# ABOUTME: Also routes fetch-by-id to the provider that produced a record.

import logging
from collections.abc import Collection

from mediadb.metadata.errors import ConfigurationError
from mediadb.metadata.provider import MetadataProvider, covers_any
from mediadb.metadata.types import MediaRecord, MediaType

logger = logging.getLogger(__name__)


class QueryRouter:
    """Ordered registry of metadata providers.

    Providers are consulted one after another in registration order. Errors
    are not caught here: the first provider to fail aborts the whole query
    and results gathered from earlier providers are discarded.
    """

    def __init__(self) -> None:
        self._providers: list[MetadataProvider] = []

    @property
    def providers(self) -> tuple[MetadataProvider, ...]:
        return tuple(self._providers)

    def register(self, provider: MetadataProvider) -> None:
        """Append a provider; names must be unique within a router."""
        if any(existing.name == provider.name for existing in self._providers):
            raise ValueError(f"Provider {provider.name!r} is already registered")
        self._providers.append(provider)

    def get_provider(self, name: str) -> MetadataProvider:
        for provider in self._providers:
            if provider.name == name:
                return provider
        raise ConfigurationError(f"No provider named {name!r} is registered.")

    def query(
        self, text: str, kinds: Collection[MediaType] | None = None
    ) -> list[MediaRecord]:
        """Search every provider covering ``kinds`` (all providers when empty).

        Returns the concatenation of each participating provider's results,
        in provider order and in each provider's own result order.
        """
        kind_names = sorted(str(getattr(kind, "value", kind)) for kind in kinds or ())
        logger.debug("router queried for %r (kinds=%s)", text, kind_names)
        results: list[MediaRecord] = []
        for provider in self._providers:
            if not covers_any(provider, kinds):
                continue
            records = provider.search_by_title(text)
            logger.debug("%s returned %d result(s)", provider.name, len(records))
            results.extend(records)
        return results

    def fetch_by_id(self, data_source: str, record_id: str) -> MediaRecord:
        """Fetch the detailed record for ``record_id`` from the named provider."""
        return self.get_provider(data_source).fetch_by_id(record_id)
