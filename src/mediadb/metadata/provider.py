# ABOUTME: MetadataProvider protocol defining the contract for media metadata sources.
# ABOUTME: Also provides DegradedProvider, the inert stand-in for retired integrations.

import logging
from collections.abc import Collection
from typing import Any, Protocol, runtime_checkable

from mediadb.metadata.errors import AuthenticationError, MalformedResponseError, ProviderError
from mediadb.metadata.http import HttpClient, MetadataFetchError
from mediadb.metadata.types import MediaRecord, MediaType

logger = logging.getLogger(__name__)


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for metadata lookup services.

    Implementations search an upstream catalog by title, returning partial
    records, and fetch one fully detailed record by the provider-scoped id.
    ``covered_kinds`` declares which media kinds the provider can produce and
    is what the router dispatches on.
    """

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def base_url(self) -> str: ...

    @property
    def covered_kinds(self) -> frozenset[MediaType]: ...

    def search_by_title(self, query: str) -> list[MediaRecord]: ...

    def fetch_by_id(self, record_id: str) -> MediaRecord: ...


def covers_any(provider: MetadataProvider, kinds: Collection[MediaType] | None) -> bool:
    """Whether a provider should take part in a query for ``kinds``.

    An empty or missing selection means every kind is wanted.
    """
    if not kinds:
        return True
    return not provider.covered_kinds.isdisjoint(kinds)


class DegradedProvider:
    """A provider kept registered after its upstream integration was retired.

    Searches always come back empty and fetches always fail, so retirement is
    a matter of registration rather than special cases in the router.
    """

    def __init__(
        self,
        name: str,
        description: str,
        base_url: str,
        covered_kinds: Collection[MediaType],
    ) -> None:
        if not covered_kinds:
            raise ValueError("covered_kinds must not be empty")
        self._name = name
        self._description = description
        self._base_url = base_url
        self._covered_kinds = frozenset(covered_kinds)

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def covered_kinds(self) -> frozenset[MediaType]:
        return self._covered_kinds

    def search_by_title(self, query: str) -> list[MediaRecord]:
        logger.debug("%s is retired, returning no results for %r", self._name, query)
        return []

    def fetch_by_id(self, record_id: str) -> MediaRecord:
        raise ProviderError(self._name, f"{self._name} is no longer supported.")


def request_json(
    http: HttpClient,
    provider: str,
    url: str,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> Any:
    """GET a JSON document on behalf of ``provider``.

    Translates low-level fetch failures into the provider-facing taxonomy:
    401 becomes AuthenticationError, a 200 whose body is not JSON becomes
    MalformedResponseError, and every other failure a ProviderError carrying
    the HTTP status (None when no response arrived).
    """
    try:
        return http.get(url, params=params, headers=headers)
    except MetadataFetchError as exc:
        if exc.status_code == 200:
            raise MalformedResponseError(
                provider, f"{provider} returned a body that is not valid JSON."
            ) from exc
        if exc.status_code == 401:
            raise AuthenticationError(
                provider,
                f"Authentication for {provider} failed. Check the API key.",
                status_code=401,
            ) from exc
        if exc.status_code is None:
            message = f"Request to {provider} failed: {exc}"
        else:
            message = f"Received status code {exc.status_code} from {provider}."
        raise ProviderError(provider, message, status_code=exc.status_code) from exc
