# ABOUTME: Exception taxonomy for provider configuration, upstream, and payload failures.
# ABOUTME: Everything the router's caller may see derives from MediaDbError.


class MediaDbError(Exception):
    """Base class for errors surfaced by the aggregation engine."""


class ConfigurationError(MediaDbError):
    """A provider cannot run with the current settings (e.g. missing API key).

    Raised before any network call is made.
    """


class ProviderError(MediaDbError):
    """An upstream provider answered with a failure.

    Covers non-success HTTP statuses, error payloads, transport failures, and
    entities that do not exist on fetch-by-id.
    """

    def __init__(self, provider: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code


class AuthenticationError(ProviderError):
    """The provider rejected our credentials (HTTP 401)."""


class MalformedResponseError(MediaDbError):
    """The upstream reported success but the payload is structurally invalid."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(message)
        self.provider = provider


class SecondaryFetchError(MediaDbError):
    """An optional enrichment request failed.

    Only raised and caught inside a provider's fetch_by_id; the fields it
    would have filled stay at their defaults.
    """
