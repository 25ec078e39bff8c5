# ABOUTME: Provider settings shared read-only by every registered provider.
# ABOUTME: Holds credentials, the content filter flag, and the User-Agent identity.

from dataclasses import dataclass

from mediadb.metadata.http import DEFAULT_USER_AGENT

DEFAULT_CONTACT = "https://github.com/mediadb/mediadb"


@dataclass(frozen=True)
class ProviderSettings:
    """Static configuration read by providers; never mutated during a query.

    Attributes:
        omdb_api_key: API key for OMDb. Without it the OMDb provider raises
            ConfigurationError instead of calling the network.
        sfw_filter: Ask providers that support it to exclude adult content.
        date_format: strftime format for dates normalized into records.
        contact: Contact identity embedded in the User-Agent header.
    """

    omdb_api_key: str | None = None
    sfw_filter: bool = True
    date_format: str = "%Y-%m-%d"
    contact: str = DEFAULT_CONTACT

    @property
    def user_agent(self) -> str:
        """Descriptive User-Agent of the form "mediadb/0.1.0 (contact)"."""
        return f"{DEFAULT_USER_AGENT} ({self.contact})"
