# ABOUTME: Builds the default QueryRouter with every bundled provider registered.
# ABOUTME: Registration order is the order results appear in a mixed query.

from mediadb.metadata.config import ProviderSettings
from mediadb.metadata.googlebooks import GoogleBooksAPI
from mediadb.metadata.http import HttpClient, MediaDbHttpClient
from mediadb.metadata.jikan import MALAPI
from mediadb.metadata.mobygames import create_mobygames_provider
from mediadb.metadata.musicbrainz import MusicBrainzAPI
from mediadb.metadata.omdb import OMDbAPI
from mediadb.metadata.openlibrary import OpenLibraryAPI
from mediadb.metadata.router import QueryRouter
from mediadb.metadata.steam import SteamAPI


def build_router(
    settings: ProviderSettings | None = None, http_client: HttpClient | None = None
) -> QueryRouter:
    """Create a router with the default providers sharing one HTTP client."""
    settings = settings or ProviderSettings()
    http = http_client or MediaDbHttpClient(user_agent=settings.user_agent)

    router = QueryRouter()
    router.register(OMDbAPI(http, settings))
    router.register(MALAPI(http, settings))
    router.register(MusicBrainzAPI(http, settings))
    router.register(SteamAPI(http, settings))
    router.register(create_mobygames_provider())
    router.register(OpenLibraryAPI(http, settings))
    router.register(GoogleBooksAPI(http, settings))
    return router
