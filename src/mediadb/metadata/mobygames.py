# ABOUTME: MobyGames provider, retired after its API stopped issuing free keys.
# ABOUTME: Registered as a DegradedProvider so existing game records keep a named source.

from mediadb.metadata.provider import DegradedProvider
from mediadb.metadata.types import MediaType


def create_mobygames_provider() -> DegradedProvider:
    """Inert MobyGames provider: empty searches, failing fetches."""
    return DegradedProvider(
        name="MobyGamesAPI",
        description="A free API for games.",
        base_url="https://api.mobygames.com/v1",
        covered_kinds={MediaType.GAME},
    )
