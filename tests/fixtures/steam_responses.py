# ABOUTME: Canned Steam community search and store appdetails fixtures for testing.
# ABOUTME: appdetails payloads are keyed by app id as the real endpoint returns them.

SEARCH_RESPONSE = [
    {"appid": "620", "name": "Portal 2", "icon": "https://cdn/icon.jpg", "logo": "https://cdn/logo.jpg"},
    {"appid": "400", "name": "Portal"},
    {"name": "No app id"},
]

APP_DETAILS = {
    "type": "game",
    "name": "Portal 2",
    "steam_appid": 620,
    "short_description": "The &quot;Perpetual Testing Initiative&quot; has been expanded.",
    "header_image": "https://cdn.akamai.steamstatic.com/steam/apps/620/header.jpg",
    "developers": ["Valve"],
    "publishers": ["Valve"],
    "genres": [{"id": "1", "description": "Action"}, {"id": "25", "description": "Adventure"}],
    "metacritic": {"score": 95, "url": "https://www.metacritic.com/game/pc/portal-2"},
    "release_date": {"coming_soon": False, "date": "18 Apr, 2011"},
}

DETAILS_RESPONSE = {"620": {"success": True, "data": APP_DETAILS}}

UPCOMING_DETAILS_RESPONSE = {
    "999": {
        "success": True,
        "data": {
            "name": "Future Game",
            "steam_appid": 999,
            "release_date": {"coming_soon": True, "date": "Q4 2027"},
        },
    }
}

NOT_FOUND_RESPONSE = {"12345": {"success": False}}
