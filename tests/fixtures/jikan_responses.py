# ABOUTME: Canned Jikan (MyAnimeList) v4 API response fixtures for testing.
# ABOUTME: Anime objects shaped like /anime search and /anime/{id}/full payloads.

COWBOY_BEBOP = {
    "mal_id": 1,
    "url": "https://myanimelist.net/anime/1/Cowboy_Bebop",
    "images": {
        "jpg": {
            "image_url": "https://cdn.myanimelist.net/images/anime/4/19644.jpg",
            "large_image_url": "https://cdn.myanimelist.net/images/anime/4/19644l.jpg",
        }
    },
    "title": "Cowboy Bebop",
    "title_english": "Cowboy Bebop",
    "episodes": 26,
    "status": "Finished Airing",
    "airing": False,
    "aired": {
        "from": "1998-04-03T00:00:00+00:00",
        "to": "1999-04-24T00:00:00+00:00",
        "prop": {"from": {"day": 3, "month": 4, "year": 1998}},
    },
    "duration": "24 min per ep",
    "score": 8.75,
    "synopsis": "Crime is timeless.",
    "year": 1998,
    "studios": [{"mal_id": 14, "name": "Sunrise"}],
    "genres": [{"mal_id": 1, "name": "Action"}, {"mal_id": 24, "name": "Sci-Fi"}],
}

BEBOP_MOVIE = {
    "mal_id": 5,
    "title": "Cowboy Bebop: Tengoku no Tobira",
    "images": {"jpg": {"image_url": "https://cdn.myanimelist.net/images/anime/1439/93480.jpg"}},
    "episodes": 1,
    "airing": False,
    "aired": {
        "from": "2001-09-01T00:00:00+00:00",
        "to": None,
        "prop": {"from": {"day": 1, "month": 9, "year": 2001}},
    },
    "year": None,
    "score": None,
}

SEARCH_RESPONSE = {
    "pagination": {"items": {"count": 3}},
    "data": [COWBOY_BEBOP, BEBOP_MOVIE, {"url": "https://myanimelist.net/anime/0"}],
}

SEARCH_RESPONSE_EMPTY = {"pagination": {"items": {"count": 0}}, "data": []}

FULL_RESPONSE = {"data": COWBOY_BEBOP}
