"""Static payloads served when the remote catalog is unreachable.

Each accessor hands out a deep copy, so callers may mutate what they
receive without affecting later fallbacks.
"""

from __future__ import annotations

import copy
from typing import Any

FALLBACK_MOVIES: dict[str, Any] = {
    "results": [
        {
            "id": 1,
            "title": "Film d'Action",
            "overview": "Un film d'action palpitant avec des effets spéciaux époustouflants.",
            "release_date": "2024-01-15",
            "vote_average": 8.5,
            "poster_path": None,
            "backdrop_path": None,
            "genre_ids": [28, 12],
        },
        {
            "id": 2,
            "title": "Comédie Romantique",
            "overview": "Une comédie romantique pleine d'humour et d'émotion.",
            "release_date": "2024-02-14",
            "vote_average": 7.8,
            "poster_path": None,
            "backdrop_path": None,
            "genre_ids": [35, 10749],
        },
        {
            "id": 3,
            "title": "Drame Intense",
            "overview": "Un drame poignant qui explore les profondeurs de l'âme humaine.",
            "release_date": "2024-03-10",
            "vote_average": 9.1,
            "poster_path": None,
            "backdrop_path": None,
            "genre_ids": [18],
        },
    ],
    "total_pages": 1,
    "total_results": 3,
}

FALLBACK_TV_SHOWS: dict[str, Any] = {
    "results": [
        {
            "id": 1,
            "name": "Série Dramatique",
            "overview": "Une série captivante avec des personnages complexes et une intrigue prenante.",
            "first_air_date": "2024-01-01",
            "vote_average": 8.7,
            "poster_path": None,
            "backdrop_path": None,
            "genre_ids": [18, 9648],
        },
        {
            "id": 2,
            "name": "Thriller Psychologique",
            "overview": "Un thriller psychologique qui vous tiendra en haleine.",
            "first_air_date": "2024-02-01",
            "vote_average": 8.2,
            "poster_path": None,
            "backdrop_path": None,
            "genre_ids": [53, 80],
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

EMPTY_SEARCH: dict[str, Any] = {"results": []}


def fallback_movies() -> dict[str, Any]:
    return copy.deepcopy(FALLBACK_MOVIES)


def fallback_tv_shows() -> dict[str, Any]:
    return copy.deepcopy(FALLBACK_TV_SHOWS)


def empty_search() -> dict[str, Any]:
    return copy.deepcopy(EMPTY_SEARCH)


def no_details() -> None:
    return None


__all__ = [
    "EMPTY_SEARCH",
    "FALLBACK_MOVIES",
    "FALLBACK_TV_SHOWS",
    "empty_search",
    "fallback_movies",
    "fallback_tv_shows",
    "no_details",
]
