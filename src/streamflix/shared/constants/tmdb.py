"""
TMDB Constants

Endpoints, image size tiers and request defaults for The Movie Database API.
"""

from __future__ import annotations


class TMDBConfig:
    """TMDB API configuration constants."""

    IMAGE_BASE_URL = "https://image.tmdb.org/t/p"

    DEFAULT_LANGUAGE = "fr-FR"
    DEFAULT_REGION = "FR"

    RATE_LIMIT_RPS = 35.0
    CONCURRENT_REQUESTS = 4
    TIMEOUT = 10
    RETRY_ATTEMPTS = 2
    RETRY_DELAY = 0.5

    MOVIE_APPEND_TO_RESPONSE = "videos,credits,release_dates"
    TV_APPEND_TO_RESPONSE = "videos,credits,content_ratings"


class PosterSize:
    """Poster image size tokens."""

    SMALL = "w185"
    MEDIUM = "w342"
    LARGE = "w500"
    XLARGE = "w780"
    ORIGINAL = "original"


class BackdropSize:
    """Backdrop image size tokens."""

    SMALL = "w300"
    MEDIUM = "w780"
    LARGE = "w1280"
    ORIGINAL = "original"


class ProfileSize:
    """Profile image size tokens."""

    SMALL = "w45"
    MEDIUM = "w185"
    LARGE = "h632"
    ORIGINAL = "original"


class TimeWindow:
    """Trending time windows."""

    DAY = "day"
    WEEK = "week"

    ALL = (DAY, WEEK)


class TMDBErrorMessages:
    """TMDB API error message constants."""

    AUTHENTICATION_FAILED = "TMDB API authentication failed"
    ACCESS_FORBIDDEN = "TMDB API access forbidden"
    RATE_LIMIT_EXCEEDED = "TMDB API rate limit exceeded"
    REQUEST_FAILED = "TMDB API request failed: {status_code}"
    CLIENT_ERROR = "TMDB API client error: {status_code}"
    SERVER_ERROR = "TMDB API server error: {status_code}"
    TIMEOUT = "TMDB API request timeout"
    CONNECTION_FAILED = "TMDB API connection failed"
    INVALID_RESPONSE = "TMDB API returned an unexpected payload for {endpoint}"


__all__ = [
    "BackdropSize",
    "PosterSize",
    "ProfileSize",
    "TMDBConfig",
    "TMDBErrorMessages",
    "TimeWindow",
]
