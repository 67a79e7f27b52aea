"""Display formatting for catalog records.

Turns raw TMDB movie/TV records into FormattedRecord instances ready for
rendering: resolved genre names, absolute image URLs, and French display
strings for ratings, dates and runtimes.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from streamflix.shared.constants import (
    CERTIFICATION_COUNTRIES,
    MONTH_NAMES,
    BackdropSize,
    DisplayDefaults,
    DisplaySentinels,
    MediaKind,
    PosterSize,
    TMDBConfig,
)

from .genre_index import GenreIndex
from .tmdb.images import build_image_url


class FormattedRecord(BaseModel):
    """A catalog record shaped for display."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    title: str | None = None
    original_title: str | None = None
    overview: str | None = None
    release_date: str | None = None
    year: str = DisplaySentinels.UNKNOWN_YEAR
    rating: float | None = None
    vote_count: int | None = None
    popularity: float | None = None
    poster_path: str | None = None
    backdrop_path: str | None = None
    genre_ids: list[int] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    adult: bool | None = None
    original_language: str | None = None
    media_type: str = MediaKind.MOVIE
    origin_country: list[str] | None = None

    poster_url: str | None = None
    backdrop_url: str | None = None
    thumbnail_url: str | None = None

    formatted_rating: str = DisplaySentinels.UNRATED
    formatted_date: str = DisplaySentinels.UNKNOWN_DATE
    truncated_overview: str | None = None


def parse_date(value: str | None) -> date | None:
    """Parse the ``YYYY-MM-DD`` prefix of an ISO date, or return None."""
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def format_date(value: str | None, locale: str = DisplayDefaults.LOCALE) -> str:
    """Format an ISO date in long form, e.g. "15 janvier 2024".

    Missing or unparseable dates yield "Date inconnue".
    """
    parsed = parse_date(value)
    if parsed is None:
        return DisplaySentinels.UNKNOWN_DATE

    months = MONTH_NAMES.get(locale, MONTH_NAMES[DisplayDefaults.LOCALE])
    month = months[parsed.month - 1]
    if locale == "en":
        return f"{month} {parsed.day}, {parsed.year}"
    return f"{parsed.day} {month} {parsed.year}"


def get_year(value: str | None) -> str:
    parsed = parse_date(value)
    if parsed is None:
        return DisplaySentinels.UNKNOWN_YEAR
    return str(parsed.year)


def format_runtime(minutes: int | None) -> str:
    """Format a runtime in minutes as "2h 15min" or "45min"."""
    if not minutes:
        return DisplaySentinels.UNKNOWN_RUNTIME

    hours, remaining = divmod(int(minutes), 60)
    if hours == 0:
        return f"{remaining}min"
    return f"{hours}h {remaining}min"


def truncate_text(
    text: str | None,
    max_length: int = DisplayDefaults.OVERVIEW_MAX_LENGTH,
) -> str | None:
    """Cut ``text`` to ``max_length`` characters, appending "..." only if cut."""
    if not text or len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + DisplaySentinels.ELLIPSIS


def format_rating(vote_average: float | None) -> str:
    # TMDB reports 0 for titles nobody has rated yet
    if not vote_average:
        return DisplaySentinels.UNRATED
    return f"{float(vote_average):.1f}/10"


def get_age_certification(release_dates: dict[str, Any] | None) -> str:
    """Return the French certification, else the US one, else "".

    Args:
        release_dates: The ``release_dates`` block appended to movie details
    """
    if not release_dates or not release_dates.get("results"):
        return ""

    for country in CERTIFICATION_COUNTRIES:
        release = next(
            (r for r in release_dates["results"] if r.get("iso_3166_1") == country),
            None,
        )
        if release and release.get("release_dates"):
            certification = release["release_dates"][0].get("certification")
            if certification:
                return certification

    return ""


def _genre_names(
    genre_index: GenreIndex | None,
    genre_ids: list[int],
    kind: str,
) -> list[str]:
    if genre_index is None:
        return [DisplaySentinels.UNKNOWN_GENRE for _ in genre_ids]
    return genre_index.names_of(genre_ids, kind)


def format_movie_for_display(
    movie: dict[str, Any] | None,
    genre_index: GenreIndex | None = None,
    *,
    overview_max_length: int = DisplayDefaults.OVERVIEW_MAX_LENGTH,
    locale: str = DisplayDefaults.LOCALE,
    image_base_url: str = TMDBConfig.IMAGE_BASE_URL,
) -> FormattedRecord | None:
    """Shape a movie record (or a movie-like search hit) for display."""
    if not movie:
        return None

    release_date = movie.get("release_date") or movie.get("first_air_date")
    genre_ids = list(movie.get("genre_ids") or [])
    vote_average = movie.get("vote_average")

    return FormattedRecord(
        id=movie.get("id"),
        title=movie.get("title") or movie.get("name"),
        original_title=movie.get("original_title") or movie.get("original_name"),
        overview=movie.get("overview"),
        release_date=release_date,
        year=get_year(release_date),
        rating=vote_average,
        vote_count=movie.get("vote_count"),
        popularity=movie.get("popularity"),
        poster_path=movie.get("poster_path"),
        backdrop_path=movie.get("backdrop_path"),
        genre_ids=genre_ids,
        genres=_genre_names(genre_index, genre_ids, MediaKind.MOVIE),
        adult=movie.get("adult"),
        original_language=movie.get("original_language"),
        media_type=movie.get("media_type") or MediaKind.MOVIE,
        poster_url=build_image_url(movie.get("poster_path"), PosterSize.LARGE, image_base_url),
        backdrop_url=build_image_url(
            movie.get("backdrop_path"), BackdropSize.LARGE, image_base_url
        ),
        thumbnail_url=build_image_url(movie.get("poster_path"), PosterSize.MEDIUM, image_base_url),
        formatted_rating=format_rating(vote_average),
        formatted_date=format_date(release_date, locale),
        truncated_overview=truncate_text(movie.get("overview"), overview_max_length),
    )


def format_tv_show_for_display(
    tv_show: dict[str, Any] | None,
    genre_index: GenreIndex | None = None,
    *,
    overview_max_length: int = DisplayDefaults.OVERVIEW_MAX_LENGTH,
    locale: str = DisplayDefaults.LOCALE,
    image_base_url: str = TMDBConfig.IMAGE_BASE_URL,
) -> FormattedRecord | None:
    """Shape a TV show record for display, resolving genres in the TV taxonomy."""
    if not tv_show:
        return None

    first_air_date = tv_show.get("first_air_date")
    genre_ids = list(tv_show.get("genre_ids") or [])
    vote_average = tv_show.get("vote_average")
    origin_country = tv_show.get("origin_country")

    return FormattedRecord(
        id=tv_show.get("id"),
        title=tv_show.get("name") or tv_show.get("title"),
        original_title=tv_show.get("original_name") or tv_show.get("original_title"),
        overview=tv_show.get("overview"),
        release_date=first_air_date,
        year=get_year(first_air_date),
        rating=vote_average,
        vote_count=tv_show.get("vote_count"),
        popularity=tv_show.get("popularity"),
        poster_path=tv_show.get("poster_path"),
        backdrop_path=tv_show.get("backdrop_path"),
        genre_ids=genre_ids,
        genres=_genre_names(genre_index, genre_ids, MediaKind.TV),
        adult=tv_show.get("adult"),
        original_language=tv_show.get("original_language"),
        media_type=tv_show.get("media_type") or MediaKind.TV,
        origin_country=list(origin_country) if origin_country is not None else None,
        poster_url=build_image_url(tv_show.get("poster_path"), PosterSize.LARGE, image_base_url),
        backdrop_url=build_image_url(
            tv_show.get("backdrop_path"), BackdropSize.LARGE, image_base_url
        ),
        thumbnail_url=build_image_url(
            tv_show.get("poster_path"), PosterSize.MEDIUM, image_base_url
        ),
        formatted_rating=format_rating(vote_average),
        formatted_date=format_date(first_air_date, locale),
        truncated_overview=truncate_text(tv_show.get("overview"), overview_max_length),
    )


def format_for_display(
    record: dict[str, Any] | None,
    genre_index: GenreIndex | None = None,
    **options: Any,
) -> FormattedRecord | None:
    """Dispatch on ``media_type``: "tv" records use the TV formatter."""
    if not record:
        return None
    if record.get("media_type") == MediaKind.TV:
        return format_tv_show_for_display(record, genre_index, **options)
    return format_movie_for_display(record, genre_index, **options)


__all__ = [
    "FormattedRecord",
    "format_date",
    "format_for_display",
    "format_movie_for_display",
    "format_rating",
    "format_runtime",
    "format_tv_show_for_display",
    "get_age_certification",
    "get_year",
    "parse_date",
    "truncate_text",
]
