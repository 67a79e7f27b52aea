"""Tests for display formatting of catalog records."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from streamflix.services.formatting import (
    FormattedRecord,
    format_date,
    format_for_display,
    format_movie_for_display,
    format_rating,
    format_runtime,
    format_tv_show_for_display,
    get_age_certification,
    get_year,
    truncate_text,
)
from streamflix.services.genre_index import GenreIndex
from streamflix.services.tmdb.images import build_image_url


@pytest.fixture
def genre_index() -> GenreIndex:
    index = GenreIndex()
    index.replace(
        {
            "movie": [{"id": 28, "name": "Action"}, {"id": 18, "name": "Drame"}],
            "tv": [{"id": 18, "name": "Drame"}, {"id": 80, "name": "Crime"}],
        }
    )
    return index


class TestScalars:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-01-15", "15 janvier 2024"),
            ("2023-08-01", "1 août 2023"),
            ("2020-12-31T10:00:00Z", "31 décembre 2020"),
            (None, "Date inconnue"),
            ("", "Date inconnue"),
            ("not-a-date", "Date inconnue"),
        ],
    )
    def test_format_date(self, value, expected):
        assert format_date(value) == expected

    def test_format_date_english(self):
        assert format_date("2024-01-15", locale="en") == "January 15, 2024"

    def test_get_year(self):
        assert get_year("2024-01-15") == "2024"
        assert get_year(None) == "Année inconnue"

    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [(135, "2h 15min"), (45, "45min"), (120, "2h 0min"), (0, "Durée inconnue"), (None, "Durée inconnue")],
    )
    def test_format_runtime(self, minutes, expected):
        assert format_runtime(minutes) == expected

    @pytest.mark.parametrize(
        ("vote", "expected"),
        [(8.46, "8.5/10"), (7, "7.0/10"), (0, "Non noté"), (None, "Non noté")],
    )
    def test_format_rating(self, vote, expected):
        assert format_rating(vote) == expected

    def test_truncate_short_text_unchanged(self):
        assert truncate_text("court", 150) == "court"
        assert truncate_text("x" * 150, 150) == "x" * 150

    def test_truncate_long_text(self):
        text = "mot " * 50

        result = truncate_text(text, 10)

        assert result == "mot mot mo..."

    def test_truncate_strips_trailing_space_before_ellipsis(self):
        assert truncate_text("abcd efgh", 5) == "abcd..."

    def test_truncate_none(self):
        assert truncate_text(None) is None


class TestAgeCertification:
    def test_prefers_france(self):
        release_dates = {
            "results": [
                {"iso_3166_1": "US", "release_dates": [{"certification": "R"}]},
                {"iso_3166_1": "FR", "release_dates": [{"certification": "16"}]},
            ]
        }

        assert get_age_certification(release_dates) == "16"

    def test_falls_back_to_us_when_french_is_blank(self):
        release_dates = {
            "results": [
                {"iso_3166_1": "FR", "release_dates": [{"certification": ""}]},
                {"iso_3166_1": "US", "release_dates": [{"certification": "PG-13"}]},
            ]
        }

        assert get_age_certification(release_dates) == "PG-13"

    @pytest.mark.parametrize("value", [None, {}, {"results": []}, {"results": [{"iso_3166_1": "DE", "release_dates": []}]}])
    def test_missing_returns_empty(self, value):
        assert get_age_certification(value) == ""


class TestImageUrl:
    def test_build_image_url(self):
        assert build_image_url("/abc.jpg", "w342") == "https://image.tmdb.org/t/p/w342/abc.jpg"

    def test_missing_path(self):
        assert build_image_url(None) is None
        assert build_image_url("") is None

    def test_custom_base_url(self):
        assert build_image_url("/a.jpg", "w500", "http://img.local/") == "http://img.local/w500/a.jpg"


class TestFormatMovie:
    def test_full_record(self, sample_movies, genre_index):
        record = format_movie_for_display(sample_movies[0], genre_index)

        assert isinstance(record, FormattedRecord)
        assert record.title == "Fight Club"
        assert record.year == "1999"
        assert record.formatted_date == "15 octobre 1999"
        assert record.formatted_rating == "8.4/10"
        assert record.genres == ["Drame", "Genre inconnu"]
        assert record.media_type == "movie"
        assert record.poster_url == "https://image.tmdb.org/t/p/w500/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg"
        assert record.backdrop_url == "https://image.tmdb.org/t/p/w1280/hZkgoQYus5vegHoetLkCJzb17zJ.jpg"
        assert record.thumbnail_url == "https://image.tmdb.org/t/p/w342/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg"
        assert record.truncated_overview == record.overview

    def test_sparse_record_uses_sentinels(self):
        record = format_movie_for_display({"id": 7, "name": "Sans titre"})

        assert record.title == "Sans titre"
        assert record.formatted_rating == "Non noté"
        assert record.formatted_date == "Date inconnue"
        assert record.year == "Année inconnue"
        assert record.poster_url is None
        assert record.genres == []

    def test_overview_truncated_with_marker(self):
        record = format_movie_for_display({"id": 1, "overview": "a" * 200}, overview_max_length=150)

        assert record.truncated_overview == "a" * 150 + "..."

    def test_none_returns_none(self):
        assert format_movie_for_display(None) is None

    def test_record_is_frozen(self, sample_movies):
        record = format_movie_for_display(sample_movies[0])

        with pytest.raises(ValidationError):
            record.title = "Autre"


class TestFormatTvShow:
    def test_tv_record(self, sample_tv_shows, genre_index):
        record = format_tv_show_for_display(sample_tv_shows[0], genre_index)

        assert record.title == "Breaking Bad"
        assert record.release_date == "2008-01-20"
        assert record.formatted_date == "20 janvier 2008"
        assert record.genres == ["Drame", "Crime"]
        assert record.origin_country == ["US"]
        assert record.media_type == "tv"


class TestFormatForDisplay:
    def test_dispatches_tv_by_media_type(self, sample_tv_shows, genre_index):
        record = format_for_display({**sample_tv_shows[0], "media_type": "tv"}, genre_index)

        assert record.genres == ["Drame", "Crime"]
        assert record.origin_country == ["US"]

    def test_defaults_to_movie(self, sample_movies, genre_index):
        record = format_for_display(sample_movies[0], genre_index)

        assert record.media_type == "movie"

    def test_unknown_genres_without_index(self, sample_movies):
        record = format_for_display(sample_movies[0])

        assert record.genres == ["Genre inconnu", "Genre inconnu"]
