"""Tests for the genre taxonomy."""

from __future__ import annotations

import logging

import pytest

from streamflix.services.genre_index import GenreIndex
from streamflix.shared.errors import DomainError, ErrorCode


class TestNameOf:
    def test_resolves_known_id(self):
        index = GenreIndex()
        index.replace({"movie": [{"id": 28, "name": "Action"}]})

        assert index.name_of(28, "movie") == "Action"

    def test_unknown_id_returns_sentinel(self):
        index = GenreIndex()
        index.replace({"movie": [{"id": 28, "name": "Action"}]})

        assert index.name_of(999, "movie") == "Genre inconnu"

    def test_kinds_are_separate(self):
        index = GenreIndex()
        index.replace({"movie": [{"id": 28, "name": "Action"}]})

        assert index.name_of(28, "tv") == "Genre inconnu"

    def test_unknown_kind_never_fails(self):
        assert GenreIndex().name_of(28, "podcast") == "Genre inconnu"

    def test_names_of_preserves_order(self):
        index = GenreIndex()
        index.replace({"tv": [{"id": 18, "name": "Drame"}, {"id": 80, "name": "Crime"}]})

        assert index.names_of([80, 18, 1], "tv") == ["Crime", "Drame", "Genre inconnu"]

    def test_replace_rejects_unknown_kind(self):
        with pytest.raises(DomainError) as exc_info:
            GenreIndex().replace({"podcast": []})

        assert exc_info.value.code == ErrorCode.INVALID_MEDIA_KIND


class TestLoad:
    @pytest.mark.asyncio
    async def test_load_fetches_both_lists(self, fake_client):
        index = GenreIndex()

        loaded = await index.load(fake_client)

        assert loaded is True
        assert fake_client.calls["get_movie_genres"] == 1
        assert fake_client.calls["get_tv_genres"] == 1
        assert index.name_of(28, "movie") == "Action"
        assert index.name_of(80, "tv") == "Crime"
        assert len(index) == 4

    @pytest.mark.asyncio
    async def test_partial_failure_keeps_previous_taxonomy(self, client_factory, caplog):
        # Given: an index already holding a taxonomy
        index = GenreIndex()
        index.replace({"movie": [{"id": 1, "name": "Ancien"}]})
        client = client_factory(failing={"get_tv_genres"})

        # When
        with caplog.at_level(logging.WARNING):
            loaded = await index.load(client)

        # Then: nothing replaced, failure logged, no exception
        assert loaded is False
        assert index.name_of(1, "movie") == "Ancien"
        assert index.name_of(28, "movie") == "Genre inconnu"
        assert "Failed to load genre taxonomy" in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_payload_counts_as_failure(self, mocker):
        client = mocker.Mock()
        client.get_movie_genres = mocker.AsyncMock(return_value={"unexpected": True})
        client.get_tv_genres = mocker.AsyncMock(return_value={"genres": []})

        index = GenreIndex()

        assert await index.load(client) is False
        assert len(index) == 0

    def test_as_dict_round_trips_remote_shape(self):
        index = GenreIndex()
        index.replace({"movie": [{"id": 28, "name": "Action"}]})

        assert index.as_dict() == {"movie": [{"id": 28, "name": "Action"}], "tv": []}
