"""Tests for movie API endpoints."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from factories import TODAY, FakeCache, add_all, make_genre, make_movie
from httpx import AsyncClient

from now_playing.config import Settings
from now_playing.dal.movies import MoviesDAL
from now_playing.language import Language
from now_playing.main import app
from now_playing.schemas.external import TMDBExternalIds, TMDBMovieResult, TMDBSearchResponse
from now_playing.services.base import RateLimitError
from now_playing.services.search import MovieSearchService, get_search_service
from now_playing.services.tmdb import TMDBClient

SETTINGS = Settings(_env_file=None, tmdb_api_key="", omdb_api_key="")


@pytest.fixture
async def seeded(session_factory) -> None:
    action = make_genre(28, he_IL="אקשן", en_US="Action")
    drama = make_genre(18, en_US="Drama")
    await add_all(
        session_factory,
        make_movie(
            "tt1",
            tmdb_id=1001,
            rating=8.1,
            votes=500,
            release_date=date(2026, 9, 1),
            titles={"he_IL": "חולית", "en_US": "Dune"},
            genres=[action],
        ),
        make_movie(
            "tt2",
            tmdb_id=1002,
            rating=6.5,
            votes=9000,
            release_date=date(2026, 3, 1),
            titles={"he_IL": "דרמה", "en_US": "A Drama"},
            genres=[drama],
        ),
        make_movie(
            "tt3",
            tmdb_id=1003,
            rating=9.9,
            votes=10,
            release_date=date(2020, 1, 1),
            titles={"en_US": "Too Old"},
        ),
    )


@pytest.fixture
def use_service(dal: MoviesDAL, cache: FakeCache):
    """Route requests to a search service over the test database."""

    def install(tmdb: TMDBClient | None = None) -> MovieSearchService:
        service = MovieSearchService(
            dal, cache, tmdb=tmdb, settings=SETTINGS, today=lambda: TODAY
        )
        app.dependency_overrides[get_search_service] = lambda: service
        return service

    return install


class TestNowPlaying:
    """Tests for the now-playing search endpoint."""

    async def test_default_search(
        self, client: AsyncClient, seeded: None, use_service  # noqa: ARG002
    ) -> None:
        use_service()

        response = await client.get("/api/movies/now-playing")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["page"] == 1
        assert data["page_size"] == 24
        assert data["total_pages"] == 1
        assert [m["imdb_id"] for m in data["items"]] == ["tt1", "tt2"]
        assert data["items"][0]["title"] == "חולית"

    async def test_sort_and_language(
        self, client: AsyncClient, seeded: None, use_service  # noqa: ARG002
    ) -> None:
        use_service()

        response = await client.get(
            "/api/movies/now-playing", params={"sort": "votes:desc", "language": "en_US"}
        )

        assert response.status_code == 200
        items = response.json()["items"]
        assert [m["title"] for m in items] == ["A Drama", "Dune"]

    async def test_genre_filter(
        self, client: AsyncClient, seeded: None, use_service  # noqa: ARG002
    ) -> None:
        use_service()

        response = await client.get("/api/movies/now-playing", params={"genres": [18, 99]})

        assert response.status_code == 200
        assert [m["imdb_id"] for m in response.json()["items"]] == ["tt2"]

    async def test_text_search(
        self, client: AsyncClient, seeded: None, use_service  # noqa: ARG002
    ) -> None:
        use_service()

        response = await client.get("/api/movies/now-playing", params={"q": "dune"})

        assert [m["imdb_id"] for m in response.json()["items"]] == ["tt1"]

    async def test_page_size_is_clamped(
        self, client: AsyncClient, seeded: None, use_service  # noqa: ARG002
    ) -> None:
        use_service()

        response = await client.get(
            "/api/movies/now-playing", params={"page": 0, "page_size": 1000}
        )

        data = response.json()
        assert data["page"] == 1
        assert data["page_size"] == 100

    async def test_invalid_sort_is_rejected(
        self, client: AsyncClient, use_service, cache: FakeCache
    ) -> None:
        use_service()

        response = await client.get("/api/movies/now-playing", params={"sort": "title:asc"})

        assert response.status_code == 422
        assert "title:asc" in response.json()["detail"]
        assert cache.gets == []

    async def test_actor_filter_without_tmdb_matches_nothing(
        self, client: AsyncClient, seeded: None, use_service  # noqa: ARG002
    ) -> None:
        use_service(tmdb=None)

        response = await client.get("/api/movies/now-playing", params={"actor": "Zendaya"})

        assert response.status_code == 200
        assert response.json()["total"] == 0

    async def test_second_request_is_served_from_cache(
        self, client: AsyncClient, seeded: None, use_service, cache: FakeCache  # noqa: ARG002
    ) -> None:
        use_service()

        first = await client.get("/api/movies/now-playing")
        second = await client.get("/api/movies/now-playing")

        assert first.json() == second.json()
        assert len(cache.sets) == 1
        assert len(cache.gets) == 2


class TestMovieDetail:
    """Tests for the single-movie endpoint."""

    async def test_get_movie(
        self, client: AsyncClient, seeded: None, use_service, dal: MoviesDAL  # noqa: ARG002
    ) -> None:
        use_service()
        movie = await dal.find_by_tmdb_id(1001)

        response = await client.get(f"/api/movies/{movie.id}", params={"language": "en_US"})

        assert response.status_code == 200
        data = response.json()
        assert data["imdb_id"] == "tt1"
        assert data["title"] == "Dune"
        assert data["genres"][0]["name"] == "Action"

    async def test_get_movie_not_found(self, client: AsyncClient, use_service) -> None:
        use_service()

        response = await client.get("/api/movies/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Movie not found"


class TestPosters:
    """Tests for the best rated posters endpoint."""

    async def test_posters_ordered_by_rating(
        self, client: AsyncClient, seeded: None, use_service  # noqa: ARG002
    ) -> None:
        use_service()

        response = await client.get("/api/movies/posters", params={"language": "en_US"})

        assert response.status_code == 200
        assert response.json() == [
            "https://img.example/tt3/en_US.jpg",
            "https://img.example/tt1/en_US.jpg",
            "https://img.example/tt2/en_US.jpg",
        ]

    async def test_posters_limit_validation(self, client: AsyncClient, use_service) -> None:
        use_service()

        response = await client.get("/api/movies/posters", params={"limit": 0})

        assert response.status_code == 422


class TestExternalSearch:
    """Tests for the TMDB-backed external search endpoint."""

    async def test_tmdb_not_configured(self, client: AsyncClient, use_service) -> None:
        use_service(tmdb=None)

        response = await client.get("/api/movies/search", params={"query": "Dune"})

        assert response.status_code == 503
        assert response.json()["detail"] == "TMDB is not configured"

    async def test_short_query(self, client: AsyncClient, use_service) -> None:
        use_service(tmdb=None)

        response = await client.get("/api/movies/search", params={"query": "D"})

        assert response.status_code == 200
        assert response.json() == []

    async def test_rate_limited(self, client: AsyncClient, use_service) -> None:
        tmdb = MagicMock(spec=TMDBClient)
        tmdb.search_movies = AsyncMock(side_effect=RateLimitError(retry_after=15))
        use_service(tmdb=tmdb)

        response = await client.get("/api/movies/search", params={"query": "Dune"})

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "15"

    async def test_results_without_omdb(self, client: AsyncClient, use_service) -> None:
        tmdb = MagicMock(spec=TMDBClient)
        tmdb.search_movies = AsyncMock(
            return_value=TMDBSearchResponse(
                page=1,
                total_pages=1,
                total_results=1,
                results=[TMDBMovieResult(id=438631, title="חולית", poster_path="/dune.jpg")],
            )
        )
        tmdb.get_movie_external_ids = AsyncMock(
            return_value=TMDBExternalIds(id=438631, imdb_id="tt1160419")
        )
        tmdb.get_poster_url.side_effect = lambda path, size="w200": (
            f"https://image.tmdb.org/t/p/{size}{path}" if path else None
        )
        use_service(tmdb=tmdb)

        response = await client.get(
            "/api/movies/search", params={"query": "Dune", "language": Language.EN_US.value}
        )

        assert response.status_code == 200
        [result] = response.json()
        assert result["tmdb_id"] == 438631
        assert result["poster_url"] == "https://image.tmdb.org/t/p/w200/dune.jpg"
        assert result["imdb_id"] == "tt1160419"
        assert result["imdb_rating"] is None
        tmdb.search_movies.assert_awaited_once_with("Dune", language="en-US")
