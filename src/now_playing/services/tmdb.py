"""TMDB (The Movie Database) API client service."""

from collections.abc import AsyncGenerator
from typing import Any

from now_playing.config import get_settings
from now_playing.schemas.external import (
    TMDBExternalIds,
    TMDBPersonMovieCredits,
    TMDBPersonSearchResponse,
    TMDBSearchResponse,
)
from now_playing.services.base import BaseAPIClient


class TMDBClient(BaseAPIClient):
    """Client for The Movie Database (TMDB) API.

    Covers the movie/people search, person credits and external-id lookups
    used by search. Uses Bearer token authentication.
    """

    IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
    POSTER_SIZES = ("w92", "w154", "w185", "w200", "w342", "w500", "w780", "original")

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the TMDB client.

        Args:
            api_key: TMDB API key. If not provided, uses settings.
            base_url: TMDB base URL. If not provided, uses settings.
            timeout: Request timeout in seconds.
        """
        settings = get_settings()
        self._api_key = api_key or settings.tmdb_api_key
        base = base_url or settings.tmdb_base_url

        if not self._api_key:
            raise ValueError("TMDB API key is required")

        super().__init__(base_url=base, timeout=timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers including Bearer token authentication."""
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

    async def search_movies(
        self,
        query: str,
        page: int = 1,
        language: str = "he-IL",
    ) -> TMDBSearchResponse:
        """Search for movies by title.

        Args:
            query: Search query string.
            page: Page number (1-based).
            language: Response language code.

        Returns:
            Search response containing movie results.
        """
        params: dict[str, Any] = {
            "query": query,
            "page": page,
            "include_adult": "false",
            "language": language,
        }
        data = await self.get("/search/movie", params=params)
        return TMDBSearchResponse.model_validate(data)

    async def search_people(
        self,
        query: str,
        language: str = "he-IL",
    ) -> TMDBPersonSearchResponse:
        """Search for people by name, best match first.

        Args:
            query: Person name.
            language: Response language code.
        """
        params = {"query": query, "include_adult": "false", "language": language}
        data = await self.get("/search/person", params=params)
        return TMDBPersonSearchResponse.model_validate(data)

    async def get_person_movie_credits(self, person_id: int) -> TMDBPersonMovieCredits:
        """Get the movies a person appeared in.

        Raises:
            NotFoundError: If the person is not found.
        """
        data = await self.get(f"/person/{person_id}/movie_credits")
        return TMDBPersonMovieCredits.model_validate(data)

    async def get_movie_external_ids(self, movie_id: int) -> TMDBExternalIds:
        """Get IMDb and other catalog identifiers for a movie.

        Raises:
            NotFoundError: If the movie is not found.
        """
        data = await self.get(f"/movie/{movie_id}/external_ids")
        return TMDBExternalIds.model_validate(data)

    def get_poster_url(
        self,
        poster_path: str | None,
        size: str = "w200",
    ) -> str | None:
        """Generate full poster image URL.

        Args:
            poster_path: Poster path from TMDB (e.g., "/abc123.jpg").
            size: Image size, one of ``POSTER_SIZES``.

        Returns:
            Full poster URL or None if no poster path provided.
        """
        if not poster_path:
            return None

        if size not in self.POSTER_SIZES:
            size = "w200"

        return f"{self.IMAGE_BASE_URL}/{size}{poster_path}"


async def get_tmdb_client() -> AsyncGenerator[TMDBClient | None]:
    """Yield a TMDB client, or None when no API key is configured.

    Can be used as a FastAPI dependency; the client is closed afterwards.
    """
    if not get_settings().tmdb_api_key:
        yield None
        return

    client = TMDBClient()
    try:
        yield client
    finally:
        await client.close()
