"""OMDb (Open Movie Database) API client service."""

from collections.abc import AsyncGenerator
from typing import Any

from now_playing.config import get_settings
from now_playing.schemas.external import OMDbTitle
from now_playing.services.base import BaseAPIClient, NotFoundError


class OMDbClient(BaseAPIClient):
    """Client for the OMDb API, used for IMDb ratings and vote counts.

    OMDb authenticates with an ``apikey`` query parameter and reports
    failures in-band as ``{"Response": "False", "Error": ...}``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        settings = get_settings()
        self._api_key = api_key or settings.omdb_api_key
        base = base_url or settings.omdb_base_url

        if not self._api_key:
            raise ValueError("OMDb API key is required")

        super().__init__(base_url=base, timeout=timeout)

    @property
    def default_headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    @property
    def default_params(self) -> dict[str, Any]:
        return {"apikey": self._api_key}

    async def get_title(self, imdb_id: str) -> OMDbTitle:
        """Look up a title by IMDb id.

        Raises:
            NotFoundError: If OMDb does not know the id.
        """
        data = await self.get("/", params={"i": imdb_id})
        if data.get("Response") == "False":
            raise NotFoundError(data.get("Error") or "Title not found")
        return OMDbTitle.model_validate(data)


async def get_omdb_client() -> AsyncGenerator[OMDbClient | None]:
    """Yield an OMDb client, or None when no API key is configured.

    Can be used as a FastAPI dependency; the client is closed afterwards.
    """
    if not get_settings().omdb_api_key:
        yield None
        return

    client = OMDbClient()
    try:
        yield client
    finally:
        await client.close()
