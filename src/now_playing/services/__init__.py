"""Business logic and external API clients."""

from now_playing.services.base import (
    APIError,
    BaseAPIClient,
    NotFoundError,
    RateLimitError,
)
from now_playing.services.cache import Cache, RedisCache, get_cache
from now_playing.services.omdb import OMDbClient, get_omdb_client
from now_playing.services.tmdb import TMDBClient, get_tmdb_client
from now_playing.services.translations import resolve_translation

__all__ = [
    "APIError",
    "BaseAPIClient",
    "NotFoundError",
    "RateLimitError",
    "Cache",
    "RedisCache",
    "get_cache",
    "TMDBClient",
    "get_tmdb_client",
    "OMDbClient",
    "get_omdb_client",
    "resolve_translation",
]
