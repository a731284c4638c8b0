"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from now_playing.language import Language


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Now Playing API"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./now_playing.db"

    # Cache
    redis_url: str = "redis://localhost:6379/0"
    cache_key_prefix: str = ""
    search_cache_ttl_seconds: int = 60 * 60 * 12
    posters_cache_ttl_seconds: int = 60 * 60 * 24

    # TMDB API
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"

    # OMDb API
    omdb_api_key: str = ""
    omdb_base_url: str = "https://www.omdbapi.com"

    # Localization
    default_language: Language = Language.HE_IL
    reference_language: Language = Language.EN_US

    # Pagination
    default_page_size: int = 24
    max_page_size: int = 100

    @field_validator("search_cache_ttl_seconds", "posters_cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        """Cache entries must expire."""
        if v <= 0:
            raise ValueError("cache TTL must be a positive number of seconds")
        return v

    @field_validator("max_page_size")
    @classmethod
    def validate_max_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MAX_PAGE_SIZE must be at least 1")
        return v

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        if not self.tmdb_api_key:
            warnings.append(
                "TMDB_API_KEY is not set - actor filtering will match nothing "
                "and external movie search will not work"
            )

        if not self.omdb_api_key:
            warnings.append("OMDB_API_KEY is not set - IMDb ratings will be missing")

        if not 1 <= self.default_page_size <= self.max_page_size:
            warnings.append(
                f"DEFAULT_PAGE_SIZE={self.default_page_size} is outside "
                f"[1, {self.max_page_size}] and will be clamped"
            )

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
