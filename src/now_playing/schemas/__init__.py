"""Pydantic schemas for request/response validation."""

from now_playing.schemas.external import (
    OMDbTitle,
    TMDBExternalIds,
    TMDBMovieResult,
    TMDBPersonMovieCredits,
    TMDBPersonSearchResponse,
    TMDBSearchResponse,
)
from now_playing.schemas.ingest import MovieBaseIn, MovieTranslationIn, TrailerIn
from now_playing.schemas.movie import (
    ExternalMovieResult,
    GenreOption,
    LocalizedActor,
    LocalizedCastMember,
    LocalizedGenre,
    LocalizedMovie,
    TrailerInfo,
)
from now_playing.schemas.search import (
    InvalidSortError,
    MovieFilters,
    PaginatedMovies,
    SearchFingerprint,
    SortDirection,
    SortField,
    SortSpec,
)

__all__ = [
    # External API schemas
    "TMDBMovieResult",
    "TMDBSearchResponse",
    "TMDBPersonSearchResponse",
    "TMDBPersonMovieCredits",
    "TMDBExternalIds",
    "OMDbTitle",
    # Ingestion schemas
    "MovieBaseIn",
    "MovieTranslationIn",
    "TrailerIn",
    # Movie schemas
    "LocalizedMovie",
    "LocalizedGenre",
    "LocalizedActor",
    "LocalizedCastMember",
    "TrailerInfo",
    "GenreOption",
    "ExternalMovieResult",
    # Search schemas
    "MovieFilters",
    "SortSpec",
    "SortField",
    "SortDirection",
    "InvalidSortError",
    "SearchFingerprint",
    "PaginatedMovies",
]
