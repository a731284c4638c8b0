"""Movie API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query

from now_playing.language import Language
from now_playing.schemas.movie import ExternalMovieResult, LocalizedMovie
from now_playing.schemas.search import MovieFilters, PaginatedMovies
from now_playing.services.search import DEFAULT_SORT, MovieSearchService, get_search_service

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("/now-playing", response_model=PaginatedMovies)
async def search_now_playing(
    q: str = Query("", max_length=200, description="Title or original title substring"),
    actor: str = Query("", max_length=200, description="Actor name"),
    sort: str = Query(DEFAULT_SORT, description="Sort token, e.g. 'votes:desc'"),
    genres: list[int] = Query([], description="TMDB genre IDs (any of)"),
    page: int = Query(1, description="Page number"),
    page_size: int | None = Query(None, description="Results per page (clamped to 1-100)"),
    language: Language | None = Query(None, description="Target language"),
    service: MovieSearchService = Depends(get_search_service),
) -> PaginatedMovies:
    """Search movies released in the last year.

    Out-of-range page and page size values are clamped. An unknown sort
    token is rejected with 422.
    """
    filters = MovieFilters(
        search=q,
        actor_name=actor,
        sort=sort,
        selected_genres=genres,
        page=page,
        page_size=page_size,
        language=language,
    )
    return await service.search(filters)


@router.get("/posters", response_model=list[str])
async def best_rated_posters(
    limit: int = Query(12, ge=1, le=100, description="Maximum number of posters"),
    language: Language | None = Query(None, description="Only posters of this language"),
    service: MovieSearchService = Depends(get_search_service),
) -> list[str]:
    """Poster URLs of the best rated movies."""
    return await service.best_rated_posters(limit, language)


@router.get("/search", response_model=list[ExternalMovieResult])
async def search_external_movies(
    query: str = Query(..., description="Search query for movies"),
    language: Language | None = Query(None, description="Response language"),
    service: MovieSearchService = Depends(get_search_service),
) -> list[ExternalMovieResult]:
    """Search TMDB for movies and attach IMDb ratings from OMDb."""
    return await service.search_external_movies(query, language)


@router.get("/{movie_id}", response_model=LocalizedMovie)
async def get_movie(
    movie_id: int,
    language: Language | None = Query(None, description="Target language"),
    service: MovieSearchService = Depends(get_search_service),
) -> LocalizedMovie:
    """Get a movie with cast, genres and trailers in one language."""
    movie = await service.get_movie(movie_id, language)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie
