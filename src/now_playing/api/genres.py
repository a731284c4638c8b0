"""Genre API endpoints."""

from fastapi import APIRouter, Depends, Query

from now_playing.language import Language
from now_playing.schemas.movie import GenreOption
from now_playing.services.search import MovieSearchService, get_search_service

router = APIRouter(prefix="/genres", tags=["genres"])


@router.get("", response_model=list[GenreOption])
async def list_genres(
    language: Language | None = Query(None, description="Target language"),
    service: MovieSearchService = Depends(get_search_service),
) -> list[GenreOption]:
    """List all genres with localized names, ordered by TMDB id."""
    return await service.list_genres(language)
