"""Main API router aggregation."""

from fastapi import APIRouter

from now_playing.api.genres import router as genres_router
from now_playing.api.movies import router as movies_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(movies_router)
api_router.include_router(genres_router)
