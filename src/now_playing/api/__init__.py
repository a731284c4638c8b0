"""HTTP API routers."""

from now_playing.api.router import api_router

__all__ = ["api_router"]
