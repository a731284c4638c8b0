"""SQLAlchemy ORM models."""

from now_playing.models.actor import Actor, ActorTranslation, CastCredit
from now_playing.models.genre import Genre, GenreTranslation
from now_playing.models.movie import Movie, MovieTranslation, Trailer, movie_genres

__all__ = [
    "Actor",
    "ActorTranslation",
    "CastCredit",
    "Genre",
    "GenreTranslation",
    "Movie",
    "MovieTranslation",
    "Trailer",
    "movie_genres",
]
