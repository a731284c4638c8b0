"""Data access layer over the relational store."""

from now_playing.dal.movies import NO_MATCH_TMDB_ID, MovieQuery, MoviesDAL, get_movies_dal

__all__ = ["NO_MATCH_TMDB_ID", "MovieQuery", "MoviesDAL", "get_movies_dal"]
