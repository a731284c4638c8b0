"""Movies data access layer.

Encapsulates every query and write-through over movies, their translations,
genres and trailers. Each operation opens its own short-lived session from the
injected factory, so independent reads may run concurrently.
"""

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from fastapi import Depends
from sqlalchemy import ColumnElement, Insert, Table, func, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from now_playing.config import get_settings
from now_playing.database import async_session
from now_playing.language import Language
from now_playing.models import Actor, CastCredit, Genre, Movie, MovieTranslation, Trailer
from now_playing.schemas.ingest import MovieBaseIn, MovieTranslationIn, TrailerIn
from now_playing.schemas.movie import LocalizedMovie
from now_playing.schemas.search import SortDirection, SortField, SortSpec
from now_playing.services.cache import Cache, get_cache
from now_playing.services.projection import project_movie

logger = logging.getLogger(__name__)

# A TMDB id no movie can have; restricting to it matches nothing
NO_MATCH_TMDB_ID = -1

# Posters cached per language; requests slice their limit from this list
POSTER_CACHE_SIZE = 100

# Eager-loading shape of a "fully populated" movie, shared by every read that projects
FULLY_POPULATED = (
    selectinload(Movie.genres).selectinload(Genre.translations),
    selectinload(Movie.trailers),
    selectinload(Movie.translations),
    selectinload(Movie.cast).selectinload(CastCredit.actor).selectinload(Actor.translations),
)

SORT_COLUMNS = {
    SortField.RATING: Movie.rating,
    SortField.VOTES: Movie.votes,
    SortField.RELEASE_DATE: Movie.release_date,
}


@dataclass(frozen=True)
class MovieQuery:
    """Structured movie filter. Empty fields do not constrain the result."""

    released_from: date | None = None
    released_to: date | None = None
    text: str = ""
    genre_tmdb_ids: tuple[int, ...] = ()
    tmdb_ids: tuple[int, ...] | None = None  # None means unrestricted

    def clauses(self) -> list[ColumnElement[bool]]:
        """Translate the filter into SQL WHERE clauses."""
        clauses: list[ColumnElement[bool]] = []

        if self.released_from is not None:
            clauses.append(Movie.release_date >= self.released_from)
        if self.released_to is not None:
            clauses.append(Movie.release_date <= self.released_to)

        if self.text:
            clauses.append(
                Movie.translations.any(
                    or_(
                        MovieTranslation.title.icontains(self.text, autoescape=True),
                        MovieTranslation.original_title.icontains(self.text, autoescape=True),
                    )
                )
            )

        if self.genre_tmdb_ids:
            clauses.append(Movie.genres.any(Genre.tmdb_id.in_(self.genre_tmdb_ids)))

        if self.tmdb_ids is not None:
            clauses.append(Movie.tmdb_id.in_(self.tmdb_ids or (NO_MATCH_TMDB_ID,)))

        return clauses


def _order_by(sort: SortSpec) -> list[ColumnElement]:
    column = SORT_COLUMNS[sort.field]
    ordered = column.desc() if sort.direction is SortDirection.DESC else column.asc()
    # Movie.id keeps pagination stable across ties
    return [ordered.nulls_last(), Movie.id.asc()]


def _insert(session: AsyncSession, table: type | Table) -> Insert:
    """Dialect-specific INSERT supporting ON CONFLICT DO UPDATE."""
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return postgresql.insert(table)
    if dialect == "sqlite":
        return sqlite.insert(table)
    raise NotImplementedError(f"Upserts are not supported on {dialect}")


class MoviesDAL:
    """Query surface over movies and their related entities."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: Cache,
        posters_ttl_seconds: int = 60 * 60 * 24,
    ) -> None:
        self._session_factory = session_factory
        self._cache = cache
        self._posters_ttl_seconds = posters_ttl_seconds

    # Reads

    async def find_by_tmdb_id(self, tmdb_id: int) -> Movie | None:
        async with self._session_factory() as session:
            return await session.scalar(select(Movie).where(Movie.tmdb_id == tmdb_id))

    async def find_fully_populated_by_id(self, movie_id: int) -> Movie | None:
        """Load a movie with translations, genres, trailers and ordered cast."""
        async with self._session_factory() as session:
            return await session.scalar(
                select(Movie).where(Movie.id == movie_id).options(*FULLY_POPULATED)
            )

    async def find_localized_by_id(
        self, movie_id: int, language: Language
    ) -> LocalizedMovie | None:
        movie = await self.find_fully_populated_by_id(movie_id)
        if movie is None:
            return None
        return project_movie(movie, language)

    async def list_fully_populated(
        self,
        query: MovieQuery | None = None,
        sort: SortSpec | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Movie]:
        """List fully populated movies matching ``query`` in ``sort`` order."""
        stmt = select(Movie).options(*FULLY_POPULATED)
        if query is not None:
            stmt = stmt.where(*query.clauses())
        stmt = stmt.order_by(*_order_by(sort or SortSpec()))
        stmt = stmt.offset(offset).limit(limit)

        async with self._session_factory() as session:
            result = await session.scalars(stmt)
            return list(result.all())

    async def list_localized(
        self,
        language: Language,
        query: MovieQuery | None = None,
        sort: SortSpec | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[LocalizedMovie]:
        movies = await self.list_fully_populated(query, sort, offset, limit)
        return [project_movie(movie, language) for movie in movies]

    async def count(self, query: MovieQuery | None = None) -> int:
        stmt = select(func.count()).select_from(Movie)
        if query is not None:
            stmt = stmt.where(*query.clauses())

        async with self._session_factory() as session:
            return (await session.execute(stmt)).scalar_one()

    async def list_genres(self) -> list[Genre]:
        """All genres with their translations, by TMDB id."""
        stmt = select(Genre).options(selectinload(Genre.translations)).order_by(Genre.tmdb_id)
        async with self._session_factory() as session:
            result = await session.scalars(stmt)
            return list(result.all())

    async def best_rated_posters(
        self, limit: int = 12, language: Language | None = None
    ) -> list[str]:
        """Poster URLs of the best rated movies, cached per language.

        Reads translations directly rather than whole movies. Ordered by
        movie rating, then vote count, both descending. The cache holds the
        top ``POSTER_CACHE_SIZE`` posters, so ``limit`` does not affect the key
        and is capped at that size.

        Args:
            limit: Maximum number of URLs to return.
            language: Only consider posters of this language's translations.
        """
        key = f"bestRatedPosters:{language.value if language else 'any'}"
        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return json.loads(cached)[:limit]

        stmt = (
            select(MovieTranslation.poster_url)
            .join(MovieTranslation.movie)
            .where(MovieTranslation.poster_url.is_not(None))
            .order_by(
                Movie.rating.desc().nulls_last(),
                Movie.votes.desc().nulls_last(),
                MovieTranslation.id.asc(),
            )
            .limit(POSTER_CACHE_SIZE)
        )
        if language is not None:
            stmt = stmt.where(MovieTranslation.language == language)

        async with self._session_factory() as session:
            result = await session.scalars(stmt)
            posters = [url for url in result.all() if url]

        await self._cache.set(key, json.dumps(posters), self._posters_ttl_seconds)
        logger.info("Cache set: %s (%d posters)", key, len(posters))
        return posters[:limit]

    # Write-throughs

    async def upsert_base(self, data: MovieBaseIn) -> Movie:
        """Create or update a movie by IMDb id.

        Unsupplied fields fall back to the ``MovieBaseIn`` defaults on both
        create and update. The TMDB id is only written on create.
        """
        values = data.model_dump()
        changes = {k: v for k, v in values.items() if k not in ("imdb_id", "tmdb_id")}
        changes["updated_at"] = datetime.utcnow()

        async with self._session_factory.begin() as session:
            stmt = _insert(session, Movie).values(**values)
            stmt = stmt.on_conflict_do_update(index_elements=[Movie.imdb_id], set_=changes)
            await session.execute(stmt)
            return await session.scalar(select(Movie).where(Movie.imdb_id == data.imdb_id))

    async def update_rating(
        self, imdb_id: str, rating: float | None, votes: int | None
    ) -> Movie | None:
        """Refresh rating fields only. Returns None if no such movie."""
        async with self._session_factory.begin() as session:
            await session.execute(
                update(Movie)
                .where(Movie.imdb_id == imdb_id)
                .values(rating=rating, votes=votes, updated_at=datetime.utcnow())
            )
            return await session.scalar(select(Movie).where(Movie.imdb_id == imdb_id))

    async def upsert_translation(
        self, movie_id: int, language: Language, data: MovieTranslationIn
    ) -> MovieTranslation:
        """Create or update the movie's translation for ``language``.

        On update only fields explicitly set on ``data`` are written.
        """
        values = {"movie_id": movie_id, "language": language, **data.model_dump()}
        changes = data.model_dump(exclude_unset=True)

        async with self._session_factory.begin() as session:
            stmt = _insert(session, MovieTranslation).values(**values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[MovieTranslation.movie_id, MovieTranslation.language],
                set_=changes,
            )
            await session.execute(stmt)
            return await session.scalar(
                select(MovieTranslation).where(
                    MovieTranslation.movie_id == movie_id,
                    MovieTranslation.language == language,
                )
            )

    async def connect_genres(self, movie_id: int, tmdb_genre_ids: Sequence[int]) -> None:
        """Replace the movie's genres with the known genres among ``tmdb_genre_ids``."""
        if not tmdb_genre_ids:
            return

        async with self._session_factory.begin() as session:
            movie = await session.scalar(
                select(Movie).where(Movie.id == movie_id).options(selectinload(Movie.genres))
            )
            if movie is None:
                logger.warning("Cannot connect genres: movie %s does not exist", movie_id)
                return

            genres = await session.scalars(select(Genre).where(Genre.tmdb_id.in_(tmdb_genre_ids)))
            movie.genres = list(genres.all())

    async def upsert_all_trailers(self, movie_id: int, trailers: Sequence[TrailerIn]) -> None:
        """Create or update trailers by (movie, URL)."""
        if not trailers:
            return

        async with self._session_factory.begin() as session:
            for trailer in trailers:
                stmt = _insert(session, Trailer).values(
                    movie_id=movie_id,
                    language=trailer.language,
                    youtube_id=trailer.key,
                    title=trailer.title,
                    url=trailer.url,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[Trailer.movie_id, Trailer.url],
                    set_={"title": trailer.title, "youtube_id": trailer.key},
                )
                await session.execute(stmt)


def get_movies_dal(cache: Cache = Depends(get_cache)) -> MoviesDAL:
    """Factory function to create the movies DAL.

    Can be used as a FastAPI dependency.
    """
    return MoviesDAL(
        async_session,
        cache,
        posters_ttl_seconds=get_settings().posters_cache_ttl_seconds,
    )
