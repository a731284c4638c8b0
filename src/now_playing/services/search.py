"""Now-playing search, genre listing and external movie search."""

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import UTC, date, datetime

from fastapi import Depends
from pydantic import ValidationError

from now_playing.config import Settings, get_settings
from now_playing.dal.movies import NO_MATCH_TMDB_ID, MovieQuery, MoviesDAL, get_movies_dal
from now_playing.language import Language
from now_playing.schemas.external import TMDBMovieResult
from now_playing.schemas.movie import ExternalMovieResult, GenreOption, LocalizedMovie
from now_playing.schemas.search import MovieFilters, PaginatedMovies, SearchFingerprint, SortSpec
from now_playing.services.base import APIError
from now_playing.services.cache import Cache, get_cache
from now_playing.services.omdb import OMDbClient, get_omdb_client
from now_playing.services.projection import genre_option
from now_playing.services.tmdb import TMDBClient, get_tmdb_client

logger = logging.getLogger(__name__)

DEFAULT_SORT = "rating:desc"
MIN_EXTERNAL_QUERY_LENGTH = 2


def utc_today() -> date:
    return datetime.now(UTC).date()


def one_year_before(day: date) -> date:
    """Same calendar day one year earlier; Feb 29 maps to Feb 28."""
    try:
        return day.replace(year=day.year - 1)
    except ValueError:
        return day.replace(year=day.year - 1, day=28)


class MovieSearchService:
    """Request-level use cases consumed by the HTTP layer.

    Collaborators are injected so tests can swap in fakes.
    """

    def __init__(
        self,
        dal: MoviesDAL,
        cache: Cache,
        tmdb: TMDBClient | None = None,
        omdb: OMDbClient | None = None,
        settings: Settings | None = None,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self._dal = dal
        self._cache = cache
        self._tmdb = tmdb
        self._omdb = omdb
        self._settings = settings or get_settings()
        self._today = today

    async def search(self, filters: MovieFilters) -> PaginatedMovies:
        """Search movies released within the last year.

        Serves from cache when possible; otherwise queries the store and
        caches the envelope for ``search_cache_ttl_seconds``, unless the
        TMDB actor lookup failed.

        Args:
            filters: Raw caller filters.

        Returns:
            The page of localized movies with pagination metadata.

        Raises:
            InvalidSortError: If ``filters.sort`` cannot be parsed.
        """
        settings = self._settings
        language = filters.language or settings.default_language
        sort = SortSpec.parse(filters.sort or DEFAULT_SORT)
        page = max(1, filters.page)
        page_size = (
            settings.default_page_size if filters.page_size is None else filters.page_size
        )
        page_size = max(1, min(settings.max_page_size, page_size))

        fingerprint = SearchFingerprint(
            query=filters.search.strip(),
            actor_query=filters.actor_name.strip(),
            sort=sort,
            genre_ids=tuple(sorted(set(filters.selected_genres))),
            language=language,
            page=page,
            page_size=page_size,
        )
        key = fingerprint.cache_key()

        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return PaginatedMovies.model_validate_json(cached)

        actor_movie_ids: tuple[int, ...] | None = None
        lookup_failed = False
        if fingerprint.actor_query:
            actor_movie_ids = await self._resolve_actor_movie_ids(fingerprint.actor_query, language)
            lookup_failed = actor_movie_ids is None

        today = self._today()
        query = MovieQuery(
            released_from=one_year_before(today),
            released_to=today,
            text=fingerprint.query,
            genre_tmdb_ids=fingerprint.genre_ids,
            tmdb_ids=(NO_MATCH_TMDB_ID,) if lookup_failed else actor_movie_ids,
        )

        items, total = await asyncio.gather(
            self._dal.list_localized(
                language,
                query,
                sort,
                offset=(page - 1) * page_size,
                limit=page_size,
            ),
            self._dal.count(query),
        )

        result = PaginatedMovies(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=max(1, math.ceil(total / page_size)),
        )

        if lookup_failed:
            # Recomputed on the next request once TMDB recovers
            logger.info("Not caching %s: actor lookup failed", key)
            return result

        await self._cache.set(key, result.model_dump_json(), settings.search_cache_ttl_seconds)
        logger.info("Cache set: %s (%d of %d movies)", key, len(items), total)
        return result

    async def _resolve_actor_movie_ids(
        self, actor_query: str, language: Language
    ) -> tuple[int, ...] | None:
        """TMDB ids of the movies of the best TMDB match for ``actor_query``.

        Returns ``(NO_MATCH_TMDB_ID,)`` when TMDB is not configured or knows
        no such actor or filmography, and None when the lookup itself fails.
        Either way the actor filter is never dropped.
        """
        if self._tmdb is None:
            logger.warning("TMDB is not configured; actor filter %r matches nothing", actor_query)
            return (NO_MATCH_TMDB_ID,)

        try:
            people = await self._tmdb.search_people(actor_query, language=language.tmdb_code)
            if not people.results:
                logger.info("No TMDB person matches %r", actor_query)
                return (NO_MATCH_TMDB_ID,)

            # Only the top candidate is used; namesakes are not disambiguated
            credits = await self._tmdb.get_person_movie_credits(people.results[0].id)
        except Exception as e:
            logger.warning("Failed to resolve actor filter %r: %s", actor_query, e)
            return None

        movie_ids = sorted({credit.id for credit in credits.cast})
        return tuple(movie_ids) or (NO_MATCH_TMDB_ID,)

    async def get_movie(
        self, movie_id: int, language: Language | None = None
    ) -> LocalizedMovie | None:
        return await self._dal.find_localized_by_id(
            movie_id, language or self._settings.default_language
        )

    async def best_rated_posters(
        self, limit: int = 12, language: Language | None = None
    ) -> list[str]:
        return await self._dal.best_rated_posters(limit, language)

    async def list_genres(self, language: Language | None = None) -> list[GenreOption]:
        """Genres for filter pickers, ordered by TMDB id.

        Names fall back from the requested language to the reference
        language, then to any translation, then to ``"Genre <id>"``.
        """
        language = language or self._settings.default_language
        genres = await self._dal.list_genres()
        reference = self._settings.reference_language
        return [genre_option(genre, language, reference) for genre in genres]

    async def search_external_movies(
        self, query: str, language: Language | None = None
    ) -> list[ExternalMovieResult]:
        """Search TMDB and attach IMDb ids and ratings to each hit.

        Queries shorter than two characters return nothing. A hit whose
        enrichment fails is still returned, without IMDb data.

        Raises:
            APIError: If TMDB is not configured or the search itself fails.
        """
        query = query.strip()
        if len(query) < MIN_EXTERNAL_QUERY_LENGTH:
            return []
        if self._tmdb is None:
            raise APIError("TMDB is not configured", status_code=503)

        language = language or self._settings.default_language
        response = await self._tmdb.search_movies(query, language=language.tmdb_code)
        return list(
            await asyncio.gather(*(self._enrich(self._tmdb, movie) for movie in response.results))
        )

    async def _enrich(self, tmdb: TMDBClient, movie: TMDBMovieResult) -> ExternalMovieResult:
        result = ExternalMovieResult(
            tmdb_id=movie.id,
            title=movie.title,
            original_title=movie.original_title,
            overview=movie.overview,
            release_date=movie.release_date,
            poster_url=tmdb.get_poster_url(movie.poster_path),
        )

        try:
            external = await tmdb.get_movie_external_ids(movie.id)
            if external.imdb_id is None:
                return result

            imdb_id, rating, votes = external.imdb_id, None, None
            if self._omdb is not None:
                title = await self._omdb.get_title(external.imdb_id)
                rating, votes = title.imdb_rating, title.imdb_votes
        except (APIError, ValidationError) as e:
            logger.warning("Failed to enrich TMDB movie %s: %s", movie.id, e)
            return result

        return result.model_copy(
            update={"imdb_id": imdb_id, "imdb_rating": rating, "imdb_votes": votes}
        )


def get_search_service(
    dal: MoviesDAL = Depends(get_movies_dal),
    cache: Cache = Depends(get_cache),
    tmdb: TMDBClient | None = Depends(get_tmdb_client),
    omdb: OMDbClient | None = Depends(get_omdb_client),
) -> MovieSearchService:
    """Factory function to create the search service.

    Can be used as a FastAPI dependency.
    """
    return MovieSearchService(dal, cache, tmdb=tmdb, omdb=omdb)
