"""Flatten fully populated ORM entities into single-language projections."""

from now_playing.language import Language
from now_playing.models import Actor, CastCredit, Genre, Movie
from now_playing.schemas.movie import (
    GenreOption,
    LocalizedActor,
    LocalizedCastMember,
    LocalizedGenre,
    LocalizedMovie,
    TrailerInfo,
)
from now_playing.services.translations import resolve_translation

UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_ACTOR = "Unknown Actor"


def genre_placeholder_name(genre: Genre) -> str:
    return f"Genre {genre.tmdb_id}"


def localize_genre(genre: Genre, language: Language) -> LocalizedGenre:
    translation = resolve_translation(genre.translations, language)
    return LocalizedGenre(
        id=genre.id,
        tmdb_id=genre.tmdb_id,
        name=(translation.name if translation else None) or genre_placeholder_name(genre),
    )


def localize_actor(actor: Actor, language: Language) -> LocalizedActor:
    translation = resolve_translation(actor.translations, language)
    return LocalizedActor(
        id=actor.id,
        imdb_id=actor.imdb_id,
        tmdb_id=actor.tmdb_id,
        popularity=actor.popularity,
        birthday=actor.birthday,
        deathday=actor.deathday,
        place_of_birth=actor.place_of_birth,
        profile_url=actor.profile_url,
        name=(translation.name if translation else None) or UNKNOWN_ACTOR,
        biography=translation.biography if translation else None,
    )


def localize_cast_member(credit: CastCredit, language: Language) -> LocalizedCastMember:
    return LocalizedCastMember(
        id=credit.id,
        character=credit.character,
        order=credit.order,
        actor=localize_actor(credit.actor, language),
    )


def project_movie(movie: Movie, language: Language) -> LocalizedMovie:
    """Build the language-specific view of a fully populated movie.

    The movie must have translations, genres (with translations), trailers
    and cast (with actor translations) already loaded. When the requested
    language is missing, the first loaded translation is used instead.
    Genre and cast order are preserved as loaded.
    """
    translation = resolve_translation(movie.translations, language)

    return LocalizedMovie(
        id=movie.id,
        imdb_id=movie.imdb_id,
        tmdb_id=movie.tmdb_id,
        rating=movie.rating,
        votes=movie.votes,
        release_date=movie.release_date,
        runtime=movie.runtime,
        status=movie.status,
        original_language=movie.original_language,
        created_at=movie.created_at,
        updated_at=movie.updated_at,
        title=(translation.title if translation else None) or UNKNOWN_TITLE,
        original_title=translation.original_title if translation else None,
        description=translation.description if translation else None,
        poster_url=translation.poster_url if translation else None,
        genres=[localize_genre(genre, language) for genre in movie.genres],
        trailers=[TrailerInfo.model_validate(trailer) for trailer in movie.trailers],
        cast=[localize_cast_member(credit, language) for credit in movie.cast],
    )


def genre_option(genre: Genre, language: Language, reference_language: Language) -> GenreOption:
    """Map a genre to a picker entry.

    Falls back from ``language`` to ``reference_language``, then to any
    translation, then to a synthesized name.
    """
    translation = resolve_translation(genre.translations, language, (reference_language,))
    return GenreOption(
        id=genre.tmdb_id or 0,
        name=(translation.name if translation else None) or genre_placeholder_name(genre),
    )
