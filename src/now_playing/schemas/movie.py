"""Pydantic schemas for localized movie projections."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from now_playing.language import Language


class LocalizedGenre(BaseModel):
    """A genre with its name resolved for one language."""

    id: int = Field(description="Local database ID")
    tmdb_id: int | None = Field(default=None, description="TMDB genre ID")
    name: str = Field(description="Localized genre name")


class LocalizedActor(BaseModel):
    """An actor with name and biography resolved for one language."""

    id: int = Field(description="Local database ID")
    imdb_id: str = Field(description="IMDb person ID")
    tmdb_id: int | None = Field(default=None, description="TMDB person ID")
    popularity: float | None = Field(default=None, description="TMDB popularity score")
    birthday: date | None = Field(default=None, description="Date of birth")
    deathday: date | None = Field(default=None, description="Date of death")
    place_of_birth: str | None = Field(default=None, description="Place of birth")
    profile_url: str | None = Field(default=None, description="Full profile image URL")
    name: str = Field(description="Localized name")
    biography: str | None = Field(default=None, description="Localized biography")


class LocalizedCastMember(BaseModel):
    """A cast credit with its localized actor."""

    id: int = Field(description="Local database ID")
    character: str | None = Field(default=None, description="Character name")
    order: int = Field(default=0, description="Billing order")
    actor: LocalizedActor


class TrailerInfo(BaseModel):
    """A trailer as stored; trailers are not localized."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Local database ID")
    url: str = Field(description="Playable YouTube URL")
    title: str = Field(description="Trailer title")
    language: Language = Field(description="Trailer language")
    youtube_id: str = Field(description="YouTube video ID")


class LocalizedMovie(BaseModel):
    """A movie flattened to a single language. Derived, never persisted."""

    id: int = Field(description="Local database ID")
    imdb_id: str = Field(description="IMDb movie ID")
    tmdb_id: int | None = Field(default=None, description="TMDB movie ID")
    rating: float | None = Field(default=None, description="IMDb rating")
    votes: int | None = Field(default=None, description="IMDb vote count")
    release_date: date | None = Field(default=None, description="Release date")
    runtime: int = Field(default=0, description="Runtime in minutes")
    status: str = Field(description="Release status")
    original_language: Language | None = Field(default=None, description="Original language")
    created_at: datetime = Field(description="When the movie was first stored")
    updated_at: datetime = Field(description="When the movie was last updated")
    # Translation fields for the requested language
    title: str = Field(description="Localized title")
    original_title: str | None = Field(default=None, description="Original title")
    description: str | None = Field(default=None, description="Localized synopsis")
    poster_url: str | None = Field(default=None, description="Localized poster URL")
    # Related data
    genres: list[LocalizedGenre] = Field(default_factory=list)
    trailers: list[TrailerInfo] = Field(default_factory=list)
    cast: list[LocalizedCastMember] = Field(default_factory=list)


class GenreOption(BaseModel):
    """A genre entry for filter pickers."""

    id: int = Field(description="TMDB genre ID, used for filtering")
    name: str = Field(description="Localized genre name")


class ExternalMovieResult(BaseModel):
    """A TMDB search hit enriched with IMDb data from OMDb."""

    tmdb_id: int = Field(description="TMDB movie ID")
    title: str = Field(description="Movie title")
    original_title: str | None = Field(default=None, description="Original title")
    overview: str | None = Field(default=None, description="Movie overview/synopsis")
    release_date: date | None = Field(default=None, description="Release date")
    poster_url: str | None = Field(default=None, description="Full poster image URL")
    imdb_id: str | None = Field(default=None, description="IMDb movie ID")
    imdb_rating: float | None = Field(default=None, description="IMDb rating")
    imdb_votes: int | None = Field(default=None, description="IMDb vote count")
