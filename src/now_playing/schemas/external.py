"""Pydantic schemas for external API responses (TMDB, OMDb)."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


# TMDB Schemas
class TMDBMovieResult(BaseModel):
    """A single movie result from TMDB search."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB movie ID")
    title: str = Field(description="Movie title")
    original_title: str | None = Field(default=None, description="Original title")
    release_date: date | None = Field(default=None, description="Release date")
    poster_path: str | None = Field(default=None, description="Poster image path")
    overview: str | None = Field(default=None, description="Movie overview/synopsis")

    @field_validator("release_date", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | date | None) -> str | date | None:
        """Convert empty strings to None for date fields."""
        if v == "":
            return None
        return v


class TMDBSearchResponse(BaseModel):
    """Response from TMDB movie search endpoint."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(description="Current page number")
    total_pages: int = Field(description="Total number of pages")
    total_results: int = Field(description="Total number of results")
    results: list[TMDBMovieResult] = Field(default_factory=list, description="Movie results")


class TMDBPersonResult(BaseModel):
    """A single person result from TMDB people search."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB person ID")
    name: str = Field(description="Person's name")
    popularity: float = Field(default=0.0, description="Popularity score")
    known_for_department: str | None = Field(default=None, description="Primary department")
    profile_path: str | None = Field(default=None, description="Profile image path")


class TMDBPersonSearchResponse(BaseModel):
    """Response from TMDB people search endpoint."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(default=1, description="Current page number")
    total_results: int = Field(default=0, description="Total number of results")
    results: list[TMDBPersonResult] = Field(default_factory=list, description="Person results")


class TMDBPersonMovieCredit(BaseModel):
    """A movie a person appeared in."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB movie ID")
    title: str | None = Field(default=None, description="Movie title")
    character: str | None = Field(default=None, description="Character name")


class TMDBPersonMovieCredits(BaseModel):
    """Response from TMDB person movie credits endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB person ID")
    cast: list[TMDBPersonMovieCredit] = Field(default_factory=list, description="Acting credits")


class TMDBExternalIds(BaseModel):
    """Cross-catalog identifiers for a TMDB movie."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB movie ID")
    imdb_id: str | None = Field(default=None, description="IMDb ID")

    @field_validator("imdb_id", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        return v or None


# OMDb Schemas
class OMDbTitle(BaseModel):
    """Title lookup result from OMDb. OMDb reports missing values as 'N/A'."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    imdb_id: str | None = Field(default=None, alias="imdbID", description="IMDb ID")
    title: str | None = Field(default=None, alias="Title", description="Movie title")
    imdb_rating: float | None = Field(default=None, alias="imdbRating", description="IMDb rating")
    imdb_votes: int | None = Field(default=None, alias="imdbVotes", description="IMDb vote count")

    @field_validator("imdb_rating", mode="before")
    @classmethod
    def parse_rating(cls, v: str | float | None) -> str | float | None:
        if v in (None, "", "N/A"):
            return None
        return v

    @field_validator("imdb_votes", mode="before")
    @classmethod
    def parse_votes(cls, v: str | int | None) -> str | int | None:
        """Strip thousands separators, e.g. '1,234,567'."""
        if v in (None, "", "N/A"):
            return None
        if isinstance(v, str):
            return v.replace(",", "")
        return v
