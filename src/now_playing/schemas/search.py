"""Search filter, sort and result envelope schemas."""

import hashlib
import json
from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from now_playing.language import Language
from now_playing.schemas.movie import LocalizedMovie


class InvalidSortError(ValueError):
    """Raised when a sort token cannot be parsed."""

    def __init__(self, token: str) -> None:
        super().__init__(
            f"Invalid sort '{token}': expected '<field>:<direction>' with field in "
            f"{[f.value for f in SortField]} and direction in {[d.value for d in SortDirection]}"
        )
        self.token = token


class SortField(StrEnum):
    RATING = "rating"
    VOTES = "votes"
    RELEASE_DATE = "releaseDate"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


_FIELD_ALIASES = {"release_date": SortField.RELEASE_DATE}


@dataclass(frozen=True)
class SortSpec:
    """A single-field ordering parsed from a ``field:direction`` token."""

    field: SortField = SortField.RATING
    direction: SortDirection = SortDirection.DESC

    @classmethod
    def parse(cls, token: str) -> "SortSpec":
        """Parse tokens such as ``rating:desc`` or ``releaseDate:asc``.

        Raises:
            InvalidSortError: If the token does not name a known field and direction.
        """
        field_name, sep, direction = token.strip().partition(":")
        if not sep:
            raise InvalidSortError(token)
        try:
            field = _FIELD_ALIASES.get(field_name) or SortField(field_name)
            return cls(field=field, direction=SortDirection(direction.lower()))
        except ValueError:
            raise InvalidSortError(token) from None

    @property
    def token(self) -> str:
        return f"{self.field.value}:{self.direction.value}"


class MovieFilters(BaseModel):
    """Raw search filters as supplied by the caller."""

    search: str = Field(default="", description="Free-text title query")
    actor_name: str = Field(default="", description="Actor name to filter by")
    sort: str = Field(default="rating:desc", description="Sort token, e.g. 'rating:desc'")
    selected_genres: list[int] = Field(default_factory=list, description="TMDB genre IDs")
    page: int = Field(default=1, description="Page number (1-based)")
    page_size: int | None = Field(default=None, description="Results per page")
    language: Language | None = Field(default=None, description="Target language")

    @field_validator("search", "actor_name", mode="before")
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        """Treat a missing text query as empty."""
        return v or ""


@dataclass(frozen=True)
class SearchFingerprint:
    """The semantic part of a search that determines its cached envelope."""

    query: str
    actor_query: str
    sort: SortSpec
    genre_ids: tuple[int, ...]
    language: Language
    page: int = 1
    page_size: int = 24

    def cache_key(self) -> str:
        payload = json.dumps(
            {
                "q": self.query,
                "actorQuery": self.actor_query,
                "sort": self.sort.token,
                "selectedGenres": list(self.genre_ids),
                "page": self.page,
                "pageSize": self.page_size,
            },
            ensure_ascii=False,
            separators=(",", ":"),
        )
        digest = hashlib.md5(payload.encode("utf-8"), usedforsecurity=False).hexdigest()
        return f"search:{self.language.value}:{digest}"


class PaginatedMovies(BaseModel):
    """Paginated search result envelope."""

    items: list[LocalizedMovie] = Field(default_factory=list, description="Movies on this page")
    total: int = Field(description="Total number of matching movies")
    page: int = Field(description="Current page number")
    page_size: int = Field(description="Page size actually used")
    total_pages: int = Field(description="Total number of pages, at least 1")
