"""Write-through payloads for catalog ingestion."""

from datetime import date

from pydantic import BaseModel, Field

from now_playing.language import Language


class MovieBaseIn(BaseModel):
    """Scalar movie fields keyed by IMDb id."""

    imdb_id: str = Field(min_length=1, description="IMDb movie ID (upsert key)")
    tmdb_id: int | None = Field(default=None, description="TMDB movie ID")
    rating: float | None = Field(default=None, description="IMDb rating")
    votes: int | None = Field(default=None, description="IMDb vote count")
    status: str = Field(default="NOW_PLAYING", description="Release status")
    runtime: int = Field(default=0, description="Runtime in minutes")
    release_date: date | None = Field(default=None, description="Release date")
    original_language: Language | None = Field(default=None, description="Original language")


class MovieTranslationIn(BaseModel):
    """Localized movie fields; unset fields are left alone on update."""

    title: str = Field(description="Localized title")
    original_title: str | None = Field(default=None, description="Original title")
    description: str | None = Field(default=None, description="Localized synopsis")
    poster_url: str | None = Field(default=None, description="Localized poster URL")


class TrailerIn(BaseModel):
    """A trailer reported by TMDB videos."""

    title: str = Field(description="Trailer title")
    key: str = Field(description="YouTube video key")
    language: Language = Field(description="Trailer language")

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.key}"
