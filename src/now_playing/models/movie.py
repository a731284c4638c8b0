"""Movie, movie translation and trailer ORM models."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, Date, Float, ForeignKey, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from now_playing.database import Base, LanguageType
from now_playing.language import Language

if TYPE_CHECKING:
    from now_playing.models.actor import CastCredit
    from now_playing.models.genre import Genre


movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column("movie_id", ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class Movie(Base):
    """A catalog movie keyed by its IMDb id and enriched from TMDB/OMDb."""

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(primary_key=True)
    imdb_id: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    tmdb_id: Mapped[int | None] = mapped_column(unique=True, index=True, nullable=True)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True, index=True)
    votes: Mapped[int | None] = mapped_column(nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True, index=True)
    runtime: Mapped[int] = mapped_column(default=0)  # Minutes
    status: Mapped[str] = mapped_column(String(32), default="NOW_PLAYING")
    original_language: Mapped[Language | None] = mapped_column(LanguageType, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    translations: Mapped[list[MovieTranslation]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
        order_by="MovieTranslation.id",
    )
    trailers: Mapped[list[Trailer]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
        order_by="Trailer.id",
    )
    genres: Mapped[list[Genre]] = relationship(
        secondary=movie_genres,
        back_populates="movies",
        order_by="Genre.id",
    )
    cast: Mapped[list[CastCredit]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
        order_by="CastCredit.order",  # Primary billing first
    )


class MovieTranslation(Base):
    """Localized title, description and poster of a movie."""

    __tablename__ = "movie_translations"
    __table_args__ = (
        UniqueConstraint("movie_id", "language", name="uq_movie_translation_language"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    movie_id: Mapped[int] = mapped_column(ForeignKey("movies.id", ondelete="CASCADE"), index=True)
    language: Mapped[Language] = mapped_column(LanguageType)
    title: Mapped[str] = mapped_column(String(255))
    original_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    poster_url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    # Relationships
    movie: Mapped[Movie] = relationship(back_populates="translations")


class Trailer(Base):
    """A YouTube trailer attached to a movie."""

    __tablename__ = "trailers"
    __table_args__ = (
        UniqueConstraint("movie_id", "url", name="uq_trailer_movie_url"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    movie_id: Mapped[int] = mapped_column(ForeignKey("movies.id", ondelete="CASCADE"), index=True)
    language: Mapped[Language] = mapped_column(LanguageType)
    title: Mapped[str] = mapped_column(String(255))
    youtube_id: Mapped[str] = mapped_column(String(64))
    url: Mapped[str] = mapped_column(String(255))

    # Relationships
    movie: Mapped[Movie] = relationship(back_populates="trailers")
