"""Genre ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from now_playing.database import Base, LanguageType
from now_playing.language import Language
from now_playing.models.movie import movie_genres

if TYPE_CHECKING:
    from now_playing.models.movie import Movie


class Genre(Base):
    """A TMDB movie genre."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True)
    tmdb_id: Mapped[int | None] = mapped_column(unique=True, index=True, nullable=True)

    # Relationships
    translations: Mapped[list[GenreTranslation]] = relationship(
        back_populates="genre",
        cascade="all, delete-orphan",
        order_by="GenreTranslation.id",
    )
    movies: Mapped[list[Movie]] = relationship(secondary=movie_genres, back_populates="genres")


class GenreTranslation(Base):
    """Localized genre name."""

    __tablename__ = "genre_translations"
    __table_args__ = (
        UniqueConstraint("genre_id", "language", name="uq_genre_translation_language"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    genre_id: Mapped[int] = mapped_column(ForeignKey("genres.id", ondelete="CASCADE"), index=True)
    language: Mapped[Language] = mapped_column(LanguageType)
    name: Mapped[str] = mapped_column(String(100))

    # Relationships
    genre: Mapped[Genre] = relationship(back_populates="translations")
