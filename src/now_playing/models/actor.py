"""Actor and cast credit ORM models."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, Float, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from now_playing.database import Base, LanguageType
from now_playing.language import Language

if TYPE_CHECKING:
    from now_playing.models.movie import Movie


class Actor(Base):
    """Person data from TMDB. Names and biographies live in translations."""

    __tablename__ = "actors"

    id: Mapped[int] = mapped_column(primary_key=True)
    imdb_id: Mapped[str] = mapped_column(String(20), unique=True, index=True)
    tmdb_id: Mapped[int | None] = mapped_column(unique=True, index=True, nullable=True)
    popularity: Mapped[float | None] = mapped_column(Float, nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    deathday: Mapped[date | None] = mapped_column(Date, nullable=True)
    place_of_birth: Mapped[str | None] = mapped_column(String(255), nullable=True)
    profile_url: Mapped[str | None] = mapped_column(String(512), nullable=True)

    # Relationships
    translations: Mapped[list[ActorTranslation]] = relationship(
        back_populates="actor",
        cascade="all, delete-orphan",
        order_by="ActorTranslation.id",
    )
    credits: Mapped[list[CastCredit]] = relationship(
        back_populates="actor", cascade="all, delete-orphan"
    )


class ActorTranslation(Base):
    """Localized actor name and biography."""

    __tablename__ = "actor_translations"
    __table_args__ = (
        UniqueConstraint("actor_id", "language", name="uq_actor_translation_language"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    actor_id: Mapped[int] = mapped_column(ForeignKey("actors.id", ondelete="CASCADE"), index=True)
    language: Mapped[Language] = mapped_column(LanguageType)
    name: Mapped[str] = mapped_column(String(255))
    biography: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    actor: Mapped[Actor] = relationship(back_populates="translations")


class CastCredit(Base):
    """Association between a movie and an actor."""

    __tablename__ = "cast_credits"

    id: Mapped[int] = mapped_column(primary_key=True)
    movie_id: Mapped[int] = mapped_column(ForeignKey("movies.id", ondelete="CASCADE"), index=True)
    actor_id: Mapped[int] = mapped_column(ForeignKey("actors.id", ondelete="CASCADE"), index=True)
    character: Mapped[str | None] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(default=0)  # Billing order in credits

    # Relationships
    movie: Mapped[Movie] = relationship(back_populates="cast")
    actor: Mapped[Actor] = relationship(back_populates="credits")
