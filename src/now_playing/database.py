"""Database configuration with async SQLAlchemy support."""

from sqlalchemy import Enum
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from now_playing.config import get_settings
from now_playing.language import Language


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# Shared column type for every per-language row; persists "he_IL" rather than "HE_IL"
LanguageType = Enum(
    Language,
    name="language",
    values_callable=lambda enum: [member.value for member in enum],
)


settings = get_settings()

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
)

# Create async session factory
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create any missing tables."""
    # Import models so every table is registered on the metadata
    import now_playing.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)