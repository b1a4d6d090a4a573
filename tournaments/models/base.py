"""Database base and session setup."""
from __future__ import annotations

import logging

from sqlalchemy import delete, event, text, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

import config

logger = logging.getLogger("tournaments.db")


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


engine = create_async_engine(
    config.DATABASE_URL,
    echo=config.SQL_ECHO,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@event.listens_for(engine.sync_engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores REFERENCES clauses unless asked per connection."""
    if engine.dialect.name != "sqlite":
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def init_db() -> None:
    """Create all tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def reset_db() -> None:
    """Drop and recreate every table."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def clear_all(session: AsyncSession) -> None:
    """Remove every row, dependents first. Caller commits."""
    from tournaments.models import Player, Registration, Tournament

    await session.execute(delete(Registration))
    # Detach children so the self-referencing foreign key cannot block the bulk delete
    await session.execute(update(Tournament).values(parent_tournament_name=None))
    await session.execute(delete(Tournament))
    await session.execute(delete(Player))


async def check_connection() -> bool:
    """Return True if the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database connection error: %s", e)
        return False
    logger.info("Database connection successful (%s)", engine.url.render_as_string(hide_password=True))
    return True
