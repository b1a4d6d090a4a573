"""Database status and reset, for development and end-to-end tests."""
from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

import config
from tournaments.errors import InvalidRequestError, StorageFailureError
from tournaments.models import Player, Registration, Tournament
from tournaments.models.base import async_session_factory, clear_all

router = APIRouter(prefix="/api/testutility", tags=["test utility"])


@router.get("/status")
async def database_status():
    """Row counts per table and whether the database is empty."""
    async with async_session_factory() as session:
        players = await session.scalar(select(func.count()).select_from(Player))
        tournaments = await session.scalar(select(func.count()).select_from(Tournament))
        registrations = await session.scalar(select(func.count()).select_from(Registration))
    return {
        "players": players,
        "tournaments": tournaments,
        "registrations": registrations,
        "isEmpty": players == 0 and tournaments == 0 and registrations == 0,
    }


@router.post("/reset")
async def reset_database():
    """Remove all players, tournaments and registrations. Development only."""
    if not config.is_development():
        raise InvalidRequestError("This operation is only allowed in development environment")
    async with async_session_factory() as session:
        try:
            await clear_all(session)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StorageFailureError(f"Error resetting database: {e}") from e
    return {"ok": True, "message": "Database reset completed successfully"}
