"""Creating, updating and deleting players."""
from __future__ import annotations

import logging

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tournaments.errors import ConflictError, InvalidRequestError, NotFoundError, StorageFailureError
from tournaments.models import Player, Registration
from tournaments.services.lookups import get_player, player_exists

logger = logging.getLogger("tournaments.players")


async def create_player(session: AsyncSession, gamertag: str, name: str, age: int) -> Player:
    """Create a player. Gamertags are unique and case-sensitive."""
    if await player_exists(session, gamertag):
        raise ConflictError(f"Player with gamertag '{gamertag}' already exists.")
    player = Player(gamertag=gamertag, name=name, age=age)
    session.add(player)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        if await player_exists(session, gamertag):
            raise ConflictError(f"Player with gamertag '{gamertag}' already exists.") from e
        logger.exception("Creating player %r failed", gamertag)
        raise StorageFailureError(f"Could not create player '{gamertag}': {e.orig}") from e
    logger.info("Created player %r", gamertag)
    return player


async def update_player(session: AsyncSession, path_gamertag: str, gamertag: str, name: str, age: int) -> Player:
    """Update name and age. The gamertag is the player's identity and cannot change."""
    if path_gamertag != gamertag:
        raise InvalidRequestError("Gamertag in URL must match request body.")
    player = await get_player(session, path_gamertag)
    if player is None:
        raise NotFoundError(f"Player '{path_gamertag}' not found.")
    player.name = name
    player.age = age
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        logger.exception("Updating player %r failed", gamertag)
        raise StorageFailureError(f"Could not update player '{gamertag}': {e.orig}") from e
    return player


async def delete_player(session: AsyncSession, gamertag: str) -> int:
    """Delete a player and all of their registrations. Returns registrations removed."""
    player = await get_player(session, gamertag)
    if player is None:
        raise NotFoundError(f"Player '{gamertag}' not found.")
    try:
        result = await session.execute(delete(Registration).where(Registration.player_gamertag == gamertag))
        removed = result.rowcount or 0
        await session.delete(player)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception("Deleting player %r failed; rolled back", gamertag)
        raise StorageFailureError(f"Failed to delete player: {e}") from e
    logger.info("Deleted player %r and %d registration(s)", gamertag, removed)
    return removed
