"""Creating and updating tournaments."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tournaments.errors import ConflictError, InvalidRequestError, NotFoundError, StorageFailureError
from tournaments.models import Tournament
from tournaments.services.hierarchy import validate_new_tournament, validate_reparent
from tournaments.services.lookups import get_tournament, tournament_exists

logger = logging.getLogger("tournaments.catalog")


def _normalize_parent(parent_name: Optional[str]) -> Optional[str]:
    return parent_name or None


async def create_tournament(session: AsyncSession, name: str, parent_name: Optional[str] = None) -> Tournament:
    """Create a tournament, optionally under an existing parent."""
    if not name:
        raise InvalidRequestError("Tournament name is required.")
    parent_name = _normalize_parent(parent_name)
    if await tournament_exists(session, name):
        raise ConflictError(f"Tournament '{name}' already exists.")
    await validate_new_tournament(session, name, parent_name)

    tournament = Tournament(name=name, parent_tournament_name=parent_name)
    session.add(tournament)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        # Lost a race against a concurrent create of the same name
        if await tournament_exists(session, name):
            raise ConflictError(f"Tournament '{name}' already exists.") from e
        logger.exception("Creating tournament %r failed", name)
        raise StorageFailureError(f"Could not create tournament '{name}': {e.orig}") from e
    logger.info("Created tournament %r (parent=%r)", name, parent_name)
    return tournament


async def update_tournament(
    session: AsyncSession, path_name: str, name: str, parent_name: Optional[str] = None
) -> Tournament:
    """Replace a tournament's parent. The name is its identity and cannot change."""
    if path_name != name:
        raise InvalidRequestError("Tournament name in URL must match the request body.")
    tournament = await get_tournament(session, path_name)
    if tournament is None:
        raise NotFoundError(f"Tournament '{path_name}' not found.")
    parent_name = _normalize_parent(parent_name)
    await validate_reparent(session, tournament, parent_name)

    tournament.parent_tournament_name = parent_name
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        logger.exception("Updating tournament %r failed", name)
        raise StorageFailureError(f"Could not update tournament '{name}': {e.orig}") from e
    logger.info("Updated tournament %r (parent=%r)", name, parent_name)
    return tournament
