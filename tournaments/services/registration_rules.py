"""Registering players in tournaments."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tournaments.errors import ConflictError, InvalidRequestError, NotFoundError, StorageFailureError
from tournaments.models import Registration
from tournaments.services.lookups import get_player, get_tournament, registration_exists

logger = logging.getLogger("tournaments.registrations")


async def register(session: AsyncSession, tournament_name: str, gamertag: str) -> Registration:
    """Register a player in a tournament and commit.

    Checks run in a fixed order and stop at the first failure so each failure
    class maps to its own error: missing identifiers, unknown tournament,
    unknown player, duplicate registration, then the parent registration rule.
    The parent rule looks one level up only.
    """
    if not tournament_name or not gamertag:
        raise InvalidRequestError("Tournament name and player gamertag are required.")

    tournament = await get_tournament(session, tournament_name)
    if tournament is None:
        raise NotFoundError(f"Tournament '{tournament_name}' not found.")

    if await get_player(session, gamertag) is None:
        raise NotFoundError(f"Player '{gamertag}' not found.")

    if await registration_exists(session, tournament_name, gamertag):
        raise ConflictError(f"Player '{gamertag}' is already registered in tournament '{tournament_name}'.")

    parent_name = tournament.parent_tournament_name
    if parent_name and not await registration_exists(session, parent_name, gamertag):
        logger.info("Rejected %r in %r: not registered in parent %r", gamertag, tournament_name, parent_name)
        raise InvalidRequestError(
            f"Player must be registered in parent tournament '{parent_name}' first.",
            title="Parent registration required",
        )

    registration = Registration(tournament_name=tournament_name, player_gamertag=gamertag)
    session.add(registration)
    try:
        await session.commit()
    except IntegrityError as e:
        await session.rollback()
        # A concurrent request may have inserted the same pair first
        if await registration_exists(session, tournament_name, gamertag):
            raise ConflictError(
                f"Player '{gamertag}' is already registered in tournament '{tournament_name}'."
            ) from e
        logger.exception("Registering %r in %r failed", gamertag, tournament_name)
        raise StorageFailureError(f"Could not register player '{gamertag}': {e.orig}") from e
    await session.refresh(registration)
    logger.info("Registered %r in %r (id=%s)", gamertag, tournament_name, registration.id)
    return registration
