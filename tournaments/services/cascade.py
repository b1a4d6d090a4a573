"""Cascading deletes over the tournament tree.

Two walks are kept separate: collecting a subtree's tournament names, and
removing rows keyed by those names. Every cascade commits once, so either all
of its rows disappear or none do.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tournaments.errors import NotFoundError, StorageFailureError
from tournaments.models import Registration, Tournament
from tournaments.services.lookups import child_names, get_registration, get_tournament

logger = logging.getLogger("tournaments.cascade")


@dataclass
class CascadeResult:
    """Rows removed by a cascade."""

    tournaments: int = 0
    registrations: int = 0


async def collect_descendant_names(session: AsyncSession, tournament_name: str) -> set[str]:
    """The tournament's own name plus every tournament below it, at any depth."""
    names = {tournament_name}
    pending = [tournament_name]
    while pending:
        current = pending.pop()
        for child in await child_names(session, current):
            if child not in names:
                names.add(child)
                pending.append(child)
    return names


async def _delete_registrations_of(session: AsyncSession, tournament_name: str) -> int:
    result = await session.execute(delete(Registration).where(Registration.tournament_name == tournament_name))
    return result.rowcount or 0


async def _delete_subtree(session: AsyncSession, name: str, result: CascadeResult, visited: set[str]) -> None:
    # Children go first so no row ever points at a deleted parent
    visited.add(name)
    for child in await child_names(session, name):
        if child not in visited:
            await _delete_subtree(session, child, result, visited)
    result.registrations += await _delete_registrations_of(session, name)
    await session.execute(delete(Tournament).where(Tournament.name == name))
    result.tournaments += 1


async def delete_tournament(session: AsyncSession, tournament_name: str) -> CascadeResult:
    """Delete a tournament, all its descendants and all their registrations."""
    tournament = await get_tournament(session, tournament_name)
    if tournament is None:
        raise NotFoundError(f"Tournament '{tournament_name}' not found.")

    result = CascadeResult()
    try:
        await _delete_subtree(session, tournament.name, result, set())
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception("Deleting tournament %r failed; rolled back", tournament_name)
        raise StorageFailureError(f"Failed to delete tournament: {e}", title="Failed to delete tournament") from e
    logger.info(
        "Deleted tournament %r: %d tournament(s), %d registration(s)",
        tournament_name, result.tournaments, result.registrations,
    )
    return result


async def _remove(session: AsyncSession, registration: Registration) -> int:
    tournament_name = registration.tournament_name
    gamertag = registration.player_gamertag
    descendants = await collect_descendant_names(session, tournament_name)
    descendants.discard(tournament_name)
    removed = 0
    try:
        if descendants:
            res = await session.execute(
                delete(Registration).where(
                    Registration.tournament_name.in_(descendants),
                    Registration.player_gamertag == gamertag,
                )
            )
            removed += res.rowcount or 0
        await session.delete(registration)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception("Removing %r from %r failed; rolled back", gamertag, tournament_name)
        raise StorageFailureError(f"Failed to remove registration: {e}") from e
    removed += 1
    logger.info("Removed %r from %r and %d sub-tournament(s)", gamertag, tournament_name, removed - 1)
    return removed


async def remove_registration(session: AsyncSession, tournament_name: str, gamertag: str) -> int:
    """Remove a player from a tournament and from every tournament below it.

    Registrations in the parent and in unrelated tournaments are untouched.
    Returns the number of registrations removed.
    """
    registration = await get_registration(session, tournament_name, gamertag)
    if registration is None:
        raise NotFoundError(f"Player '{gamertag}' is not registered in tournament '{tournament_name}'.")
    return await _remove(session, registration)


async def remove_registration_by_id(session: AsyncSession, registration_id: int) -> int:
    """Same cascade as :func:`remove_registration`, addressed by surrogate key."""
    registration = await session.get(Registration, registration_id)
    if registration is None:
        raise NotFoundError(f"Registration {registration_id} not found.")
    return await _remove(session, registration)
