"""Registration endpoints: register, look up, list and remove."""
from __future__ import annotations

from fastapi import APIRouter, Response, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from tournaments.errors import NotFoundError
from tournaments.models import Registration
from tournaments.models.base import async_session_factory
from tournaments.services import cascade
from tournaments.services.lookups import get_registration, get_tournament
from tournaments.services.registration_rules import register

from web.api.hateoas import (
    PlayerData,
    PlayersInTournament,
    RegisteredPlayer,
    RegistrationResource,
    TournamentSummary,
    player_links,
    registration_links,
    registration_resource,
    tournament_links,
)

router = APIRouter(prefix="/api", tags=["registrations"])


@router.post(
    "/tournaments/{tournament_name}/players/{gamertag}",
    response_model=RegistrationResource,
    status_code=status.HTTP_201_CREATED,
)
async def register_player(tournament_name: str, gamertag: str, response: Response):
    """Register a player. In a sub-tournament the player must already be in the parent."""
    async with async_session_factory() as session:
        reg = await register(session, tournament_name, gamertag)
        resource = registration_resource(reg)
    response.headers["Location"] = resource.links[0].href
    return resource


@router.get("/tournaments/{tournament_name}/players", response_model=PlayersInTournament)
async def get_players_in_tournament(tournament_name: str):
    """Players registered in a tournament. An empty tournament yields an empty list, not 404."""
    async with async_session_factory() as session:
        t = await get_tournament(session, tournament_name)
        if t is None:
            raise NotFoundError(f"Tournament '{tournament_name}' not found.")
        result = await session.execute(
            select(Registration)
            .where(Registration.tournament_name == tournament_name)
            .order_by(Registration.id)
            .options(selectinload(Registration.player))
        )
        players = []
        for reg in result.scalars().all():
            # self and update for the player, delete for this registration
            links = player_links(reg.player_gamertag)[:2] + registration_links(tournament_name, reg.player_gamertag)[1:2]
            players.append(RegisteredPlayer(player=PlayerData.model_validate(reg.player), links=links))
        return PlayersInTournament(
            tournament=TournamentSummary(name=t.name, parent_tournament_name=t.parent_tournament_name),
            players=players,
            links=tournament_links(t.name),
        )


@router.get("/tournaments/{tournament_name}/players/{gamertag}", response_model=RegistrationResource)
async def get_registration_by_pair(tournament_name: str, gamertag: str):
    async with async_session_factory() as session:
        reg = await get_registration(session, tournament_name, gamertag)
        if reg is None:
            raise NotFoundError(f"Player '{gamertag}' is not registered in tournament '{tournament_name}'.")
        return registration_resource(reg)


@router.get("/registrations", response_model=list[RegistrationResource])
async def list_registrations():
    async with async_session_factory() as session:
        result = await session.execute(select(Registration).order_by(Registration.id))
        return [registration_resource(r) for r in result.scalars().all()]


@router.get("/registrations/{registration_id}", response_model=RegistrationResource)
async def get_registration_by_id(registration_id: int):
    """Get a registration by id. A non-integer id is a malformed request (400), not a missing one."""
    async with async_session_factory() as session:
        reg = await session.get(Registration, registration_id)
        if reg is None:
            raise NotFoundError(f"Registration {registration_id} not found.")
        return registration_resource(reg)


@router.delete("/registrations/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_registration_by_id(registration_id: int):
    """Remove a registration and the same player's registrations in every sub-tournament.

    A non-integer id fails request validation (400) rather than lookup (404).
    """
    async with async_session_factory() as session:
        await cascade.remove_registration_by_id(session, registration_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/registrations/{tournament_name}/{gamertag}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_registration(tournament_name: str, gamertag: str):
    """Remove a player from a tournament and from all of its sub-tournaments. The parent is untouched."""
    async with async_session_factory() as session:
        await cascade.remove_registration(session, tournament_name, gamertag)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
