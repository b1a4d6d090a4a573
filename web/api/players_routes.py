"""Player endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Response, status
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from tournaments.errors import NotFoundError
from tournaments.models import Player, Registration
from tournaments.models.base import async_session_factory
from tournaments.services import players as player_service
from tournaments.services.lookups import get_player

from web.api.hateoas import (
    PlayerData,
    PlayerResource,
    TournamentResource,
    player_resource,
    tournament_resource,
    unregister_link,
)

router = APIRouter(prefix="/api/players", tags=["players"])


@router.post("", response_model=PlayerResource, status_code=status.HTTP_201_CREATED)
async def create_player(body: PlayerData, response: Response):
    """Create a player. 409 if the gamertag is taken."""
    async with async_session_factory() as session:
        player = await player_service.create_player(session, body.gamertag, body.name, body.age)
        resource = player_resource(player)
    response.headers["Location"] = resource.links[0].href
    return resource


@router.get("", response_model=list[PlayerResource])
async def list_players():
    async with async_session_factory() as session:
        result = await session.execute(select(Player).order_by(Player.gamertag))
        return [player_resource(p) for p in result.scalars().all()]


@router.get("/{gamertag}", response_model=PlayerResource)
async def get_player_by_gamertag(gamertag: str):
    async with async_session_factory() as session:
        player = await get_player(session, gamertag)
        if player is None:
            raise NotFoundError(f"Player '{gamertag}' not found.")
        return player_resource(player)


@router.put("/{gamertag}", status_code=status.HTTP_204_NO_CONTENT)
async def update_player(gamertag: str, body: PlayerData):
    """Update name and age. The gamertag in the body must match the URL."""
    async with async_session_factory() as session:
        await player_service.update_player(session, gamertag, body.gamertag, body.name, body.age)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{gamertag}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_player(gamertag: str):
    """Delete a player together with all of their registrations."""
    async with async_session_factory() as session:
        await player_service.delete_player(session, gamertag)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{gamertag}/tournaments", response_model=list[TournamentResource])
async def get_tournaments_for_player(gamertag: str):
    """Tournaments the player is registered in, each with an unregister link."""
    async with async_session_factory() as session:
        if await get_player(session, gamertag) is None:
            raise NotFoundError(f"Player '{gamertag}' not found.")
        result = await session.execute(
            select(Registration)
            .where(Registration.player_gamertag == gamertag)
            .order_by(Registration.id)
            .options(selectinload(Registration.tournament))
        )
        resources = []
        for reg in result.scalars().all():
            resource = tournament_resource(reg.tournament)
            resource.links.append(unregister_link(reg.tournament_name, gamertag))
            resources.append(resource)
        return resources
