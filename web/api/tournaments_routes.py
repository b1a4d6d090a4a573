"""Tournament endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Response, status
from sqlalchemy import select

from tournaments.errors import NotFoundError
from tournaments.models import Tournament
from tournaments.models.base import async_session_factory
from tournaments.services import catalog
from tournaments.services.cascade import delete_tournament as cascade_delete_tournament
from tournaments.services.lookups import child_tournaments, get_tournament

from web.api.hateoas import TournamentBody, TournamentResource, tournament_resource

router = APIRouter(prefix="/api/tournaments", tags=["tournaments"])

INCLUDE_SUB_TOURNAMENTS = "sub-tournaments"


@router.post("", response_model=TournamentResource, status_code=status.HTTP_201_CREATED)
async def create_tournament(body: TournamentBody, response: Response):
    """Create a tournament. 409 on duplicate name, 400 on hierarchy violations."""
    async with async_session_factory() as session:
        t = await catalog.create_tournament(session, body.name, body.parent_tournament_name)
        resource = tournament_resource(t)
    response.headers["Location"] = resource.links[0].href
    return resource


@router.get("", response_model=list[TournamentResource])
async def list_tournaments():
    async with async_session_factory() as session:
        result = await session.execute(select(Tournament).order_by(Tournament.name))
        return [tournament_resource(t) for t in result.scalars().all()]


@router.get("/{name}", response_model=TournamentResource)
async def get_tournament_by_name(name: str, include: Optional[str] = None):
    """Get a tournament. Use ?include=sub-tournaments to embed its direct children."""
    async with async_session_factory() as session:
        t = await get_tournament(session, name)
        if t is None:
            raise NotFoundError(f"Tournament '{name}' not found.")
        subs = await child_tournaments(session, name) if include == INCLUDE_SUB_TOURNAMENTS else None
        return tournament_resource(t, subs)


@router.put("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def update_tournament(name: str, body: TournamentBody):
    """Change a tournament's parent. The name in the body must match the URL."""
    async with async_session_factory() as session:
        await catalog.update_tournament(session, name, body.name, body.parent_tournament_name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tournament(name: str):
    """Delete a tournament, its sub-tournaments at every depth, and all their registrations."""
    async with async_session_factory() as session:
        await cascade_delete_tournament(session, name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
