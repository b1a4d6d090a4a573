"""API discovery endpoints."""
from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from web.api.hateoas import Link

router = APIRouter(tags=["home"])

API_ROOT_LINKS = [
    Link(href="/api/players", rel="players", method="GET"),
    Link(href="/api/players", rel="create-player", method="POST"),
    Link(href="/api/players/{gamertag}", rel="get-player", method="GET"),
    Link(href="/api/players/{gamertag}", rel="update-player", method="PUT"),
    Link(href="/api/players/{gamertag}", rel="delete-player", method="DELETE"),
    Link(href="/api/players/{gamertag}/tournaments", rel="player-tournaments", method="GET"),
    Link(href="/api/tournaments", rel="tournaments", method="GET"),
    Link(href="/api/tournaments", rel="create-tournament", method="POST"),
    Link(href="/api/tournaments/{name}", rel="get-tournament", method="GET"),
    Link(href="/api/tournaments/{name}", rel="update-tournament", method="PUT"),
    Link(href="/api/tournaments/{name}", rel="delete-tournament", method="DELETE"),
    Link(href="/api/tournaments/{name}/players", rel="registered-players", method="GET"),
    Link(href="/api/tournaments/{name}/players/{gamertag}", rel="register-player", method="POST"),
    Link(href="/api/registrations", rel="registrations", method="GET"),
    Link(href="/api/registrations/{id}", rel="get-registration", method="GET"),
    Link(href="/api/registrations/{id}", rel="delete-registration", method="DELETE"),
    Link(href="/api/registrations/{name}/{gamertag}", rel="unregister-player", method="DELETE"),
    Link(href="/api/testutility/status", rel="api-status", method="GET"),
]


@router.get("/api")
async def api_root():
    """Entry point listing every resource and operation."""
    return {"links": [link.model_dump() for link in API_ROOT_LINKS]}


@router.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/api")


@router.get("/api/health")
async def health():
    return {"status": "ok"}
