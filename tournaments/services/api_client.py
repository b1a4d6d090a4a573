"""Async HTTP client for the Tournaments API."""
from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

logger = logging.getLogger("tournaments.client")

DEFAULT_TIMEOUT = 10.0


class ApiClientError(Exception):
    """Non-success response from the API."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


def _seg(value: str) -> str:
    return quote(value, safe="")


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return body.get("detail") or body.get("title") or response.text
    return response.text


class TournamentsApiClient:
    """Players, tournaments and registrations over HTTP. Resources are unwrapped to their data."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> TournamentsApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            detail = _error_detail(response)
            logger.debug("%s %s -> %s %s", method, path, response.status_code, detail)
            raise ApiClientError(response.status_code, detail)
        return response

    # --- Players ---

    async def list_players(self) -> list[dict]:
        r = await self._request("GET", "/api/players")
        return [res["data"] for res in r.json()]

    async def get_player(self, gamertag: str) -> dict:
        r = await self._request("GET", f"/api/players/{_seg(gamertag)}")
        return r.json()["data"]

    async def create_player(self, gamertag: str, name: str, age: int = 1) -> dict:
        r = await self._request("POST", "/api/players", json={"gamertag": gamertag, "name": name, "age": age})
        return r.json()["data"]

    async def update_player(self, gamertag: str, name: str, age: int) -> dict:
        player = {"gamertag": gamertag, "name": name, "age": age}
        await self._request("PUT", f"/api/players/{_seg(gamertag)}", json=player)
        return player

    async def delete_player(self, gamertag: str) -> None:
        await self._request("DELETE", f"/api/players/{_seg(gamertag)}")

    async def get_tournaments_for_player(self, gamertag: str) -> list[dict]:
        """Tournaments the player is registered in. An unknown player has none."""
        try:
            r = await self._request("GET", f"/api/players/{_seg(gamertag)}/tournaments")
        except ApiClientError as e:
            if e.status_code == 404:
                return []
            raise
        return [res["data"] for res in r.json()]

    # --- Tournaments ---

    async def list_tournaments(self) -> list[dict]:
        r = await self._request("GET", "/api/tournaments")
        return [res["data"] for res in r.json()]

    async def get_tournament(self, name: str, include_sub_tournaments: bool = False) -> dict:
        params = {"include": "sub-tournaments"} if include_sub_tournaments else None
        r = await self._request("GET", f"/api/tournaments/{_seg(name)}", params=params)
        return r.json()["data"]

    async def create_tournament(self, name: str, parent_tournament_name: Optional[str] = None) -> dict:
        body = {"name": name, "parentTournamentName": parent_tournament_name}
        r = await self._request("POST", "/api/tournaments", json=body)
        return r.json()["data"]

    async def update_tournament(self, name: str, parent_tournament_name: Optional[str] = None) -> dict:
        body = {"name": name, "parentTournamentName": parent_tournament_name}
        await self._request("PUT", f"/api/tournaments/{_seg(name)}", json=body)
        return body

    async def delete_tournament(self, name: str) -> None:
        await self._request("DELETE", f"/api/tournaments/{_seg(name)}")

    # --- Registrations ---

    async def register_player(self, tournament_name: str, gamertag: str) -> dict:
        r = await self._request("POST", f"/api/tournaments/{_seg(tournament_name)}/players/{_seg(gamertag)}")
        return r.json()["data"]

    async def get_registration(self, tournament_name: str, gamertag: str) -> dict:
        r = await self._request("GET", f"/api/tournaments/{_seg(tournament_name)}/players/{_seg(gamertag)}")
        return r.json()["data"]

    async def get_players_in_tournament(self, tournament_name: str) -> list[dict]:
        r = await self._request("GET", f"/api/tournaments/{_seg(tournament_name)}/players")
        return [entry["player"] for entry in r.json().get("players", []) if entry.get("player")]

    async def remove_player_from_tournament(self, tournament_name: str, gamertag: str) -> None:
        await self._request("DELETE", f"/api/registrations/{_seg(tournament_name)}/{_seg(gamertag)}")

    # --- Status ---

    async def get_status(self) -> dict:
        r = await self._request("GET", "/api/testutility/status")
        return r.json()

    async def reset_database(self) -> dict:
        r = await self._request("POST", "/api/testutility/reset")
        return r.json()
