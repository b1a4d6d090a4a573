"""Resource schemas and hypermedia links for API responses."""
from __future__ import annotations

from typing import Annotated, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from tournaments.models import Player, Registration, Tournament
from tournaments.models.player import MAX_AGE, MIN_AGE

# Names and gamertags: surrounding whitespace stripped, blank rejected
NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=128)]


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)


class Link(ApiModel):
    href: str
    rel: str
    method: str


# --- Entity payloads ---


class PlayerData(ApiModel):
    gamertag: NameStr
    name: NameStr
    age: int = Field(default=MIN_AGE, ge=MIN_AGE, le=MAX_AGE)


class TournamentData(ApiModel):
    name: str = Field(min_length=1, max_length=128)
    parent_tournament_name: Optional[str] = None
    sub_tournaments: list[TournamentData] = Field(default_factory=list)


class TournamentBody(ApiModel):
    name: NameStr
    parent_tournament_name: Optional[str] = None


class RegistrationData(ApiModel):
    id: int
    tournament_name: str
    player_gamertag: str


# --- Resources ---


class PlayerResource(ApiModel):
    data: PlayerData
    links: list[Link]


class TournamentResource(ApiModel):
    data: TournamentData
    links: list[Link]


class RegistrationResource(ApiModel):
    data: RegistrationData
    links: list[Link]


class RegisteredPlayer(ApiModel):
    player: PlayerData
    links: list[Link]


class TournamentSummary(ApiModel):
    name: str
    parent_tournament_name: Optional[str] = None


class PlayersInTournament(ApiModel):
    tournament: TournamentSummary
    players: list[RegisteredPlayer]
    links: list[Link]


# --- Link builders ---


def _seg(value: str) -> str:
    return quote(value, safe="")


def player_links(gamertag: str) -> list[Link]:
    href = f"/api/players/{_seg(gamertag)}"
    return [
        Link(href=href, rel="self", method="GET"),
        Link(href=href, rel="update", method="PUT"),
        Link(href=href, rel="delete", method="DELETE"),
        Link(href=f"{href}/tournaments", rel="tournaments", method="GET"),
    ]


def tournament_links(name: str, parent_name: Optional[str] = None) -> list[Link]:
    href = f"/api/tournaments/{_seg(name)}"
    links = [
        Link(href=href, rel="self", method="GET"),
        Link(href=href, rel="update", method="PUT"),
        Link(href=href, rel="delete", method="DELETE"),
        Link(href=f"{href}?include=sub-tournaments", rel="sub-tournaments", method="GET"),
        Link(href=f"{href}/players/{{gamertag}}", rel="register-player", method="POST"),
        Link(href=f"{href}/players", rel="registered-players", method="GET"),
    ]
    if parent_name:
        links.append(Link(href=f"/api/tournaments/{_seg(parent_name)}", rel="parent-tournament", method="GET"))
    return links


def registration_links(tournament_name: str, gamertag: str) -> list[Link]:
    return [
        Link(href=f"/api/tournaments/{_seg(tournament_name)}/players/{_seg(gamertag)}", rel="self", method="GET"),
        Link(href=f"/api/registrations/{_seg(tournament_name)}/{_seg(gamertag)}", rel="delete", method="DELETE"),
        Link(href=f"/api/players/{_seg(gamertag)}", rel="player", method="GET"),
        Link(href=f"/api/tournaments/{_seg(tournament_name)}", rel="tournament", method="GET"),
    ]


def tournament_data(t: Tournament, sub_tournaments: Optional[list[Tournament]] = None) -> TournamentData:
    """Build the payload explicitly; ORM relationships are never touched here."""
    return TournamentData(
        name=t.name,
        parent_tournament_name=t.parent_tournament_name,
        sub_tournaments=[tournament_data(s) for s in sub_tournaments or []],
    )


def player_resource(player: Player) -> PlayerResource:
    return PlayerResource(data=PlayerData.model_validate(player), links=player_links(player.gamertag))


def tournament_resource(t: Tournament, sub_tournaments: Optional[list[Tournament]] = None) -> TournamentResource:
    return TournamentResource(
        data=tournament_data(t, sub_tournaments),
        links=tournament_links(t.name, t.parent_tournament_name),
    )


def registration_resource(registration: Registration) -> RegistrationResource:
    return RegistrationResource(
        data=RegistrationData(
            id=registration.id,
            tournament_name=registration.tournament_name,
            player_gamertag=registration.player_gamertag,
        ),
        links=registration_links(registration.tournament_name, registration.player_gamertag),
    )


def unregister_link(tournament_name: str, gamertag: str) -> Link:
    return Link(href=f"/api/registrations/{_seg(tournament_name)}/{_seg(gamertag)}", rel="unregister", method="DELETE")
