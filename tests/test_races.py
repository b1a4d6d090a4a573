"""Tests for inserts that lose a race to a concurrent request, and for empty identifiers."""
import pytest

from tournaments.errors import ConflictError, InvalidRequestError
from tournaments.models import Player, Registration, Tournament
from tournaments.models.base import async_session_factory
from tournaments.services import catalog, players, registration_rules
from tournaments.services.catalog import create_tournament
from tournaments.services.players import create_player
from tournaments.services.registration_rules import register


async def _insert_elsewhere(row):
    """Commit a row through a separate session, as a concurrent request would."""
    async with async_session_factory() as other:
        other.add(row)
        await other.commit()


def _lose_race_once(monkeypatch, module, check_name, row_factory):
    """The first existence check says "absent" after another session has inserted the key."""
    real_check = getattr(module, check_name)
    state = {"raced": False}

    async def check(session, *args):
        if not state["raced"]:
            state["raced"] = True
            await _insert_elsewhere(row_factory())
            return False
        return await real_check(session, *args)

    monkeypatch.setattr(module, check_name, check)


@pytest.mark.asyncio
async def test_register_race_becomes_conflict(session, monkeypatch):
    await create_tournament(session, "T")
    await create_player(session, "p1", "One", 20)
    _lose_race_once(
        monkeypatch, registration_rules, "registration_exists",
        lambda: Registration(tournament_name="T", player_gamertag="p1"),
    )

    with pytest.raises(ConflictError):
        await register(session, "T", "p1")


@pytest.mark.asyncio
async def test_create_tournament_race_becomes_conflict(session, monkeypatch):
    _lose_race_once(monkeypatch, catalog, "tournament_exists", lambda: Tournament(name="T"))

    with pytest.raises(ConflictError, match="already exists"):
        await create_tournament(session, "T")


@pytest.mark.asyncio
async def test_create_player_race_becomes_conflict(session, monkeypatch):
    _lose_race_once(monkeypatch, players, "player_exists", lambda: Player(gamertag="p1", name="First", age=20))

    with pytest.raises(ConflictError, match="already exists"):
        await create_player(session, "p1", "Second", 30)


@pytest.mark.asyncio
@pytest.mark.parametrize("tournament_name,gamertag", [("", "p1"), ("T", ""), ("", "")])
async def test_register_empty_identifiers_rejected(session, tournament_name, gamertag):
    # Neither the tournament nor the player exists; the empty check still comes first
    with pytest.raises(InvalidRequestError):
        await register(session, tournament_name, gamertag)
