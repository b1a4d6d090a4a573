"""Tests for player endpoints."""
import pytest


@pytest.mark.asyncio
async def test_create_player(client):
    r = await client.post("/api/players", json={"gamertag": "s1mple", "name": "Oleksandr", "age": 27})
    assert r.status_code == 201
    assert r.headers["location"] == "/api/players/s1mple"
    body = r.json()
    assert body["data"] == {"gamertag": "s1mple", "name": "Oleksandr", "age": 27}
    rels = [link["rel"] for link in body["links"]]
    assert rels == ["self", "update", "delete", "tournaments"]


@pytest.mark.asyncio
async def test_create_duplicate_player_conflicts(client, create_player):
    await create_player("zywoo")
    r = await client.post("/api/players", json={"gamertag": "zywoo", "name": "Mathieu", "age": 24})
    assert r.status_code == 409
    assert "zywoo" in r.json()["detail"]


@pytest.mark.asyncio
async def test_gamertag_is_case_sensitive(client, create_player):
    await create_player("NiKo")
    r = await client.post("/api/players", json={"gamertag": "niko", "name": "Other", "age": 30})
    assert r.status_code == 201
    r = await client.get("/api/players/NIKO")
    assert r.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"gamertag": "x", "name": "X", "age": 0},
        {"gamertag": "x", "name": "X", "age": 201},
        {"gamertag": "x", "name": "", "age": 20},
        {"gamertag": "", "name": "X", "age": 20},
        {"gamertag": "   ", "name": "X", "age": 20},
        {"gamertag": "x", "name": " ", "age": 20},
        {"name": "X", "age": 20},
    ],
)
async def test_invalid_player_rejected(client, payload):
    r = await client.post("/api/players", json=payload)
    assert r.status_code == 400
    assert r.json()["errors"]


@pytest.mark.asyncio
async def test_get_player(client, create_player):
    await create_player("ropz", name="Robin", age=25)
    r = await client.get("/api/players/ropz")
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Robin"

    r = await client.get("/api/players/missing")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_list_players(client, create_player):
    r = await client.get("/api/players")
    assert r.json() == []
    await create_player("b")
    await create_player("a")
    r = await client.get("/api/players")
    assert [p["data"]["gamertag"] for p in r.json()] == ["a", "b"]


@pytest.mark.asyncio
async def test_update_player(client, create_player):
    await create_player("device", name="Nicolai", age=28)
    r = await client.put("/api/players/device", json={"gamertag": "device", "name": "dev1ce", "age": 29})
    assert r.status_code == 204
    r = await client.get("/api/players/device")
    assert r.json()["data"] == {"gamertag": "device", "name": "dev1ce", "age": 29}


@pytest.mark.asyncio
async def test_update_player_identity_mismatch(client, create_player):
    await create_player("device")
    r = await client.put("/api/players/device", json={"gamertag": "other", "name": "N", "age": 20})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_update_missing_player(client):
    r = await client.put("/api/players/ghost", json={"gamertag": "ghost", "name": "N", "age": 20})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_player_removes_registrations(client, create_chain, create_player):
    await create_chain("Major", "Playoffs")
    await create_player("p1")
    await create_player("p2")
    for gamertag in ("p1", "p2"):
        await client.post(f"/api/tournaments/Major/players/{gamertag}")
        await client.post(f"/api/tournaments/Playoffs/players/{gamertag}")

    r = await client.delete("/api/players/p1")
    assert r.status_code == 204
    assert (await client.get("/api/players/p1")).status_code == 404

    r = await client.get("/api/registrations")
    remaining = {(x["data"]["tournamentName"], x["data"]["playerGamertag"]) for x in r.json()}
    assert remaining == {("Major", "p2"), ("Playoffs", "p2")}

    r = await client.delete("/api/players/p1")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_tournaments_for_player(client, create_chain, create_player):
    await create_chain("Major", "Playoffs")
    await create_chain("Other")
    await create_player("p1")
    await client.post("/api/tournaments/Major/players/p1")
    await client.post("/api/tournaments/Playoffs/players/p1")

    r = await client.get("/api/players/p1/tournaments")
    assert r.status_code == 200
    data = r.json()
    assert [t["data"]["name"] for t in data] == ["Major", "Playoffs"]
    unregister = [link for link in data[1]["links"] if link["rel"] == "unregister"]
    assert unregister == [{"href": "/api/registrations/Playoffs/p1", "rel": "unregister", "method": "DELETE"}]

    r = await client.get("/api/players/nobody/tournaments")
    assert r.status_code == 404
