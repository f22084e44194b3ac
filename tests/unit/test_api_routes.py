"""Integration tests for the FastAPI layer."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from landak.api.app import create_app
from landak.api.runtime import ApiState
from landak.config import Settings
from landak.repository import JsonGameRepository


def _make_app(tmp_path):
    def factory() -> ApiState:
        settings = Settings(data_dir=tmp_path, auction_tick_seconds=30.0)
        return ApiState(settings=settings)

    app = create_app(state_factory=factory)
    transport = ASGITransport(app=app)
    return app, transport


async def _create_game(client: AsyncClient, slot: str = "t", **extra) -> dict:
    payload = {"slot": slot, "humans": [{"name": "Ane"}, {"name": "Bittor"}], "seed": 7}
    payload.update(extra)
    response = await client.post("/games", json=payload)
    assert response.status_code == 201
    return response.json()


async def _act(client: AsyncClient, slot: str, action: dict) -> dict:
    response = await client.post(f"/games/{slot}/actions", json=action)
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_game_lifecycle_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

        response = await client.get("/rules")
        assert response.json()["economy"]["initial_cash"] == 1500

        created = await _create_game(client)
        assert created["game_started"] is True
        assert created["player_count"] == 2
        assert created["current_player_id"] == 0

        rolled = await _act(client, "t", {"kind": "ROLL_DICE", "dice": [4, 3]})
        assert rolled["accepted"] is True
        assert rolled["game"]["players"][0]["position"] == 7

        bought = await _act(client, "t", {"kind": "BUY_PROPERTY"})
        assert bought["accepted"] is True
        assert bought["game"]["players"][0]["cash"] == 1300
        assert bought["game"]["tiles"][7]["owner"] == 0

        again = await _act(client, "t", {"kind": "BUY_PROPERTY"})
        assert again["accepted"] is False
        assert again["reason"] == "already_owned"

        ended = await _act(client, "t", {"kind": "END_TURN"})
        assert ended["game"]["current_player_id"] == 1
        assert ended["game"]["history_depth"] == 1

        response = await client.post("/games/t/undo")
        assert response.status_code == 200
        undone = response.json()
        assert undone["undone"] is True
        assert undone["game"]["current_player_id"] == 0

        response = await client.get("/games")
        assert [game["slot"] for game in response.json()] == ["t"]

        response = await client.post("/games/t/save")
        assert response.status_code == 200
        assert response.json()["path"].endswith("game_t.json")

        await _act(client, "t", {"kind": "END_TURN"})
        response = await client.post("/games/t/load")
        assert response.status_code == 200
        assert response.json()["current_player_id"] == 0

    stored = JsonGameRepository(tmp_path).load("t")
    assert stored.tiles[7].owner == 0


@pytest.mark.asyncio
async def test_bad_requests_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        response = await client.get("/games/missing")
        assert response.status_code == 404

        response = await client.post("/games", json={"slot": "solo", "humans": [{"name": "A"}]})
        assert response.status_code == 400
        assert response.json()["detail"]["reason"] == "invalid_players"

        await _create_game(client)
        response = await client.post("/games/t/actions", json={"kind": "TELEPORT"})
        assert response.status_code == 400

        response = await client.post("/games/t/actions", json={"kind": "ROLL_DICE", "dice": "x"})
        assert response.status_code == 400

        response = await client.post("/games/missing/save")
        assert response.status_code == 404


@pytest.mark.asyncio
async def test_bots_and_clock_via_api(tmp_path):
    app, transport = _make_app(tmp_path)

    async with (
        app.router.lifespan_context(app),
        AsyncClient(transport=transport, base_url="http://test") as client,
    ):
        await _create_game(client, "b", humans=[{"name": "Ane"}], bots=1)
        await _act(client, "b", {"kind": "ROLL_DICE", "dice": [1, 2]})
        await _act(client, "b", {"kind": "END_TURN"})

        response = await client.post("/games/b/bots/play")
        assert response.status_code == 200
        played = response.json()
        assert played["steps"] == 3
        assert played["rejected"] == 0
        assert played["game"]["current_player_id"] == 0

        started = await _act(client, "b", {"kind": "START_AUCTION", "tile_id": 1})
        auction_id = started["game"]["auction"]["id"]

        response = await client.post(
            "/games/b/auction/clock", json={"enabled": True, "interval_seconds": 30}
        )
        assert response.status_code == 200
        status_payload = response.json()
        assert status_payload == {
            "enabled": True,
            "interval_seconds": 30.0,
            "auction_id": auction_id,
        }

        response = await client.get("/health")
        assert response.json()["clocked_slots"] == ["b"]

        response = await client.post("/games/b/auction/clock", json={"enabled": False})
        assert response.json()["enabled"] is False

        response = await client.get("/games/b/auction/clock")
        assert response.json()["enabled"] is False
