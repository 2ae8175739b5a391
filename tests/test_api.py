import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from squadkit.api import create_app
from squadkit.models import PlayerPosition, Selection
from squadkit.persistence import SquadStore
from squadkit.services import save_selection


class RecordingNotifier:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[str] = []

    def send(self, event_id: str) -> None:
        if self.fail:
            raise httpx.ConnectError("connection refused")
        self.sent.append(event_id)


def _seed(store: SquadStore) -> None:
    store.insert("year_groups", [{"id": "yg1", "name": "U10s", "club_id": "c1", "soft_player_limit": 20}])
    store.insert(
        "teams",
        [{"id": "t1", "name": "U10s", "age_group": "U10s", "game_format": "11-a-side", "year_group_id": "yg1"}],
    )
    store.insert(
        "players",
        [
            {"id": f"p{i:02d}", "name": f"Player {i:02d}", "squad_number": i, "team_id": "t1"}
            for i in range(1, 23)
        ],
    )
    store.insert(
        "events",
        [{"id": "e1", "team_id": "t1", "date": "2026-10-24", "event_type": "match", "team_count": 2}],
    )
    store.insert("players", [{"id": "outsider", "name": "Other Club Kid", "squad_number": 5, "team_id": "t2"}])
    store.insert(
        "user_players",
        [{"user_id": "parent-1", "player_id": "p01"}, {"user_id": "parent-2", "player_id": "p02"}],
    )


@pytest.fixture
async def client(tmp_path, monkeypatch):
    monkeypatch.delenv("SQUADKIT_DB_PATH", raising=False)
    store = SquadStore(tmp_path / "api.sqlite")
    _seed(store)
    app = create_app(store=store, notifier=RecordingNotifier())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client


@pytest.mark.anyio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_formations_listing_and_mapping(client):
    response = await client.get("/formations", params={"game_format": "7-a-side"})
    assert response.status_code == 200
    assert {item["formation_id"] for item in response.json()} == {"1-2-3-1", "1-3-2-1", "1-1-3-2"}

    response = await client.post(
        "/formations/map",
        json={"formation_id": "4-4-2", "player_ids": [f"p{i}" for i in range(12)]},
    )
    body = response.json()
    assert response.status_code == 200
    assert body["state"] == "fully_assigned"
    assert body["unassigned"] == ["p11"]
    assert body["assignments"][0] == {"slot": 0, "position": "GK", "player_id": "p0"}


@pytest.mark.anyio
async def test_split_preview_and_submit(client):
    payload = {
        "teams": [{"name": "U10s Red"}, {"name": "U10s Blue"}],
        "season_start": "2026-09-01",
        "season_end": "2027-06-30",
        "moves": {"p01": 1},
    }

    preview = await client.post("/year-groups/yg1/split/preview", json=payload)
    body = preview.json()
    assert preview.status_code == 200
    assert body["player_count"] == 22
    assert body["exceeds_soft_limit"] is True
    assert len(body["teams"][0]["player_ids"]) == 10
    assert body["teams"][1]["player_ids"][-1] == "p01"
    assert body["unassigned_player_ids"] == []

    response = await client.post("/year-groups/yg1/split", json=payload)
    assert response.status_code == 200
    body = response.json()
    assert [team["name"] for team in body["teams"]] == ["U10s Red", "U10s Blue"]
    assert body["moved_players"] == 22
    assert body["club_links_created"] == 2


@pytest.mark.anyio
async def test_split_errors(client):
    response = await client.post("/year-groups/yg1/split", json={"teams": [{"name": "Solo"}]})
    assert response.status_code == 400
    assert response.json()["detail"] == "You must have at least 2 teams"

    response = await client.post(
        "/year-groups/yg1/split",
        json={"teams": [{"name": "Red"}, {"name": ""}]},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Every new team needs a name"

    response = await client.post("/year-groups/missing/split/preview", json={"teams": [{"name": "A"}]})
    assert response.status_code == 404


@pytest.mark.anyio
async def test_availability_round_trip(client):
    response = await client.put(
        "/events/e1/availability",
        json={"user_id": "parent-1", "role": "parent", "status": "available"},
    )
    assert response.status_code == 200
    await client.put(
        "/events/e1/availability",
        json={"user_id": "parent-2", "role": "parent", "status": "unavailable"},
    )

    body = (await client.get("/events/e1/availability")).json()
    assert body["players"] == {"p01": "available", "p02": "unavailable"}
    assert body["summary"]["available"] == 1
    assert body["summary"]["unavailable"] == 1
    assert body["summary"]["no_response"] == 20
    assert body["records"][0]["responded_at"] is not None

    missing = await client.get("/events/nope/availability")
    assert missing.status_code == 404


@pytest.mark.anyio
async def test_squad_endpoints(client):
    await client.put(
        "/events/e1/availability",
        json={"user_id": "parent-2", "role": "parent", "status": "unavailable"},
    )

    response = await client.post("/events/e1/squad", json={"player_id": "p02"})
    assert response.status_code == 409

    response = await client.post("/events/e1/squad", json={"player_id": "p03"})
    assert response.status_code == 200

    response = await client.put("/events/e1/squad/captain", json={"player_id": "p05"})
    body = response.json()
    assert body["captain_id"] == "p05"
    assert {p["id"] for p in body["players"]} == {"p03", "p05"}

    response = await client.put("/events/e1/squad/captain", json={"player_id": "p02"})
    assert response.status_code == 409
    assert (await client.get("/events/e1/squad")).json()["captain_id"] == "p05"

    response = await client.delete("/events/e1/squad/p05")
    body = response.json()
    assert body["captain_id"] is None
    assert [p["id"] for p in body["players"]] == ["p03"]

    response = await client.post("/events/e1/squad", json={"player_id": "ghost"})
    assert response.status_code == 404


@pytest.mark.anyio
async def test_selection_conflicts(client):
    store = client.app.state.store
    save_selection(
        store,
        Selection(
            event_id="e1",
            team_id="t1",
            team_number=2,
            period_number=1,
            player_positions=[PlayerPosition(player_id="p07", position="GK")],
            substitute_players=["p08"],
        ),
    )

    response = await client.get("/events/e1/selections/conflicts", params={"team_number": 1})
    assert response.status_code == 200
    assert response.json()["conflicts"] == {
        "p07": ["Team 2 Period 1"],
        "p08": ["Team 2 Period 1"],
    }

    response = await client.get("/events/e1/selections/conflicts", params={"team_number": 2})
    assert response.json()["conflicts"] == {}


@pytest.mark.anyio
async def test_notify(client):
    response = await client.post("/events/e1/notify")
    assert response.json()["sent"] is True
    assert client.app.state.notifier.sent == ["e1"]

    client.app.state.notifier = RecordingNotifier(fail=True)
    response = await client.post("/events/e1/notify")
    assert response.status_code == 200
    assert response.json()["sent"] is False


@pytest.mark.anyio
async def test_squad_rejects_player_from_other_team(client):
    response = await client.post("/events/e1/squad", json={"player_id": "outsider"})
    assert response.status_code == 409
    assert response.json()["detail"] == "Other Club Kid is not a member of this event's team"

    response = await client.put("/events/e1/squad/captain", json={"player_id": "outsider"})
    assert response.status_code == 409
    assert (await client.get("/events/e1/squad")).json()["players"] == []
