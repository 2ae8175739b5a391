import pytest

from squadkit.errors import PolicyViolation
from squadkit.persistence import SquadStore
from squadkit.services import SquadService, record_availability


@pytest.fixture
def service(tmp_path, monkeypatch):
    monkeypatch.delenv("SQUADKIT_DB_PATH", raising=False)
    store = SquadStore(tmp_path / "squadkit.sqlite")
    store.insert(
        "events",
        [{"id": "e1", "team_id": "t1", "date": "2026-10-24", "event_type": "match", "title": "Cup"}],
    )
    store.insert(
        "players",
        [
            {"id": "p1", "name": "Alex", "squad_number": 4, "team_id": "t1"},
            {"id": "p2", "name": "Bo", "squad_number": 7, "team_id": "t1", "subscription_type": "limited"},
            {"id": "p3", "name": "Cam", "squad_number": 9, "team_id": "t1"},
            {"id": "p4", "name": "Dee", "squad_number": 1, "team_id": "t1"},
            {"id": "p5", "name": "Eve", "squad_number": 2, "team_id": "t2"},
        ],
    )
    store.insert(
        "user_players",
        [
            {"user_id": "u1", "player_id": "p1"},
            {"user_id": "u3", "player_id": "p3"},
            {"user_id": "u4", "player_id": "p4"},
        ],
    )
    record_availability(store, event_id="e1", user_id="u1", role="parent", status="available")
    record_availability(store, event_id="e1", user_id="u3", role="parent", status="unavailable")
    return SquadService(store)


def test_add_and_list_squad(service):
    event = service.event("e1")

    service.add(event, "p1")
    service.add(event, "p4")

    players = service.squad_players(event)
    assert [(p.id, p.availability_status) for p in players] == [("p1", "available"), ("p4", None)]
    rows = service.store.fetch("team_squads", {"event_id": "e1"})
    assert {row["availability_status"] for row in rows} == {"available", "pending"}


def test_unavailable_player_rejected(service):
    event = service.event("e1")

    with pytest.raises(PolicyViolation):
        service.add(event, "p3")
    assert service.load(event).player_ids == ()


def test_limited_subscription_rejected_for_match(service):
    with pytest.raises(PolicyViolation):
        service.add(service.event("e1"), "p2")


def test_captaincy_is_persisted(service):
    event = service.event("e1")
    service.add(event, "p1")

    service.set_captain(event, "p4")
    service.set_vice_captain(event, "p1")

    squad = service.load(event)
    assert squad.player_ids == ("p1", "p4")
    assert (squad.captain_id, squad.vice_captain_id) == ("p4", "p1")

    service.remove(event, "p4")
    squad = service.load(event)
    assert squad.player_ids == ("p1",)
    assert squad.captain_id is None
    assert squad.vice_captain_id == "p1"


def test_missing_player_raises_key_error(service):
    with pytest.raises(KeyError):
        service.add(service.event("e1"), "nobody")


def test_player_from_another_team_rejected(service):
    event = service.event("e1")

    with pytest.raises(PolicyViolation, match="not a member"):
        service.add(event, "p5")
    with pytest.raises(PolicyViolation):
        service.set_captain(event, "p5")
    assert service.load(event).player_ids == ()


def test_stored_squad_status_follows_new_responses(service):
    event = service.event("e1")
    service.add(event, "p1")
    service.add(event, "p4")

    record_availability(service.store, event_id="e1", user_id="u1", role="parent", status="unavailable")
    record_availability(service.store, event_id="e1", user_id="u4", role="player", status="available")

    rows = service.store.fetch("team_squads", {"event_id": "e1"}, order_by="created_at")
    assert [(row["player_id"], row["availability_status"]) for row in rows] == [
        ("p1", "unavailable"),
        ("p4", "available"),
    ]
