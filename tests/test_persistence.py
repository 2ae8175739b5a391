from pathlib import Path

import pytest

from squadkit.persistence import SquadStore
from squadkit.services import load_event
from squadkit.services.availability import player_links


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.delenv("SQUADKIT_DB_PATH", raising=False)
    return SquadStore(tmp_path / "squadkit.sqlite")


def test_insert_assigns_ids_and_fetch_filters(store):
    rows = store.insert(
        "players",
        [
            {"name": "Charlie", "squad_number": 3, "team_id": "t1"},
            {"name": "Alex", "squad_number": 1, "team_id": "t1"},
            {"id": "p-fixed", "name": "Bo", "team_id": None},
        ],
    )

    assert len(rows) == 3
    assert all(row["id"] for row in rows)
    assert rows[2]["id"] == "p-fixed"

    by_name = store.fetch("players", {"team_id": "t1"}, order_by="name")
    assert [row["name"] for row in by_name] == ["Alex", "Charlie"]
    assert [row["name"] for row in store.fetch("players", {"team_id": None})] == ["Bo"]
    ids = [rows[0]["id"], "p-fixed"]
    assert {row["name"] for row in store.fetch("players", {"id": ids})} == {"Charlie", "Bo"}
    assert store.fetch("players", {"id": []}) == []


def test_json_columns_round_trip(store):
    store.insert(
        "event_selections",
        [
            {
                "event_id": "e1",
                "team_id": "t1",
                "player_positions": [{"player_id": "p1", "position": "GK"}],
                "substitute_players": ["p2"],
            }
        ],
    )

    row = store.fetch("event_selections", {"event_id": "e1"})[0]
    assert row["player_positions"] == [{"player_id": "p1", "position": "GK"}]
    assert row["substitute_players"] == ["p2"]
    assert row["staff_selection"] is None


def test_update_and_update_where(store):
    [row] = store.insert("players", [{"name": "Alex", "team_id": "t1"}])

    updated = store.update("players", row["id"], {"squad_number": 9})
    assert updated["squad_number"] == 9

    store.insert("players", [{"name": "Bo", "team_id": "t1"}])
    assert store.update_where("players", {"team_id": "t2"}, {"team_id": "t1"}) == 2

    with pytest.raises(KeyError):
        store.update("players", "missing", {"name": "Nobody"})
    with pytest.raises(ValueError):
        store.update_where("players", {"team_id": "t3"}, {})


def test_upsert_replaces_on_conflict(store):
    key = ("event_id", "user_id", "role")
    [first] = store.upsert(
        "event_availability",
        [{"event_id": "e1", "user_id": "u1", "role": "player", "status": "pending"}],
        key,
    )
    [second] = store.upsert(
        "event_availability",
        [{"event_id": "e1", "user_id": "u1", "role": "player", "status": "available"}],
        key,
    )

    assert second["id"] == first["id"]
    assert second["status"] == "available"
    assert len(store.fetch("event_availability")) == 1


def test_remove(store):
    rows = store.insert("team_squads", [{"team_id": "t1", "event_id": "e1", "player_id": p} for p in ("p1", "p2", "p3")])

    store.remove("team_squads", rows[0]["id"])
    assert store.remove_where("team_squads", {"player_id": ["p2"]}) == 1
    assert [row["player_id"] for row in store.fetch("team_squads")] == ["p3"]


def test_unknown_entity_and_columns_rejected(store):
    with pytest.raises(KeyError):
        store.fetch("clubs")
    with pytest.raises(ValueError):
        store.insert("players", [{"name": "Alex", "shoe_size": 5}])


def test_env_path_overrides_constructor(tmp_path, monkeypatch):
    env_path = tmp_path / "env.sqlite"
    monkeypatch.setenv("SQUADKIT_DB_PATH", str(env_path))

    store = SquadStore(tmp_path / "ignored.sqlite")

    assert store.db_path == Path(env_path)
    assert env_path.exists()


def test_optional_text_columns_default_on_read(store):
    store.insert("events", [{"id": "e1", "team_id": "t1", "date": "2026-10-24", "event_type": "match"}])
    store.insert("user_players", [{"user_id": "u1", "player_id": "p1"}])

    assert load_event(store, "e1").title == ""
    assert [link.relationship for link in player_links(store, ["p1"])] == ["parent"]
