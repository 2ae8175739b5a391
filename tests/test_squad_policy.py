import pytest

from squadkit.errors import PolicyViolation
from squadkit.models import Event, Player, SquadPlayer
from squadkit.selection import (
    Squad,
    add_to_squad,
    build_squad_players,
    can_admit,
    check_match_eligibility,
    remove_from_squad,
    set_captain,
    set_vice_captain,
    sort_squad_players,
)


def test_admission_policy():
    assert can_admit("available")
    assert can_admit("pending")
    assert can_admit(None)
    assert not can_admit("unavailable")


def test_unavailable_player_cannot_join():
    squad = Squad(player_ids=("p1",))

    with pytest.raises(PolicyViolation, match="unavailable"):
        add_to_squad(squad, "p2", "unavailable")
    assert squad.player_ids == ("p1",)


def test_captain_outside_squad_is_admitted_in_same_step():
    squad = set_captain(Squad(), "p1", "pending")

    assert squad.player_ids == ("p1",)
    assert squad.captain_id == "p1"


def test_unavailable_captain_leaves_state_unchanged():
    squad = Squad(player_ids=("p1",), captain_id="p1")

    with pytest.raises(PolicyViolation):
        set_captain(squad, "p2", "unavailable")
    assert squad.captain_id == "p1"


def test_removing_captain_clears_armband():
    squad = set_vice_captain(set_captain(Squad(), "p1"), "p2")

    squad = remove_from_squad(squad, "p1")

    assert squad.player_ids == ("p2",)
    assert squad.captain_id is None
    assert squad.vice_captain_id == "p2"


def test_vice_captain_promoted_to_captain_loses_vice_role():
    squad = set_vice_captain(set_captain(Squad(), "p1"), "p2")

    squad = set_captain(squad, "p2")

    assert squad.captain_id == "p2"
    assert squad.vice_captain_id is None


def test_captain_cannot_be_vice_captain():
    squad = set_captain(Squad(), "p1")

    with pytest.raises(PolicyViolation):
        set_vice_captain(squad, "p1")


def test_limited_subscription_blocked_from_matches_only():
    player = Player(id="p1", name="Alex", subscription_type="limited")

    check_match_eligibility(player, Event(id="e1", team_id="t1", date="2026-10-20"))
    with pytest.raises(PolicyViolation):
        check_match_eligibility(player, Event(id="e2", team_id="t1", date="2026-10-21", event_type="match"))


def test_squad_sorted_by_availability_then_number():
    players = [
        SquadPlayer(id="a", name="A", squad_number=9, availability_status="pending"),
        SquadPlayer(id="b", name="B", squad_number=None, availability_status="available"),
        SquadPlayer(id="c", name="C", squad_number=4, availability_status="available"),
        SquadPlayer(id="d", name="D", squad_number=1, availability_status=None),
        SquadPlayer(id="e", name="E", squad_number=2, availability_status="unavailable"),
    ]

    assert [p.id for p in sort_squad_players(players)] == ["c", "b", "a", "e", "d"]


def test_build_squad_players_marks_roles():
    players = [Player(id="p1", name="Alex", squad_number=5), Player(id="p2", name="Bo", squad_number=3)]
    squad = set_vice_captain(set_captain(Squad(), "p1"), "p2")

    view = build_squad_players(players, {"p1": "available"}, squad)

    assert [(p.id, p.squad_role, p.availability_status) for p in view] == [
        ("p1", "captain", "available"),
        ("p2", "vice_captain", None),
    ]
