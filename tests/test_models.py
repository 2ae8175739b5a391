import pytest
from pydantic import ValidationError

from squadkit.models import (
    Event,
    KitIcons,
    Player,
    PlayerPosition,
    Selection,
    StaffSelection,
    YearGroup,
)


def test_player_is_frozen():
    player = Player(id="p1", name="Alex", squad_number=7)

    assert player.is_active
    assert player.is_match_eligible

    with pytest.raises((TypeError, ValidationError)):
        player.name = "Sam"  # type: ignore[misc]


def test_player_rejects_non_positive_squad_number():
    with pytest.raises(ValidationError):
        Player(id="p1", name="Alex", squad_number=0)


def test_limited_subscription_is_not_match_eligible():
    assert not Player(id="p1", name="Alex", subscription_type="limited").is_match_eligible
    assert not Player(id="p2", name="Bo", subscription_type="free").is_match_eligible


def test_event_match_flag():
    training = Event(id="e1", team_id="t1", date="2026-10-20")
    fixture = Event(id="e2", team_id="t1", date="2026-10-21", event_type="fixture")

    assert not training.is_match
    assert fixture.is_match


def test_default_kit_icons():
    icons = KitIcons()

    assert icons.home.shirt_color == "#FF0000"
    assert icons.away.shirt_color == "#FFFFFF"
    assert icons.training.shirt_color == "#0000FF"
    assert icons.goalkeeper.shirt_color == "#00FF00"


def test_year_group_soft_limit_is_advisory():
    year_group = YearGroup(id="yg1", name="U10s", club_id="c1", soft_player_limit=20)

    assert year_group.exceeds_soft_limit(22)
    assert not year_group.exceeds_soft_limit(20)
    assert not YearGroup(id="yg2", name="U9s", club_id="c1").exceeds_soft_limit(99)


def test_position_and_staff_accept_camel_case_keys():
    position = PlayerPosition.model_validate({"playerId": "p1", "position": "GK"})
    staff = StaffSelection.model_validate({"staffId": "s1"})

    assert position.player_id == "p1"
    assert staff.staff_id == "s1"
    assert staff.role == "coach"


def test_selection_rejects_player_in_two_places():
    with pytest.raises(ValidationError):
        Selection(
            event_id="e1",
            team_id="t1",
            player_positions=[PlayerPosition(player_id="p1", position="GK")],
            substitute_players=["p1"],
        )


def test_selection_rejects_duplicate_position_player():
    with pytest.raises(ValidationError):
        Selection(
            event_id="e1",
            team_id="t1",
            player_positions=[
                PlayerPosition(player_id="p1", position="CB"),
                PlayerPosition(player_id="p1", position="LB"),
            ],
        )


def test_selection_rejects_captain_outside_roster():
    with pytest.raises(ValidationError):
        Selection(event_id="e1", team_id="t1", substitute_players=["p2"], captain_id="p1")


def test_selection_location_label():
    selection = Selection(event_id="e1", team_id="t1", team_number=2, period_number=3)

    assert selection.location_label == "Team 2 Period 3"
