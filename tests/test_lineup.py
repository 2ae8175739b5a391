import pytest

from squadkit.errors import PolicyViolation
from squadkit.selection import (
    add_substitute,
    map_to_positions,
    place_player,
    remove_player,
    selection_from_mapping,
    set_selection_captain,
)


def _selection():
    mapping = map_to_positions("1-1-2-1", ["p1", "p2", "p3", "p4", "p5", "p6"], "5-a-side")
    return selection_from_mapping(
        mapping,
        event_id="e1",
        team_id="t1",
        substitutes=list(mapping.unassigned) + ["p7"],
        captain_id="p2",
    )


def test_selection_from_mapping():
    selection = _selection()

    assert selection.positioned_ids == ["p1", "p2", "p3", "p4", "p5"]
    assert selection.substitute_players == ["p6", "p7"]
    assert selection.formation == "1-1-2-1"


def test_substitute_brought_on_leaves_bench():
    selection = place_player(_selection(), "p6", "AMC")

    assert "p6" not in selection.substitute_players
    assert ("p6", "AMC") in [(p.player_id, p.position) for p in selection.player_positions]


def test_player_moved_to_bench_leaves_position():
    selection = add_substitute(_selection(), "p1")

    assert "p1" not in selection.positioned_ids
    assert selection.substitute_players[-1] == "p1"


def test_removing_captain_clears_captain():
    selection = remove_player(_selection(), "p2")

    assert selection.captain_id is None
    assert not selection.contains("p2")


def test_captain_must_be_in_lineup():
    with pytest.raises(PolicyViolation):
        set_selection_captain(_selection(), "p99")

    assert set_selection_captain(_selection(), "p7").captain_id == "p7"
