"""Membership changes for a single selection.

Every change goes through :func:`_without_player`, which strips a player from
both the positions and the bench before they are placed again, so a player
can never sit in two places of the same selection.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from squadkit.errors import PolicyViolation
from squadkit.models import PlayerPosition, Selection

from .formation import FormationMapping


def _rebuild(selection: Selection, **changes: Any) -> Selection:
    payload = selection.model_dump()
    payload.update(changes)
    return Selection.model_validate(payload)


def _without_player(selection: Selection, player_id: str) -> Dict[str, Any]:
    return {
        "player_positions": [
            item.model_dump() for item in selection.player_positions if item.player_id != player_id
        ],
        "substitute_players": [pid for pid in selection.substitute_players if pid != player_id],
    }


def place_player(selection: Selection, player_id: str, position: str) -> Selection:
    """Put ``player_id`` at ``position``, moving them off the bench if needed."""

    changes = _without_player(selection, player_id)
    changes["player_positions"].append({"player_id": player_id, "position": position})
    return _rebuild(selection, **changes)


def add_substitute(selection: Selection, player_id: str) -> Selection:
    changes = _without_player(selection, player_id)
    changes["substitute_players"].append(player_id)
    return _rebuild(selection, **changes)


def remove_player(selection: Selection, player_id: str) -> Selection:
    """Drop the player entirely; a captain loses the armband in the same step."""

    changes = _without_player(selection, player_id)
    if selection.captain_id == player_id:
        changes["captain_id"] = None
    return _rebuild(selection, **changes)


def set_selection_captain(selection: Selection, player_id: Optional[str]) -> Selection:
    if player_id is not None and not selection.contains(player_id):
        raise PolicyViolation("The captain must be part of the selected line-up")
    return _rebuild(selection, captain_id=player_id)


def selection_from_mapping(
    mapping: FormationMapping,
    *,
    event_id: str,
    team_id: str,
    team_number: int = 1,
    period_number: int = 1,
    substitutes: Iterable[str] = (),
    captain_id: Optional[str] = None,
) -> Selection:
    """Build a selection from a formation mapping plus a bench.

    Players already holding a position are skipped on the bench. Overflow
    players from the mapping are left out; the caller decides where they go.
    """

    positions = [
        PlayerPosition(player_id=item.player_id, position=item.position)
        for item in mapping.assignments
        if item.player_id is not None
    ]
    positioned = {item.player_id for item in positions}
    bench = [pid for pid in dict.fromkeys(substitutes) if pid not in positioned]
    if captain_id is not None and captain_id not in positioned and captain_id not in bench:
        raise PolicyViolation("The captain must be part of the selected line-up")
    return Selection(
        event_id=event_id,
        team_id=team_id,
        team_number=team_number,
        period_number=period_number,
        formation=mapping.formation_id,
        player_positions=positions,
        substitute_players=bench,
        captain_id=captain_id,
    )


__all__ = [
    "add_substitute",
    "place_player",
    "remove_player",
    "selection_from_mapping",
    "set_selection_captain",
]
