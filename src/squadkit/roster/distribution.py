"""Partition a player pool across newly created teams."""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Mapping, Sequence, Union

from squadkit.errors import ValidationError
from squadkit.models import Player

PlayerRef = Union[Player, str]
TeamAssignments = Dict[int, List[str]]


def _player_id(player: PlayerRef) -> str:
    return player if isinstance(player, str) else player.id


def auto_distribute(players: Sequence[PlayerRef], team_count: int) -> TeamAssignments:
    """Split ``players`` into contiguous, near-equal blocks.

    Player ``i`` goes to team ``floor(i / ceil(len / team_count)) % team_count``.
    The last team may end up short; that is accepted, not rebalanced.
    """

    if team_count < 1:
        raise ValidationError("At least one team is required to distribute players")

    assignments: TeamAssignments = {index: [] for index in range(team_count)}
    if not players:
        return assignments

    per_team = math.ceil(len(players) / team_count)
    for index, player in enumerate(players):
        team_index = (index // per_team) % team_count
        assignments[team_index].append(_player_id(player))
    return assignments


def unassign(teams: Mapping[int, Sequence[str]], player_id: str) -> TeamAssignments:
    return {
        index: [member for member in members if member != player_id]
        for index, members in teams.items()
    }


def assign(teams: Mapping[int, Sequence[str]], player_id: str, team_index: int) -> TeamAssignments:
    """Move ``player_id`` to ``team_index``, dropping it from every other team."""

    if team_index not in teams:
        raise ValidationError(f"Team {team_index + 1} does not exist")
    updated = unassign(teams, player_id)
    updated[team_index].append(player_id)
    return updated


def validate_complete(teams: Mapping[int, Sequence[str]], total_players: int) -> bool:
    assigned = sum(len(members) for members in teams.values())
    return assigned == total_players


def unassigned_players(players: Iterable[PlayerRef], teams: Mapping[int, Sequence[str]]) -> List[str]:
    assigned = {member for members in teams.values() for member in members}
    return [_player_id(player) for player in players if _player_id(player) not in assigned]


__all__ = [
    "TeamAssignments",
    "assign",
    "auto_distribute",
    "unassign",
    "unassigned_players",
    "validate_complete",
]
