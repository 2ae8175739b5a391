"""Map an ordered player list onto the positions of a formation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple

from squadkit.config.formations import resolve_positions


class AssignmentState(str, Enum):
    EMPTY = "empty"
    PARTIALLY_ASSIGNED = "partially_assigned"
    FULLY_ASSIGNED = "fully_assigned"


def assignment_state(filled: int, total: int) -> AssignmentState:
    if filled <= 0:
        return AssignmentState.EMPTY
    if filled < total:
        return AssignmentState.PARTIALLY_ASSIGNED
    return AssignmentState.FULLY_ASSIGNED


@dataclass(frozen=True)
class PositionAssignment:
    slot: int
    position: str
    player_id: Optional[str]


@dataclass(frozen=True)
class FormationMapping:
    formation_id: str
    assignments: Tuple[PositionAssignment, ...]
    unassigned: Tuple[str, ...]

    @property
    def positions(self) -> Tuple[str, ...]:
        return tuple(item.position for item in self.assignments)

    @property
    def filled(self) -> int:
        return sum(1 for item in self.assignments if item.player_id is not None)

    @property
    def state(self) -> AssignmentState:
        return assignment_state(self.filled, len(self.assignments))

    def by_position(self) -> Dict[str, str]:
        """Filled slots keyed by label; repeated labels are numbered (CB1, CB2)."""

        labels = slot_labels(self.positions)
        return {
            labels[item.slot]: item.player_id
            for item in self.assignments
            if item.player_id is not None
        }


def slot_labels(positions: Sequence[str]) -> Tuple[str, ...]:
    counts: Dict[str, int] = {}
    labels = []
    for position in positions:
        counts[position] = counts.get(position, 0) + 1
        if positions.count(position) > 1:
            labels.append(f"{position}{counts[position]}")
        else:
            labels.append(position)
    return tuple(labels)


def map_to_positions(
    formation_id: Optional[str],
    selected_player_ids: Sequence[str],
    game_format: Optional[str] = None,
) -> FormationMapping:
    """Fill the k-th position with the k-th selected player.

    Players beyond the number of positions are returned in ``unassigned``
    instead of being dropped. A repeated id only counts the first time.
    """

    positions = resolve_positions(formation_id, game_format)
    ordered = list(dict.fromkeys(selected_player_ids))
    assignments = tuple(
        PositionAssignment(
            slot=index,
            position=position,
            player_id=ordered[index] if index < len(ordered) else None,
        )
        for index, position in enumerate(positions)
    )
    return FormationMapping(
        formation_id=formation_id or "",
        assignments=assignments,
        unassigned=tuple(ordered[len(positions):]),
    )


__all__ = [
    "AssignmentState",
    "FormationMapping",
    "PositionAssignment",
    "assignment_state",
    "map_to_positions",
    "slot_labels",
]
