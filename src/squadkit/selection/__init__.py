"""Squad, line-up and formation logic for event selections."""

from .conflicts import conflict_map, find_conflicts
from .formation import (
    AssignmentState,
    FormationMapping,
    PositionAssignment,
    assignment_state,
    map_to_positions,
)
from .lineup import (
    add_substitute,
    place_player,
    remove_player,
    selection_from_mapping,
    set_selection_captain,
)
from .squad import (
    Squad,
    add_to_squad,
    availability_rank,
    build_squad_players,
    can_admit,
    check_match_eligibility,
    remove_from_squad,
    set_captain,
    set_vice_captain,
    sort_squad_players,
    squad_sort_key,
)

__all__ = [
    "AssignmentState",
    "FormationMapping",
    "PositionAssignment",
    "Squad",
    "add_substitute",
    "add_to_squad",
    "assignment_state",
    "availability_rank",
    "build_squad_players",
    "can_admit",
    "check_match_eligibility",
    "conflict_map",
    "find_conflicts",
    "map_to_positions",
    "place_player",
    "remove_from_squad",
    "remove_player",
    "selection_from_mapping",
    "set_captain",
    "set_selection_captain",
    "set_vice_captain",
    "sort_squad_players",
    "squad_sort_key",
]
