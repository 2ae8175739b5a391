"""Roster utilities (team splitting, distribution, squad numbers)."""

from .distribution import (
    TeamAssignments,
    assign,
    auto_distribute,
    unassign,
    unassigned_players,
    validate_complete,
)
from .split import (
    MIN_SPLIT_TEAMS,
    NewTeam,
    SplitPlan,
    add_team,
    assign_in_plan,
    distribute_plan,
    new_split_plan,
    remove_team,
    update_team,
    validate_distribution,
    validate_setup,
)
from .squad_numbers import check_squad_number, duplicate_squad_numbers, next_free_squad_number

__all__ = [
    "MIN_SPLIT_TEAMS",
    "NewTeam",
    "SplitPlan",
    "TeamAssignments",
    "add_team",
    "assign",
    "assign_in_plan",
    "auto_distribute",
    "check_squad_number",
    "distribute_plan",
    "duplicate_squad_numbers",
    "new_split_plan",
    "next_free_squad_number",
    "remove_team",
    "unassign",
    "unassigned_players",
    "update_team",
    "validate_complete",
    "validate_distribution",
    "validate_setup",
]
