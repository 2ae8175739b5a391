"""State reducers for the year-group split wizard.

A :class:`SplitPlan` is the whole wizard state: the destination teams, the
players assigned to each, and the season dates. Every function here returns a
new plan and never touches the data store; submission lives in
:mod:`squadkit.services.split`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, Mapping, Optional, Sequence, Tuple, get_args

from squadkit.errors import ValidationError
from squadkit.models import GameFormat, Player, YearGroup
from squadkit.models.team import DEFAULT_GAME_FORMAT

from .distribution import TeamAssignments, assign, auto_distribute, validate_complete
from .squad_numbers import duplicate_squad_numbers

MIN_SPLIT_TEAMS = 2
GAME_FORMATS: Tuple[str, ...] = get_args(GameFormat)


@dataclass(frozen=True)
class NewTeam:
    name: str
    age_group: str
    game_format: str = DEFAULT_GAME_FORMAT
    assigned_player_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SplitPlan:
    year_group_id: str
    club_id: str
    teams: Tuple[NewTeam, ...]
    season_start: Optional[date] = None
    season_end: Optional[date] = None

    def assignments(self) -> TeamAssignments:
        return {index: list(team.assigned_player_ids) for index, team in enumerate(self.teams)}

    def with_assignments(self, assignments: Mapping[int, Sequence[str]]) -> "SplitPlan":
        teams = tuple(
            replace(team, assigned_player_ids=tuple(assignments.get(index, ())))
            for index, team in enumerate(self.teams)
        )
        return replace(self, teams=teams)


def default_season(today: date) -> Tuple[date, date]:
    """Season running from 1 September to 30 June of the following year."""

    return date(today.year, 9, 1), date(today.year + 1, 6, 30)


def _blank_team(year_group: YearGroup) -> NewTeam:
    return NewTeam(
        name="",
        age_group=year_group.name,
        game_format=year_group.playing_format or DEFAULT_GAME_FORMAT,
    )


def new_split_plan(
    year_group: YearGroup,
    *,
    today: Optional[date] = None,
    team_count: int = MIN_SPLIT_TEAMS,
) -> SplitPlan:
    if team_count < MIN_SPLIT_TEAMS:
        raise ValidationError(f"You must have at least {MIN_SPLIT_TEAMS} teams")
    season_start, season_end = default_season(today or date.today())
    return SplitPlan(
        year_group_id=year_group.id,
        club_id=year_group.club_id,
        teams=tuple(_blank_team(year_group) for _ in range(team_count)),
        season_start=season_start,
        season_end=season_end,
    )


def add_team(plan: SplitPlan, team: Optional[NewTeam] = None) -> SplitPlan:
    if team is None:
        template = plan.teams[0] if plan.teams else NewTeam(name="", age_group="")
        team = NewTeam(name="", age_group=template.age_group, game_format=template.game_format)
    return replace(plan, teams=plan.teams + (team,))


def remove_team(plan: SplitPlan, index: int) -> SplitPlan:
    """Drop a destination team; its players become unassigned."""

    if len(plan.teams) <= MIN_SPLIT_TEAMS:
        raise ValidationError(f"You must have at least {MIN_SPLIT_TEAMS} teams")
    if not 0 <= index < len(plan.teams):
        raise ValidationError(f"Team {index + 1} does not exist")
    return replace(plan, teams=plan.teams[:index] + plan.teams[index + 1:])


def update_team(
    plan: SplitPlan,
    index: int,
    *,
    name: Optional[str] = None,
    age_group: Optional[str] = None,
    game_format: Optional[str] = None,
) -> SplitPlan:
    if not 0 <= index < len(plan.teams):
        raise ValidationError(f"Team {index + 1} does not exist")
    if game_format is not None and game_format not in GAME_FORMATS:
        raise ValidationError(f"Unsupported game format {game_format!r}")
    team = plan.teams[index]
    updated = replace(
        team,
        name=team.name if name is None else name,
        age_group=team.age_group if age_group is None else age_group,
        game_format=team.game_format if game_format is None else game_format,
    )
    teams = plan.teams[:index] + (updated,) + plan.teams[index + 1:]
    return replace(plan, teams=teams)


def distribute_plan(plan: SplitPlan, players: Sequence[Player]) -> SplitPlan:
    """Replace every assignment with an even split of the full player list."""

    return plan.with_assignments(auto_distribute(players, len(plan.teams)))


def assign_in_plan(plan: SplitPlan, player_id: str, team_index: int) -> SplitPlan:
    return plan.with_assignments(assign(plan.assignments(), player_id, team_index))


def validate_setup(plan: SplitPlan) -> None:
    if len(plan.teams) < MIN_SPLIT_TEAMS:
        raise ValidationError(f"You must have at least {MIN_SPLIT_TEAMS} teams")
    if any(not team.name.strip() for team in plan.teams):
        raise ValidationError("Every new team needs a name")
    if plan.season_start is None or plan.season_end is None:
        raise ValidationError("Season start and end dates are required")
    if plan.season_start >= plan.season_end:
        raise ValidationError("Season end must be after season start")


def validate_distribution(plan: SplitPlan, players: Sequence[Player]) -> None:
    """Check every player is placed once and numbers stay unique per team."""

    if not validate_complete(plan.assignments(), len(players)):
        raise ValidationError("All players must be assigned to a team")

    by_id: Dict[str, Player] = {player.id: player for player in players}
    unknown = [pid for team in plan.teams for pid in team.assigned_player_ids if pid not in by_id]
    if unknown:
        raise ValidationError(f"Unknown players in distribution: {', '.join(unknown)}")

    for team in plan.teams:
        members = [by_id[pid] for pid in team.assigned_player_ids]
        clashes = duplicate_squad_numbers(members)
        if clashes:
            numbers = ", ".join(str(number) for number in clashes)
            label = team.name or "a new team"
            raise ValidationError(f"Duplicate squad numbers in {label}: {numbers}")


__all__ = [
    "GAME_FORMATS",
    "MIN_SPLIT_TEAMS",
    "NewTeam",
    "SplitPlan",
    "add_team",
    "assign_in_plan",
    "default_season",
    "distribute_plan",
    "new_split_plan",
    "remove_team",
    "update_team",
    "validate_distribution",
    "validate_setup",
]
