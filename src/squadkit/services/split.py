"""Persist a year-group split: create teams, move players, link to the club."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, replace
from datetime import date
from typing import List, Mapping, Optional, Sequence, Tuple

from squadkit.errors import PersistenceError, ValidationError
from squadkit.models import KitIcons, Player, Team, YearGroup
from squadkit.persistence import DataStore
from squadkit.roster import (
    SplitPlan,
    assign_in_plan,
    distribute_plan,
    new_split_plan,
    update_team,
    validate_distribution,
    validate_setup,
)

logger = logging.getLogger("uvicorn.error")

STEP_CREATE_TEAMS = "create_teams"
STEP_ASSIGN_PLAYERS = "assign_players"
STEP_LINK_CLUB = "link_club"
SPLIT_STEPS: Tuple[str, ...] = (STEP_CREATE_TEAMS, STEP_ASSIGN_PLAYERS, STEP_LINK_CLUB)

_STEP_LABELS = {
    STEP_CREATE_TEAMS: "create teams",
    STEP_ASSIGN_PLAYERS: "assign players to the new teams",
    STEP_LINK_CLUB: "link the new teams to the club",
}


@dataclass(frozen=True)
class SplitOutcome:
    teams: Tuple[Team, ...]
    moved_players: int
    club_links_created: int


def team_from_row(row: dict) -> Team:
    payload = dict(row)
    if payload.get("kit_icons") is None:
        payload.pop("kit_icons", None)
    return Team.model_validate(payload)


def load_year_group(store: DataStore, year_group_id: str) -> YearGroup:
    rows = store.fetch("year_groups", {"id": year_group_id}, limit=1)
    if not rows:
        raise KeyError(f"Year group {year_group_id} not found")
    return YearGroup.model_validate(rows[0])


def load_year_group_players(store: DataStore, year_group_id: str) -> List[Player]:
    """Players currently on any team of the year group, ordered by name."""

    team_rows = store.fetch("teams", {"year_group_id": year_group_id})
    team_ids = [row["id"] for row in team_rows]
    if not team_ids:
        return []
    rows = store.fetch("players", {"team_id": team_ids}, order_by="name")
    return [Player.model_validate(row) for row in rows]


@dataclass(frozen=True)
class TeamSpec:
    name: str = ""
    age_group: Optional[str] = None
    game_format: Optional[str] = None


def build_plan(
    year_group: YearGroup,
    players: Sequence[Player],
    teams: Sequence[TeamSpec],
    *,
    season_start: Optional[date] = None,
    season_end: Optional[date] = None,
    auto: bool = True,
    moves: Optional[Mapping[str, int]] = None,
    today: Optional[date] = None,
) -> SplitPlan:
    """Run the wizard steps in order: teams, distribution, then manual moves."""

    plan = new_split_plan(year_group, today=today, team_count=len(teams))
    for index, spec in enumerate(teams):
        plan = update_team(
            plan,
            index,
            name=spec.name,
            age_group=spec.age_group,
            game_format=spec.game_format,
        )
    if season_start is not None:
        plan = replace(plan, season_start=season_start)
    if season_end is not None:
        plan = replace(plan, season_end=season_end)
    if auto:
        plan = distribute_plan(plan, players)
    for player_id, team_index in (moves or {}).items():
        plan = assign_in_plan(plan, player_id, team_index)
    return plan


def _check_created_teams(store: DataStore, year_group: YearGroup, team_ids: Sequence[str]) -> None:
    if len(set(team_ids)) != len(team_ids):
        raise ValidationError("Created team ids must be distinct")
    rows = {row["id"]: row for row in store.fetch("teams", {"id": list(team_ids)})}
    unknown = [team_id for team_id in team_ids if team_id not in rows]
    if unknown:
        raise ValidationError(f"Unknown created teams: {', '.join(unknown)}")
    foreign = [team_id for team_id in team_ids if rows[team_id]["year_group_id"] != year_group.id]
    if foreign:
        raise ValidationError(
            f"Teams {', '.join(foreign)} do not belong to year group {year_group.name}"
        )


def submit_split(
    store: DataStore,
    year_group: YearGroup,
    plan: SplitPlan,
    players: Sequence[Player],
    *,
    created_team_ids: Optional[Sequence[str]] = None,
) -> SplitOutcome:
    """Write the plan in three steps, stopping at the first failure.

    Nothing is rolled back. A :class:`PersistenceError` names the failing
    step, the completed ones and the created team ids; passing those ids back
    as ``created_team_ids`` skips team creation on retry.
    """

    validate_setup(plan)
    validate_distribution(plan, players)
    if year_group.id != plan.year_group_id:
        raise ValidationError("The split plan belongs to a different year group")

    team_ids: List[str] = list(created_team_ids or [])
    if team_ids and len(team_ids) != len(plan.teams):
        raise ValidationError(
            f"Expected {len(plan.teams)} created team ids, got {len(team_ids)}"
        )

    completed: List[str] = []
    moved = 0
    links_created = 0
    try:
        if team_ids:
            _check_created_teams(store, year_group, team_ids)
        else:
            rows = store.insert(
                "teams",
                [
                    {
                        "name": team.name.strip(),
                        "age_group": team.age_group,
                        "game_format": team.game_format,
                        "year_group_id": year_group.id,
                        "season_start": plan.season_start,
                        "season_end": plan.season_end,
                        "subscription_type": "free",
                        "kit_icons": KitIcons().model_dump(),
                    }
                    for team in plan.teams
                ],
            )
            team_ids = [row["id"] for row in rows]
        completed.append(STEP_CREATE_TEAMS)

        for team, team_id in zip(plan.teams, team_ids):
            if team.assigned_player_ids:
                moved += store.update_where(
                    "players",
                    {"team_id": team_id},
                    {"id": list(team.assigned_player_ids)},
                )
        completed.append(STEP_ASSIGN_PLAYERS)

        linked = {
            row["team_id"]
            for row in store.fetch("club_teams", {"club_id": plan.club_id, "team_id": team_ids})
        }
        missing = [team_id for team_id in team_ids if team_id not in linked]
        if missing:
            store.insert(
                "club_teams",
                [{"club_id": plan.club_id, "team_id": team_id} for team_id in missing],
            )
            links_created = len(missing)
        completed.append(STEP_LINK_CLUB)
    except sqlite3.Error as exc:
        step = SPLIT_STEPS[len(completed)]
        logger.exception(
            "Split of year group %s failed at %s (completed: %s)",
            year_group.id,
            step,
            ", ".join(completed) or "none",
        )
        raise PersistenceError(
            f"Failed to {_STEP_LABELS[step]}",
            step=step,
            completed=completed,
            context={"created_team_ids": list(team_ids)},
        ) from exc

    teams = tuple(team_from_row(row) for row in store.fetch("teams", {"id": team_ids}))
    logger.info(
        "Split year group %s into %s teams (%s players moved, %s club links)",
        year_group.name,
        len(teams),
        moved,
        links_created,
    )
    return SplitOutcome(teams=teams, moved_players=moved, club_links_created=links_created)


__all__ = [
    "SPLIT_STEPS",
    "STEP_ASSIGN_PLAYERS",
    "STEP_CREATE_TEAMS",
    "STEP_LINK_CLUB",
    "SplitOutcome",
    "TeamSpec",
    "build_plan",
    "load_year_group",
    "load_year_group_players",
    "submit_split",
    "team_from_row",
]
