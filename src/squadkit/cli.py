"""Command-line interface for splitting year groups and mapping formations."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from squadkit.config_loader import SplitProfile
from squadkit.errors import SquadkitError
from squadkit.ingest import load_players_from_csv, write_assignments_csv
from squadkit.models import YearGroup
from squadkit.roster import duplicate_squad_numbers, validate_distribution, validate_setup
from squadkit.selection import map_to_positions
from squadkit.services import TeamSpec, build_plan


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="squadkit", description="Youth team roster tools")
    commands = parser.add_subparsers(dest="command", required=True)

    split = commands.add_parser("split", help="Split a year group's players into new teams")
    split.add_argument("players", type=Path, help="Path to players CSV")
    split.add_argument(
        "--team",
        dest="team_names",
        action="append",
        default=[],
        help="Name of a new team (repeat for each team)",
    )
    split.add_argument("--teams", type=int, default=None, help="Number of teams when names are not given")
    split.add_argument("--year-group", default="Year group", help="Year group name, used as age group")
    split.add_argument("--game-format", default=None, help="Game format for every new team")
    split.add_argument("--season-start", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    split.add_argument("--season-end", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    split.add_argument(
        "--move",
        action="append",
        default=[],
        help="Manual assignment PLAYER=TEAM (team number from 1 or team name)",
    )
    split.add_argument(
        "--no-auto",
        dest="auto",
        action="store_false",
        help="Skip the even distribution and only apply --move entries",
    )
    split.add_argument(
        "--players-column",
        action="append",
        default=[],
        help="Mapping for players CSV columns (e.g., name=First Name|Last Name)",
    )
    split.add_argument("--load-profile", type=Path, help="Load split profile JSON", default=None)
    split.add_argument("--save-profile", type=Path, help="Save split profile JSON", default=None)
    split.add_argument("--output", type=Path, default=Path("assignments.csv"), help="Output CSV path")

    formation = commands.add_parser("formation", help="Map player ids onto formation positions")
    formation.add_argument("formation_id", help="Formation id, e.g. 4-3-3")
    formation.add_argument("player_ids", nargs="*", help="Player ids in selection order")
    formation.add_argument("--game-format", default=None, help="Game format, e.g. 7-a-side")

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--db", type=Path, default=None, help="SQLite database path")
    return parser


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _resolve_team(value: str, team_names: Sequence[str]) -> int:
    if value.isdigit():
        return int(value) - 1
    lowered = [name.lower() for name in team_names]
    if value.lower() in lowered:
        return lowered.index(value.lower())
    raise ValueError(f"Unknown team '{value}'")


def _run_split(args: argparse.Namespace) -> int:
    players_mapping = _parse_mapping(args.players_column)
    team_names = list(args.team_names)
    game_format = args.game_format
    season_start = args.season_start
    season_end = args.season_end

    if args.load_profile:
        profile = SplitProfile.load(args.load_profile)
        players_mapping = profile.players_mapping | players_mapping
        team_names = team_names or profile.team_names
        game_format = game_format or profile.game_format
        season_start = season_start or profile.season_start
        season_end = season_end or profile.season_end

    if not team_names:
        count = args.teams or 2
        team_names = [f"{args.year_group} Team {index + 1}" for index in range(count)]

    players = load_players_from_csv(args.players, mapping=players_mapping or None)
    year_group = YearGroup(id="cli", name=args.year_group, club_id="cli", playing_format=game_format)
    moves = {}
    for key, value in _parse_mapping(args.move).items():
        moves[key] = _resolve_team(value, team_names)

    plan = build_plan(
        year_group,
        players,
        [TeamSpec(name=name, game_format=game_format) for name in team_names],
        season_start=season_start,
        season_end=season_end,
        auto=args.auto,
        moves=moves,
    )
    validate_setup(plan)
    validate_distribution(plan, players)

    if args.save_profile:
        SplitProfile(
            team_names=team_names,
            game_format=game_format,
            season_start=plan.season_start,
            season_end=plan.season_end,
            players_mapping=players_mapping,
        ).save(args.save_profile)
        print(f"Saved split profile to {args.save_profile}")

    written = write_assignments_csv(args.output, plan, players)
    by_id = {player.id: player for player in players}
    for team in plan.teams:
        members = [by_id[pid] for pid in team.assigned_player_ids]
        print(f"{team.name}: {len(members)} players")
        clashes = duplicate_squad_numbers(members)
        if clashes:
            print(f"  duplicate squad numbers: {', '.join(str(n) for n in clashes)}")
    print(f"Wrote {written} assignments to {args.output}")
    return 0


def _run_formation(args: argparse.Namespace) -> int:
    mapping = map_to_positions(args.formation_id, args.player_ids, args.game_format)
    labels = mapping.by_position()
    for label, player_id in labels.items():
        print(f"{label}\t{player_id}")
    for item in mapping.assignments:
        if item.player_id is None:
            print(f"{item.position}\t-")
    if mapping.unassigned:
        print(f"Unassigned: {', '.join(mapping.unassigned)}")
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from squadkit.api import create_app
    from squadkit.persistence import SquadStore

    store = SquadStore(args.db) if args.db else None
    uvicorn.run(create_app(store), host=args.host, port=args.port)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    handlers = {"split": _run_split, "formation": _run_formation, "serve": _run_serve}
    try:
        return handlers[args.command](args)
    except (SquadkitError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
