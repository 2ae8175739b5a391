"""Load roster CSVs into players and write split assignments back out."""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel

from squadkit.models import Player
from squadkit.roster import SplitPlan

logger = logging.getLogger(__name__)

DEFAULT_PLAYERS_MAPPING = {
    "player_id": "id",
    "name": "name",
    "squad_number": "squad_number",
    "team_id": "team_id",
    "subscription_type": "subscription_type",
    "status": "status",
    "type": "type",
}

_SUBSCRIPTIONS = {"full_squad", "limited", "free"}
_PLAYER_TYPES = {"goalkeeper", "outfield"}
_SQUAD_NUMBER = re.compile(r"[0-9]+")


class PlayerRow(BaseModel):
    raw_id: str
    raw_name: str
    raw_squad_number: Optional[str] = None
    raw_team_id: Optional[str] = None
    raw_subscription_type: Optional[str] = None
    raw_status: Optional[str] = None
    raw_type: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "PlayerRow":
        def extract(key: str, *, default: Optional[str] = None) -> Optional[str]:
            spec = mapping.get(key)
            if spec is None:
                return default
            if "|" in spec:
                parts = [row.get(col.strip(), "").strip() for col in spec.split("|")]
                joined = " ".join(part for part in parts if part)
                return joined or default
            value = row.get(spec)
            return value.strip() if value is not None else default

        return cls(
            raw_id=extract("player_id", default="") or "",
            raw_name=extract("name", default="") or "",
            raw_squad_number=extract("squad_number"),
            raw_team_id=extract("team_id"),
            raw_subscription_type=extract("subscription_type"),
            raw_status=extract("status"),
            raw_type=extract("type"),
        )


def _parse_squad_number(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    text = raw.strip().removeprefix("#").strip()
    if not text:
        return None
    if not _SQUAD_NUMBER.fullmatch(text) or int(text) < 1:
        logger.warning("Ignoring invalid squad number %r", raw)
        return None
    return int(text)


def _choice(raw: Optional[str], allowed: set[str], default: str) -> str:
    text = (raw or "").strip().lower().replace(" ", "_")
    return text if text in allowed else default


def load_player_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[PlayerRow]:
    mapping = mapping or DEFAULT_PLAYERS_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [PlayerRow.from_mapping(row, mapping) for row in reader]
    return rows


def rows_to_players(rows: Sequence[PlayerRow]) -> List[Player]:
    """Convert rows, skipping those without an id or a name."""

    players: List[Player] = []
    seen: set[str] = set()
    for row in rows:
        if not row.raw_id or not row.raw_name:
            logger.warning("Skipping player row without id or name: %r", row.raw_id or row.raw_name)
            continue
        if row.raw_id in seen:
            logger.warning("Skipping duplicate player id %s", row.raw_id)
            continue
        seen.add(row.raw_id)
        players.append(
            Player(
                id=row.raw_id,
                name=row.raw_name,
                squad_number=_parse_squad_number(row.raw_squad_number),
                team_id=row.raw_team_id or None,
                subscription_type=_choice(row.raw_subscription_type, _SUBSCRIPTIONS, "full_squad"),
                status="inactive" if (row.raw_status or "").strip().lower() == "inactive" else "active",
                type=_choice(row.raw_type, _PLAYER_TYPES, "outfield"),
            )
        )
    return players


def load_players_from_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[Player]:
    return rows_to_players(load_player_csv(path, mapping=mapping))


def write_assignments_csv(path: Path, plan: SplitPlan, players: Sequence[Player]) -> int:
    """One row per assigned player; returns the number of rows written."""

    by_id = {player.id: player for player in players}
    written = 0
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["team", "age_group", "game_format", "player_id", "name", "squad_number"])
        for team in plan.teams:
            for player_id in team.assigned_player_ids:
                player = by_id.get(player_id)
                writer.writerow(
                    [
                        team.name,
                        team.age_group,
                        team.game_format,
                        player_id,
                        player.name if player else "",
                        player.squad_number if player and player.squad_number else "",
                    ]
                )
                written += 1
    return written
