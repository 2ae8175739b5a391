"""Persist and load CLI split profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional


def _parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


@dataclass
class SplitProfile:
    team_names: List[str] = field(default_factory=list)
    game_format: Optional[str] = None
    season_start: Optional[date] = None
    season_end: Optional[date] = None
    players_mapping: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> "SplitProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            team_names=list(data.get("team_names", [])),
            game_format=data.get("game_format"),
            season_start=_parse_date(data.get("season_start")),
            season_end=_parse_date(data.get("season_end")),
            players_mapping=data.get("players_mapping", {}),
        )

    def save(self, path: Path) -> None:
        payload = {
            "team_names": self.team_names,
            "game_format": self.game_format,
            "season_start": self.season_start.isoformat() if self.season_start else None,
            "season_end": self.season_end.isoformat() if self.season_end else None,
            "players_mapping": self.players_mapping,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
