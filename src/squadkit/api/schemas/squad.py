from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel

from squadkit.models import SquadPlayer


class SquadAddRequest(BaseModel):
    player_id: str


class CaptainRequest(BaseModel):
    player_id: Optional[str] = None
    role: Literal["captain", "vice_captain"] = "captain"


class SquadResponse(BaseModel):
    event_id: str
    captain_id: Optional[str] = None
    vice_captain_id: Optional[str] = None
    players: List[SquadPlayer]


class ConflictsResponse(BaseModel):
    event_id: str
    team_number: int
    period_number: int
    conflicts: dict[str, List[str]]
