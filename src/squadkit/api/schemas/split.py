from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class NewTeamPayload(BaseModel):
    name: str = ""
    age_group: Optional[str] = None
    game_format: Optional[str] = None


class SplitRequest(BaseModel):
    teams: List[NewTeamPayload] = Field(..., min_length=1)
    season_start: Optional[date] = None
    season_end: Optional[date] = None
    auto_distribute: bool = True
    # player id -> zero-based team index, applied after distribution
    moves: Dict[str, int] = Field(default_factory=dict)
    created_team_ids: Optional[List[str]] = None


class SplitTeamPreview(BaseModel):
    name: str
    age_group: str
    game_format: str
    player_ids: List[str]
    duplicate_squad_numbers: List[int]


class SplitPreviewResponse(BaseModel):
    year_group_id: str
    player_count: int
    exceeds_soft_limit: bool
    season_start: Optional[date]
    season_end: Optional[date]
    teams: List[SplitTeamPreview]
    unassigned_player_ids: List[str]


class CreatedTeamResponse(BaseModel):
    id: str
    name: str
    age_group: str
    game_format: str


class SplitResponse(BaseModel):
    teams: List[CreatedTeamResponse]
    moved_players: int
    club_links_created: int
