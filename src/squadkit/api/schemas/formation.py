from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class FormationResponse(BaseModel):
    formation_id: str
    game_format: str
    positions: List[str]


class FormationMapRequest(BaseModel):
    formation_id: Optional[str] = None
    game_format: Optional[str] = None
    player_ids: List[str] = Field(default_factory=list)


class PositionAssignmentResponse(BaseModel):
    slot: int
    position: str
    player_id: Optional[str]


class FormationMapResponse(BaseModel):
    formation_id: str
    positions: List[str]
    assignments: List[PositionAssignmentResponse]
    unassigned: List[str]
    state: str
