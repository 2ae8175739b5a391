"""Event, availability and selection models."""

from __future__ import annotations

import datetime as dt
from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from .player import AvailabilityStatus

EventType = Literal["training", "match", "fixture", "friendly", "tournament", "festival"]
AvailabilityRole = Literal["player", "staff", "parent"]


class Event(BaseModel):
    id: str = Field(..., min_length=1)
    team_id: str
    date: dt.date
    event_type: EventType = "training"
    title: str = ""
    team_count: int = Field(default=1, ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def is_match(self) -> bool:
        return self.event_type != "training"


class AvailabilityRecord(BaseModel):
    """One role's attendance intent for a user at an event."""

    event_id: str
    user_id: str
    role: AvailabilityRole = "player"
    status: AvailabilityStatus = "pending"
    responded_at: Optional[dt.datetime] = None

    model_config = ConfigDict(frozen=True)


class UserPlayerLink(BaseModel):
    """Links an account (the player or a parent) to a player it answers for."""

    user_id: str
    player_id: str
    relationship: str = "parent"

    model_config = ConfigDict(frozen=True)


class PlayerPosition(BaseModel):
    player_id: str = Field(..., validation_alias=AliasChoices("player_id", "playerId"))
    position: str

    model_config = ConfigDict(frozen=True)


class StaffSelection(BaseModel):
    staff_id: str = Field(..., validation_alias=AliasChoices("staff_id", "staffId"))
    role: str = "coach"

    model_config = ConfigDict(frozen=True)


class Selection(BaseModel):
    """Line-up for one team number in one period of an event."""

    id: Optional[str] = None
    event_id: str
    team_id: str
    team_number: int = Field(default=1, ge=1)
    period_number: int = Field(default=1, ge=1)
    formation: str = ""
    player_positions: List[PlayerPosition] = Field(default_factory=list)
    substitute_players: List[str] = Field(default_factory=list)
    captain_id: Optional[str] = None
    staff_selection: List[StaffSelection] = Field(default_factory=list)
    duration_minutes: int = Field(default=90, ge=0)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_roster(self) -> "Selection":
        positioned = [item.player_id for item in self.player_positions]
        if len(set(positioned)) != len(positioned):
            raise ValueError("a player can only fill one position")
        if len(set(self.substitute_players)) != len(self.substitute_players):
            raise ValueError("a substitute is listed more than once")
        both = set(positioned).intersection(self.substitute_players)
        if both:
            raise ValueError(f"players both positioned and on the bench: {sorted(both)}")
        if self.captain_id and self.captain_id not in self.roster_ids:
            raise ValueError(f"captain {self.captain_id} is not in the selection")
        return self

    @property
    def positioned_ids(self) -> List[str]:
        return [item.player_id for item in self.player_positions]

    @property
    def roster_ids(self) -> List[str]:
        return self.positioned_ids + list(self.substitute_players)

    @property
    def location_label(self) -> str:
        return f"Team {self.team_number} Period {self.period_number}"

    def contains(self, player_id: str) -> bool:
        return player_id in self.roster_ids
