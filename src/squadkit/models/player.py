"""Canonical player models shared across the roster and selection layers."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

SubscriptionType = Literal["full_squad", "limited", "free"]
PlayerStatus = Literal["active", "inactive"]
PlayerType = Literal["goalkeeper", "outfield"]
AvailabilityStatus = Literal["pending", "available", "unavailable"]
SquadRole = Literal["player", "captain", "vice_captain"]

# Subscriptions that may be picked for match-type events.
MATCH_ELIGIBLE_SUBSCRIPTIONS = frozenset({"full_squad"})


class Player(BaseModel):
    """Player row as stored by the data-access layer."""

    id: str = Field(..., min_length=1)
    name: str
    squad_number: Optional[int] = Field(default=None, ge=1)
    team_id: Optional[str] = None
    subscription_type: SubscriptionType = "full_squad"
    status: PlayerStatus = "active"
    type: PlayerType = "outfield"

    model_config = ConfigDict(frozen=True)

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    @property
    def is_match_eligible(self) -> bool:
        return self.subscription_type in MATCH_ELIGIBLE_SUBSCRIPTIONS


class SquadPlayer(BaseModel):
    """Player decorated with event availability and squad role for display."""

    id: str
    name: str
    squad_number: Optional[int] = None
    type: PlayerType = "outfield"
    availability_status: Optional[AvailabilityStatus] = None
    squad_role: SquadRole = "player"

    model_config = ConfigDict(frozen=True)
