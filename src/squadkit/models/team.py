"""Club structure models: year groups, teams and club links."""

from __future__ import annotations

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

GameFormat = Literal["3-a-side", "4-a-side", "5-a-side", "7-a-side", "9-a-side", "11-a-side"]

DEFAULT_GAME_FORMAT: GameFormat = "11-a-side"


class KitDesign(BaseModel):
    shirt_color: str = "#FF0000"
    sleeve_color: str = "#FF0000"
    has_stripes: bool = False
    stripe_color: str = ""
    shorts_color: str = "#000000"
    socks_color: str = "#FF0000"

    model_config = ConfigDict(frozen=True)


def _solid_kit(color: str) -> KitDesign:
    return KitDesign(shirt_color=color, sleeve_color=color, socks_color=color)


class KitIcons(BaseModel):
    """Kit set for a team, one design per kit slot."""

    home: KitDesign = Field(default_factory=lambda: _solid_kit("#FF0000"))
    away: KitDesign = Field(default_factory=lambda: _solid_kit("#FFFFFF"))
    training: KitDesign = Field(default_factory=lambda: _solid_kit("#0000FF"))
    goalkeeper: KitDesign = Field(default_factory=lambda: _solid_kit("#00FF00"))

    model_config = ConfigDict(frozen=True)


class YearGroup(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    club_id: str
    age_year: Optional[int] = None
    playing_format: Optional[GameFormat] = None
    soft_player_limit: Optional[int] = Field(default=None, ge=1)

    model_config = ConfigDict(frozen=True)

    def exceeds_soft_limit(self, player_count: int) -> bool:
        """Report whether ``player_count`` is over the advisory limit.

        The limit is never enforced; callers only use this to show a hint.
        """

        return self.soft_player_limit is not None and player_count > self.soft_player_limit


class Team(BaseModel):
    id: str = Field(..., min_length=1)
    name: str
    age_group: str
    game_format: GameFormat = DEFAULT_GAME_FORMAT
    year_group_id: Optional[str] = None
    season_start: Optional[date] = None
    season_end: Optional[date] = None
    subscription_type: str = "free"
    kit_icons: KitIcons = Field(default_factory=KitIcons)

    model_config = ConfigDict(frozen=True)


class ClubTeamLink(BaseModel):
    id: Optional[str] = None
    club_id: str
    team_id: str

    model_config = ConfigDict(frozen=True)
