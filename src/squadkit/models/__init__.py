"""Typed records for players, club structure, events and selections."""

from .event import (
    AvailabilityRecord,
    AvailabilityRole,
    Event,
    EventType,
    PlayerPosition,
    Selection,
    StaffSelection,
    UserPlayerLink,
)
from .player import AvailabilityStatus, Player, SquadPlayer, SquadRole, SubscriptionType
from .team import ClubTeamLink, GameFormat, KitDesign, KitIcons, Team, YearGroup

__all__ = [
    "AvailabilityRecord",
    "AvailabilityRole",
    "AvailabilityStatus",
    "ClubTeamLink",
    "Event",
    "EventType",
    "GameFormat",
    "KitDesign",
    "KitIcons",
    "Player",
    "PlayerPosition",
    "Selection",
    "SquadPlayer",
    "SquadRole",
    "StaffSelection",
    "SubscriptionType",
    "Team",
    "UserPlayerLink",
    "YearGroup",
]
