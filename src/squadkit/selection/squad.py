"""Squad admission, captaincy and display ordering."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Mapping, Optional, Tuple

from squadkit.errors import PolicyViolation
from squadkit.models import AvailabilityStatus, Event, Player, SquadPlayer

_AVAILABILITY_RANK: Mapping[str, int] = {
    "available": 1,
    "pending": 2,
    "unavailable": 3,
}
_UNKNOWN_RANK = 4


@dataclass(frozen=True)
class Squad:
    """Players chosen for one event, with optional captain and vice captain.

    Both armbands always reference members; every transition below keeps
    that true.
    """

    player_ids: Tuple[str, ...] = ()
    captain_id: Optional[str] = None
    vice_captain_id: Optional[str] = None

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.player_ids

    def role_of(self, player_id: str) -> str:
        if player_id == self.captain_id:
            return "captain"
        if player_id == self.vice_captain_id:
            return "vice_captain"
        return "player"


def can_admit(status: Optional[AvailabilityStatus]) -> bool:
    """Available and pending players may join a squad; decliners may not.

    ``None`` means the player has not responded yet and is treated as pending.
    """

    return status != "unavailable"


def check_match_eligibility(player: Player, event: Event) -> None:
    if event.is_match and not player.is_match_eligible:
        raise PolicyViolation(
            f"{player.name} has a {player.subscription_type} subscription and cannot play in a {event.event_type}"
        )


def add_to_squad(squad: Squad, player_id: str, status: Optional[AvailabilityStatus] = None) -> Squad:
    if player_id in squad:
        return squad
    if not can_admit(status):
        raise PolicyViolation("Player is unavailable for this event and cannot be added to the squad")
    return replace(squad, player_ids=squad.player_ids + (player_id,))


def set_captain(
    squad: Squad,
    player_id: Optional[str],
    status: Optional[AvailabilityStatus] = None,
) -> Squad:
    """Make ``player_id`` captain, admitting them first when needed.

    Admission and the armband change happen in one transition, so no state
    with a captain outside the squad is ever returned. ``None`` clears the
    captain.
    """

    if player_id is None:
        return replace(squad, captain_id=None)
    admitted = add_to_squad(squad, player_id, status)
    vice = None if admitted.vice_captain_id == player_id else admitted.vice_captain_id
    return replace(admitted, captain_id=player_id, vice_captain_id=vice)


def set_vice_captain(
    squad: Squad,
    player_id: Optional[str],
    status: Optional[AvailabilityStatus] = None,
) -> Squad:
    if player_id is None:
        return replace(squad, vice_captain_id=None)
    if player_id == squad.captain_id:
        raise PolicyViolation("The captain cannot also be vice captain")
    admitted = add_to_squad(squad, player_id, status)
    return replace(admitted, vice_captain_id=player_id)


def remove_from_squad(squad: Squad, player_id: str) -> Squad:
    if player_id not in squad:
        return squad
    return Squad(
        player_ids=tuple(pid for pid in squad.player_ids if pid != player_id),
        captain_id=None if squad.captain_id == player_id else squad.captain_id,
        vice_captain_id=None if squad.vice_captain_id == player_id else squad.vice_captain_id,
    )


def availability_rank(status: Optional[str]) -> int:
    return _AVAILABILITY_RANK.get(status or "", _UNKNOWN_RANK)


def squad_sort_key(player: SquadPlayer) -> Tuple[int, float, str]:
    """Availability first, then squad number; players without a number go last."""

    number = float(player.squad_number) if player.squad_number is not None else float("inf")
    return availability_rank(player.availability_status), number, player.name


def sort_squad_players(players: Iterable[SquadPlayer]) -> List[SquadPlayer]:
    return sorted(players, key=squad_sort_key)


def build_squad_players(
    players: Iterable[Player],
    statuses: Mapping[str, AvailabilityStatus],
    squad: Squad,
) -> List[SquadPlayer]:
    """Sorted view models for the squad members found in ``players``."""

    members = [
        SquadPlayer(
            id=player.id,
            name=player.name,
            squad_number=player.squad_number,
            type=player.type,
            availability_status=statuses.get(player.id),
            squad_role=squad.role_of(player.id),
        )
        for player in players
        if player.id in squad
    ]
    return sort_squad_players(members)


__all__ = [
    "Squad",
    "add_to_squad",
    "availability_rank",
    "build_squad_players",
    "can_admit",
    "check_match_eligibility",
    "remove_from_squad",
    "set_captain",
    "set_vice_captain",
    "sort_squad_players",
    "squad_sort_key",
]
