"""Squad number uniqueness among the active players of a team."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from squadkit.errors import ValidationError
from squadkit.models import Player


def duplicate_squad_numbers(players: Iterable[Player]) -> Dict[int, List[str]]:
    """Map each clashing squad number to the ids of the active players using it."""

    holders: Dict[int, List[str]] = defaultdict(list)
    for player in players:
        if player.is_active and player.squad_number is not None:
            holders[player.squad_number].append(player.id)
    return {number: ids for number, ids in sorted(holders.items()) if len(ids) > 1}


def check_squad_number(
    players: Iterable[Player],
    squad_number: int,
    player_id: Optional[str] = None,
) -> None:
    """Raise if ``squad_number`` is taken by another active player."""

    if squad_number < 1:
        raise ValidationError("Squad number must be a positive number")
    for player in players:
        if player.id == player_id or not player.is_active:
            continue
        if player.squad_number == squad_number:
            raise ValidationError(f"Squad number {squad_number} is already used by {player.name}")


def next_free_squad_number(players: Iterable[Player]) -> int:
    taken = {p.squad_number for p in players if p.is_active and p.squad_number is not None}
    number = 1
    while number in taken:
        number += 1
    return number


__all__ = ["check_squad_number", "duplicate_squad_numbers", "next_free_squad_number"]
