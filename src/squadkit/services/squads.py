"""Load and persist event squads through the admission policy."""

from __future__ import annotations

import logging
import sqlite3
from typing import Callable, Dict, List, Optional

from squadkit.errors import PersistenceError, PolicyViolation
from squadkit.models import AvailabilityStatus, Event, Player, SquadPlayer
from squadkit.persistence import DataStore
from squadkit.selection import (
    Squad,
    add_to_squad,
    build_squad_players,
    check_match_eligibility,
    remove_from_squad,
    set_captain,
    set_vice_captain,
)

from .availability import event_player_statuses, load_event

logger = logging.getLogger("uvicorn.error")


class SquadService:
    """Applies squad transitions for one store and writes only the difference."""

    def __init__(self, store: DataStore):
        self.store = store

    def event(self, event_id: str) -> Event:
        return load_event(self.store, event_id)

    def player(self, player_id: str) -> Player:
        rows = self.store.fetch("players", {"id": player_id}, limit=1)
        if not rows:
            raise KeyError(f"Player {player_id} not found")
        return Player.model_validate(rows[0])

    def load(self, event: Event) -> Squad:
        rows = self.store.fetch(
            "team_squads",
            {"event_id": event.id, "team_id": event.team_id},
            order_by="created_at",
        )
        captain = next((row["player_id"] for row in rows if row["squad_role"] == "captain"), None)
        vice = next((row["player_id"] for row in rows if row["squad_role"] == "vice_captain"), None)
        return Squad(
            player_ids=tuple(row["player_id"] for row in rows),
            captain_id=captain,
            vice_captain_id=vice,
        )

    def statuses(self, event: Event, player_ids) -> Dict[str, AvailabilityStatus]:
        return event_player_statuses(self.store, event.id, player_ids)

    def squad_players(self, event: Event) -> List[SquadPlayer]:
        squad = self.load(event)
        if not squad.player_ids:
            return []
        rows = self.store.fetch("players", {"id": list(squad.player_ids)})
        players = [Player.model_validate(row) for row in rows]
        return build_squad_players(players, self.statuses(event, squad.player_ids), squad)

    # -- transitions ---------------------------------------------------------

    def admission_status(self, event: Event, player_id: str) -> Optional[AvailabilityStatus]:
        """Check the player may be picked for ``event`` and return their status."""

        player = self.player(player_id)
        if player.team_id != event.team_id:
            raise PolicyViolation(f"{player.name} is not a member of this event's team")
        check_match_eligibility(player, event)
        return self.statuses(event, [player_id]).get(player_id)

    def add(self, event: Event, player_id: str) -> Squad:
        status = self.admission_status(event, player_id)
        return self._apply(event, lambda squad: add_to_squad(squad, player_id, status))

    def remove(self, event: Event, player_id: str) -> Squad:
        return self._apply(event, lambda squad: remove_from_squad(squad, player_id))

    def set_captain(self, event: Event, player_id: Optional[str]) -> Squad:
        status = None
        if player_id is not None:
            status = self.admission_status(event, player_id)
        return self._apply(event, lambda squad: set_captain(squad, player_id, status))

    def set_vice_captain(self, event: Event, player_id: Optional[str]) -> Squad:
        status = None
        if player_id is not None:
            status = self.admission_status(event, player_id)
        return self._apply(event, lambda squad: set_vice_captain(squad, player_id, status))

    def _apply(self, event: Event, transition: Callable[[Squad], Squad]) -> Squad:
        before = self.load(event)
        after = transition(before)
        if after == before:
            return after
        try:
            self._persist(event, before, after)
        except sqlite3.Error as exc:
            logger.exception("Failed to save squad for event %s", event.id)
            raise PersistenceError("Failed to save squad", step="save_squad") from exc
        return after

    def _persist(self, event: Event, before: Squad, after: Squad) -> None:
        removed = [pid for pid in before.player_ids if pid not in after]
        added = [pid for pid in after.player_ids if pid not in before]
        if removed:
            self.store.remove_where(
                "team_squads",
                {"event_id": event.id, "team_id": event.team_id, "player_id": removed},
            )
        if added:
            statuses = self.statuses(event, added)
            self.store.insert(
                "team_squads",
                [
                    {
                        "team_id": event.team_id,
                        "event_id": event.id,
                        "player_id": pid,
                        "squad_role": after.role_of(pid),
                        "availability_status": statuses.get(pid, "pending"),
                    }
                    for pid in added
                ],
            )
        for pid in after.player_ids:
            if pid in before and before.role_of(pid) != after.role_of(pid):
                self.store.update_where(
                    "team_squads",
                    {"squad_role": after.role_of(pid)},
                    {"event_id": event.id, "team_id": event.team_id, "player_id": pid},
                )
        logger.info(
            "Squad for event %s: +%s -%s, captain %s",
            event.id,
            len(added),
            len(removed),
            after.captain_id or "none",
        )


__all__ = ["SquadService"]
