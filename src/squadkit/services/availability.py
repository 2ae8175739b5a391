"""Record availability responses and resolve statuses for an event."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from squadkit.availability import aggregate, player_statuses
from squadkit.errors import PersistenceError
from squadkit.models import (
    AvailabilityRecord,
    AvailabilityRole,
    AvailabilityStatus,
    Event,
    UserPlayerLink,
)
from squadkit.persistence import DataStore

logger = logging.getLogger("uvicorn.error")

AVAILABILITY_KEY = ("event_id", "user_id", "role")


def load_event(store: DataStore, event_id: str) -> Event:
    rows = store.fetch("events", {"id": event_id}, limit=1)
    if not rows:
        raise KeyError(f"Event {event_id} not found")
    return Event.model_validate(rows[0])


def _refresh_squad_statuses(store: DataStore, event_id: str, user_id: str) -> None:
    # squad rows keep a copy of the status of every player this user answers for
    rows = store.fetch("user_players", {"user_id": user_id})
    player_ids = [row["player_id"] for row in rows]
    if not player_ids:
        return
    statuses = event_player_statuses(store, event_id, player_ids)
    for player_id in player_ids:
        store.update_where(
            "team_squads",
            {"availability_status": statuses.get(player_id, "pending")},
            {"event_id": event_id, "player_id": player_id},
        )


def record_availability(
    store: DataStore,
    *,
    event_id: str,
    user_id: str,
    role: AvailabilityRole,
    status: AvailabilityStatus,
    now: Optional[datetime] = None,
) -> AvailabilityRecord:
    """Insert or replace the response for one ``(event, user, role)``.

    ``responded_at`` is stamped for any non-pending answer and cleared when
    the response goes back to pending.
    """

    responded_at = None if status == "pending" else (now or datetime.now(timezone.utc))
    try:
        rows = store.upsert(
            "event_availability",
            [
                {
                    "event_id": event_id,
                    "user_id": user_id,
                    "role": role,
                    "status": status,
                    "responded_at": responded_at,
                }
            ],
            AVAILABILITY_KEY,
        )
        _refresh_squad_statuses(store, event_id, user_id)
    except sqlite3.Error as exc:
        logger.exception("Failed to record availability for %s at event %s", user_id, event_id)
        raise PersistenceError("Failed to save availability", step="record_availability") from exc
    logger.info("Availability for %s (%s) at event %s set to %s", user_id, role, event_id, status)
    return AvailabilityRecord.model_validate(rows[0])


def event_records(store: DataStore, event_id: str) -> List[AvailabilityRecord]:
    rows = store.fetch("event_availability", {"event_id": event_id}, order_by="user_id")
    return [AvailabilityRecord.model_validate(row) for row in rows]


def user_statuses(store: DataStore, event_id: str) -> Dict[str, AvailabilityStatus]:
    """Effective status per user for one event."""

    return {
        user_id: status
        for (_, user_id), status in aggregate(event_records(store, event_id)).items()
    }


def player_links(store: DataStore, player_ids: Iterable[str]) -> List[UserPlayerLink]:
    rows = store.fetch("user_players", {"player_id": list(player_ids)})
    return [UserPlayerLink.model_validate(row) for row in rows]


def event_player_statuses(
    store: DataStore,
    event_id: str,
    player_ids: Iterable[str],
) -> Dict[str, AvailabilityStatus]:
    """Status of each player via the accounts linked to them.

    Players with no linked response are absent from the result.
    """

    aggregated = aggregate(event_records(store, event_id))
    return player_statuses(aggregated, player_links(store, player_ids), event_id)


__all__ = [
    "AVAILABILITY_KEY",
    "event_player_statuses",
    "event_records",
    "load_event",
    "player_links",
    "record_availability",
    "user_statuses",
]
