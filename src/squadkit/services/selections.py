"""Selection rows and cross-team conflict lookups."""

from __future__ import annotations

from typing import Dict, List

from squadkit.models import Event, Selection
from squadkit.persistence import DataStore
from squadkit.selection import conflict_map


def event_selections(store: DataStore, event: Event) -> List[Selection]:
    rows = store.fetch(
        "event_selections",
        {"event_id": event.id, "team_id": event.team_id},
        order_by="team_number",
    )
    return [
        Selection.model_validate(
            {
                **row,
                "formation": row.get("formation") or "",
                "player_positions": row.get("player_positions") or [],
                "substitute_players": row.get("substitute_players") or [],
                "staff_selection": row.get("staff_selection") or [],
                "duration_minutes": row.get("duration_minutes") or 90,
            }
        )
        for row in rows
    ]


def save_selection(store: DataStore, selection: Selection) -> Selection:
    """Upsert by event, team, team number and period."""

    payload = selection.model_dump(exclude={"id"})
    rows = store.upsert(
        "event_selections",
        [payload],
        ("event_id", "team_id", "team_number", "period_number"),
    )
    return Selection.model_validate(rows[0])


def selection_conflicts(
    store: DataStore,
    event: Event,
    team_number: int,
    period_number: int = 1,
) -> Dict[str, List[str]]:
    """Players already picked by another team number of the same event."""

    editing = Selection(
        event_id=event.id,
        team_id=event.team_id,
        team_number=team_number,
        period_number=period_number,
    )
    return conflict_map(event_selections(store, event), editing)


__all__ = ["event_selections", "save_selection", "selection_conflicts"]
