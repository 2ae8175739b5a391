"""Persistence-facing orchestration around the pure core."""

from .availability import (
    event_player_statuses,
    event_records,
    load_event,
    record_availability,
    user_statuses,
)
from .notifications import HttpNotifier, NotificationResult, Notifier, notify_event
from .selections import event_selections, save_selection, selection_conflicts
from .split import (
    SplitOutcome,
    TeamSpec,
    build_plan,
    load_year_group,
    load_year_group_players,
    submit_split,
)
from .squads import SquadService

__all__ = [
    "HttpNotifier",
    "NotificationResult",
    "Notifier",
    "SplitOutcome",
    "SquadService",
    "TeamSpec",
    "build_plan",
    "event_player_statuses",
    "event_records",
    "event_selections",
    "load_event",
    "load_year_group",
    "load_year_group_players",
    "notify_event",
    "record_availability",
    "save_selection",
    "selection_conflicts",
    "submit_split",
    "user_statuses",
]
