"""Availability aggregation across roles and linked accounts."""

from .aggregation import (
    AvailabilitySummary,
    aggregate,
    effective_status,
    player_statuses,
    summarize,
)

__all__ = [
    "AvailabilitySummary",
    "aggregate",
    "effective_status",
    "player_statuses",
    "summarize",
]
