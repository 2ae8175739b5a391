"""Collapse per-role availability rows into one status per user and event."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Tuple

from squadkit.models import AvailabilityRecord, AvailabilityStatus, UserPlayerLink

# Higher wins: a user available in any capacity shows as attending.
_PRECEDENCE: Mapping[str, int] = {
    "pending": 0,
    "unavailable": 1,
    "available": 2,
}


@dataclass(frozen=True)
class AvailabilitySummary:
    available: int
    unavailable: int
    pending: int
    no_response: int

    @property
    def total(self) -> int:
        return self.available + self.unavailable + self.pending + self.no_response


def _stronger(current: Optional[str], candidate: str) -> str:
    if current is None or _PRECEDENCE[candidate] > _PRECEDENCE[current]:
        return candidate
    return current


def aggregate(records: Iterable[AvailabilityRecord]) -> Dict[Tuple[str, str], AvailabilityStatus]:
    """Return the effective status per ``(event_id, user_id)``.

    ``available`` beats ``unavailable`` beats ``pending``. Users without any
    record for an event get no entry at all, which callers treat as "no
    response" rather than pending.
    """

    result: Dict[Tuple[str, str], AvailabilityStatus] = {}
    for record in records:
        key = (record.event_id, record.user_id)
        result[key] = _stronger(result.get(key), record.status)  # type: ignore[assignment]
    return result


def effective_status(
    records: Iterable[AvailabilityRecord],
    event_id: str,
    user_id: str,
) -> Optional[AvailabilityStatus]:
    relevant = [
        record for record in records if record.event_id == event_id and record.user_id == user_id
    ]
    return aggregate(relevant).get((event_id, user_id))


def player_statuses(
    aggregated: Mapping[Tuple[str, str], AvailabilityStatus],
    links: Iterable[UserPlayerLink],
    event_id: str,
) -> Dict[str, AvailabilityStatus]:
    """Resolve each linked player's status from the users answering for them.

    A player with several linked accounts (themselves and a parent, say) uses
    the same precedence as the per-role aggregation.
    """

    result: Dict[str, AvailabilityStatus] = {}
    for link in links:
        status = aggregated.get((event_id, link.user_id))
        if status is None:
            continue
        result[link.player_id] = _stronger(result.get(link.player_id), status)  # type: ignore[assignment]
    return result


def summarize(
    statuses: Mapping[str, AvailabilityStatus],
    expected_ids: Iterable[str],
) -> AvailabilitySummary:
    counts = {"available": 0, "unavailable": 0, "pending": 0}
    no_response = 0
    for identifier in expected_ids:
        status = statuses.get(identifier)
        if status is None:
            no_response += 1
        else:
            counts[status] += 1
    return AvailabilitySummary(
        available=counts["available"],
        unavailable=counts["unavailable"],
        pending=counts["pending"],
        no_response=no_response,
    )


__all__ = [
    "AvailabilitySummary",
    "aggregate",
    "effective_status",
    "player_statuses",
    "summarize",
]
