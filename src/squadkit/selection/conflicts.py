"""Detect players picked for more than one concurrent team of a split event."""

from __future__ import annotations

from typing import Dict, Iterable, List

from squadkit.models import Selection


def _parallel_selections(candidates: Iterable[Selection], exclude: Selection) -> List[Selection]:
    others = [
        selection
        for selection in candidates
        if selection.event_id == exclude.event_id
        and selection.team_id == exclude.team_id
        and selection.team_number != exclude.team_number
    ]
    return sorted(others, key=lambda s: (s.team_number, s.period_number))


def find_conflicts(
    player_id: str,
    candidate_selections: Iterable[Selection],
    exclude: Selection,
) -> List[str]:
    """Labels of every other team line-up that already contains ``player_id``.

    Only selections for the same event and team but a different team number
    are considered, so periods of the line-up being edited never conflict
    with each other.
    """

    return [
        selection.location_label
        for selection in _parallel_selections(candidate_selections, exclude)
        if selection.contains(player_id)
    ]


def conflict_map(candidate_selections: Iterable[Selection], exclude: Selection) -> Dict[str, List[str]]:
    """``find_conflicts`` for every player appearing in a parallel line-up."""

    conflicts: Dict[str, List[str]] = {}
    for selection in _parallel_selections(candidate_selections, exclude):
        for player_id in selection.roster_ids:
            labels = conflicts.setdefault(player_id, [])
            if selection.location_label not in labels:
                labels.append(selection.location_label)
    return conflicts


__all__ = ["conflict_map", "find_conflicts"]
