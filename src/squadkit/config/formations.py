"""Formation configuration for supported game formats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class FormationRules:
    formation_id: str
    game_format: str
    positions: Tuple[str, ...]

    @property
    def size(self) -> int:
        return len(self.positions)


def _rules(formation_id: str, game_format: str, positions: str) -> FormationRules:
    return FormationRules(
        formation_id=formation_id,
        game_format=game_format,
        positions=tuple(positions.split()),
    )


DEFAULT_FORMATION_ID = "4-3-3"
DEFAULT_GAME_FORMAT = "11-a-side"

# Keyed by formation id alone; ids are unique across formats.
_FORMATIONS: Dict[str, FormationRules] = {
    rules.formation_id: rules
    for rules in (
        _rules("4-3-3", "11-a-side", "GK RB CB CB LB CM CM CM RW ST LW"),
        _rules("4-4-2", "11-a-side", "GK RB CB CB LB RM CM CM LM ST ST"),
        _rules("3-5-2", "11-a-side", "GK CB CB CB RWB CM CM CM LWB ST ST"),
        _rules("4-2-3-1", "11-a-side", "GK RB CB CB LB CDM CDM CAM RW LW ST"),
        _rules("3-4-3", "11-a-side", "GK CB CB CB RM CM CM LM RW ST LW"),
        _rules("1-4-4-2", "11-a-side", "GK DL DCL DCR DR ML MCL MCR MR SCL SCR"),
        _rules("1-4-3-3", "11-a-side", "GK DL DCL DCR DR MCL MC MCR AML SC AMR"),
        _rules("1-3-3-2", "9-a-side", "GK DL DC DR ML MC MR SL SR"),
        _rules("1-2-3-1", "7-a-side", "GK DL DR ML MC MR SC"),
        _rules("1-3-2-1", "7-a-side", "GK DL DC DR ML MR SC"),
        _rules("1-1-3-2", "7-a-side", "GK DC ML MC MR SL SR"),
        _rules("1-1-2-1", "5-a-side", "GK DC ML MR AMC"),
        _rules("1-2-1", "4-a-side", "DC ML MR AMC"),
        _rules("2-1", "3-a-side", "DL DR MC"),
    )
}


def iter_formations() -> Iterable[FormationRules]:
    """Return an iterator of all configured formations."""

    return _FORMATIONS.values()


def get_formation(formation_id: str) -> FormationRules:
    """Fetch a formation by id, raising KeyError if missing."""

    key = (formation_id or "").strip()
    if key not in _FORMATIONS:
        raise KeyError(f"No formation configured for id={formation_id!r}")
    return _FORMATIONS[key]


def formations_for_format(game_format: Optional[str]) -> List[FormationRules]:
    """List formations for a game format, falling back to 11-a-side."""

    matches = [rules for rules in _FORMATIONS.values() if rules.game_format == game_format]
    if matches:
        return matches
    return [rules for rules in _FORMATIONS.values() if rules.game_format == DEFAULT_GAME_FORMAT]


def resolve_positions(formation_id: Optional[str], game_format: Optional[str] = None) -> Tuple[str, ...]:
    """Position labels for a formation, using the default list when unknown.

    When ``game_format`` is given the formation must belong to that format;
    otherwise the first formation of the format is used, and an unknown
    format falls back to the default 11-a-side formation.
    """

    rules = _FORMATIONS.get((formation_id or "").strip())
    if rules is not None and game_format in (None, rules.game_format):
        return rules.positions
    if game_format is not None and game_format != DEFAULT_GAME_FORMAT:
        options = formations_for_format(game_format)
        if options[0].game_format == game_format:
            return options[0].positions
    return _FORMATIONS[DEFAULT_FORMATION_ID].positions


def players_on_pitch(game_format: Optional[str]) -> int:
    """Number of players on the pitch for a format such as ``"7-a-side"``."""

    head = (game_format or DEFAULT_GAME_FORMAT).split("-", 1)[0]
    try:
        return int(head)
    except ValueError:
        return int(DEFAULT_GAME_FORMAT.split("-", 1)[0])
