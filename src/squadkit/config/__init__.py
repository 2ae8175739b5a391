"""Configuration helpers for formations and game formats."""

from .formations import (
    DEFAULT_FORMATION_ID,
    FormationRules,
    formations_for_format,
    get_formation,
    iter_formations,
    players_on_pitch,
    resolve_positions,
)

__all__ = [
    "DEFAULT_FORMATION_ID",
    "FormationRules",
    "formations_for_format",
    "get_formation",
    "iter_formations",
    "players_on_pitch",
    "resolve_positions",
]
