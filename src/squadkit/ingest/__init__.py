from .players import (
    DEFAULT_PLAYERS_MAPPING,
    PlayerRow,
    load_player_csv,
    load_players_from_csv,
    rows_to_players,
    write_assignments_csv,
)

__all__ = [
    "DEFAULT_PLAYERS_MAPPING",
    "PlayerRow",
    "load_player_csv",
    "load_players_from_csv",
    "rows_to_players",
    "write_assignments_csv",
]
