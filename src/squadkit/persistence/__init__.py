"""Persistence layer implementing the data-access contract over SQLite."""

from __future__ import annotations

import json
import os
import sqlite3
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple
from uuid import uuid4

Row = dict
Filters = Mapping[str, Any]


class DataStore(Protocol):
    """CRUD contract the services rely on.

    Filters map a column to a value: a list/tuple/set means "one of", ``None``
    means the column is NULL, anything else is an equality test. No
    multi-statement atomicity is promised.
    """

    def fetch(
        self,
        entity: str,
        filters: Optional[Filters] = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]: ...

    def insert(self, entity: str, rows: Iterable[Mapping[str, Any]]) -> List[Row]: ...

    def update(self, entity: str, row_id: str, patch: Mapping[str, Any]) -> Row: ...

    def update_where(self, entity: str, patch: Mapping[str, Any], filters: Filters) -> int: ...

    def upsert(
        self,
        entity: str,
        rows: Iterable[Mapping[str, Any]],
        conflict_columns: Sequence[str],
    ) -> List[Row]: ...

    def remove(self, entity: str, row_id: str) -> None: ...

    def remove_where(self, entity: str, filters: Filters) -> int: ...


_TABLES: Mapping[str, Tuple[Tuple[str, str], ...]] = {
    "players": (
        ("name", "TEXT NOT NULL"),
        ("squad_number", "INTEGER"),
        ("team_id", "TEXT"),
        ("subscription_type", "TEXT NOT NULL DEFAULT 'full_squad'"),
        ("status", "TEXT NOT NULL DEFAULT 'active'"),
        ("type", "TEXT NOT NULL DEFAULT 'outfield'"),
    ),
    "teams": (
        ("name", "TEXT NOT NULL"),
        ("age_group", "TEXT NOT NULL"),
        ("game_format", "TEXT NOT NULL"),
        ("year_group_id", "TEXT"),
        ("season_start", "TEXT"),
        ("season_end", "TEXT"),
        ("subscription_type", "TEXT NOT NULL DEFAULT 'free'"),
        ("kit_icons", "TEXT"),
    ),
    "year_groups": (
        ("name", "TEXT NOT NULL"),
        ("club_id", "TEXT NOT NULL"),
        ("age_year", "INTEGER"),
        ("playing_format", "TEXT"),
        ("soft_player_limit", "INTEGER"),
    ),
    "club_teams": (
        ("club_id", "TEXT NOT NULL"),
        ("team_id", "TEXT NOT NULL"),
    ),
    "events": (
        ("team_id", "TEXT NOT NULL"),
        ("date", "TEXT NOT NULL"),
        ("event_type", "TEXT NOT NULL"),
        ("title", "TEXT NOT NULL DEFAULT ''"),
        ("team_count", "INTEGER NOT NULL DEFAULT 1"),
    ),
    "event_selections": (
        ("event_id", "TEXT NOT NULL"),
        ("team_id", "TEXT NOT NULL"),
        ("team_number", "INTEGER NOT NULL DEFAULT 1"),
        ("period_number", "INTEGER NOT NULL DEFAULT 1"),
        ("formation", "TEXT"),
        ("player_positions", "TEXT"),
        ("substitute_players", "TEXT"),
        ("captain_id", "TEXT"),
        ("staff_selection", "TEXT"),
        ("duration_minutes", "INTEGER"),
    ),
    "event_availability": (
        ("event_id", "TEXT NOT NULL"),
        ("user_id", "TEXT NOT NULL"),
        ("role", "TEXT NOT NULL"),
        ("status", "TEXT NOT NULL"),
        ("responded_at", "TEXT"),
    ),
    "user_players": (
        ("user_id", "TEXT NOT NULL"),
        ("player_id", "TEXT NOT NULL"),
        ("relationship", "TEXT NOT NULL DEFAULT 'parent'"),
    ),
    "team_squads": (
        ("team_id", "TEXT NOT NULL"),
        ("event_id", "TEXT"),
        ("player_id", "TEXT NOT NULL"),
        ("squad_role", "TEXT NOT NULL DEFAULT 'player'"),
        ("availability_status", "TEXT"),
    ),
}

_JSON_COLUMNS: Mapping[str, frozenset] = {
    "teams": frozenset({"kit_icons"}),
    "event_selections": frozenset({"player_positions", "substitute_players", "staff_selection"}),
}

_UNIQUE_KEYS: Mapping[str, Tuple[str, ...]] = {
    "event_availability": ("event_id", "user_id", "role"),
    "event_selections": ("event_id", "team_id", "team_number", "period_number"),
}


class SquadStore:
    """Simple SQLite-backed store, one table per entity."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv("SQUADKIT_DB_PATH")
        source = env_db or db_path
        if isinstance(source, str) and source.startswith("file:"):
            self.db_path: Path | str = source
            self._use_uri = True
        else:
            self.db_path = Path(source)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            for entity, columns in _TABLES.items():
                column_sql = ",\n".join(f"{name} {kind}" for name, kind in columns)
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {entity} (
                        id TEXT PRIMARY KEY,
                        {column_sql},
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
            for entity, key in _UNIQUE_KEYS.items():
                conn.execute(
                    f"CREATE UNIQUE INDEX IF NOT EXISTS ux_{entity} ON {entity} ({', '.join(key)})"
                )
            conn.commit()

    # -- row encoding -----------------------------------------------------

    def _columns(self, entity: str) -> Tuple[str, ...]:
        if entity not in _TABLES:
            raise KeyError(f"Unknown entity {entity!r}")
        return tuple(name for name, _ in _TABLES[entity])

    def _encode_value(self, entity: str, column: str, value: Any) -> Any:
        if column in _JSON_COLUMNS.get(entity, ()):
            return None if value is None else json.dumps(value)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return value

    def _encode(self, entity: str, row: Mapping[str, Any]) -> dict[str, Any]:
        allowed = set(self._columns(entity)) | {"id"}
        unknown = set(row) - allowed - {"created_at", "updated_at"}
        if unknown:
            raise ValueError(f"Unknown columns for {entity}: {', '.join(sorted(unknown))}")
        return {
            column: self._encode_value(entity, column, value)
            for column, value in row.items()
            if column in allowed
        }

    def _decode(self, entity: str, row: sqlite3.Row) -> Row:
        json_columns = _JSON_COLUMNS.get(entity, frozenset())
        decoded = {}
        for key in row.keys():
            value = row[key]
            if key in json_columns and value is not None:
                value = json.loads(value)
            decoded[key] = value
        return decoded

    def _where(self, entity: str, filters: Optional[Filters]) -> Tuple[str, list[Any]]:
        if not filters:
            return "", []
        allowed = set(self._columns(entity)) | {"id"}
        conditions: list[str] = []
        params: list[Any] = []
        for column, value in filters.items():
            if column not in allowed:
                raise ValueError(f"Unknown filter column {column!r} for {entity}")
            if value is None:
                conditions.append(f"{column} IS NULL")
            elif isinstance(value, (list, tuple, set, frozenset)):
                values = list(value)
                if not values:
                    conditions.append("0")
                    continue
                placeholders = ", ".join("?" for _ in values)
                conditions.append(f"{column} IN ({placeholders})")
                params.extend(self._encode_value(entity, column, item) for item in values)
            else:
                conditions.append(f"{column} = ?")
                params.append(self._encode_value(entity, column, value))
        return " WHERE " + " AND ".join(conditions), params

    # -- contract -----------------------------------------------------------

    def fetch(
        self,
        entity: str,
        filters: Optional[Filters] = None,
        *,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Row]:
        columns = self._columns(entity)
        where, params = self._where(entity, filters)
        query = f"SELECT * FROM {entity}{where}"
        if order_by:
            if order_by not in columns and order_by not in {"id", "created_at", "updated_at"}:
                raise ValueError(f"Unknown order column {order_by!r} for {entity}")
            query += f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}, rowid ASC"
        else:
            query += " ORDER BY rowid ASC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        with self._connect() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._decode(entity, row) for row in rows]

    def get(self, entity: str, row_id: str) -> Optional[Row]:
        rows = self.fetch(entity, {"id": row_id}, limit=1)
        return rows[0] if rows else None

    def insert(self, entity: str, rows: Iterable[Mapping[str, Any]]) -> List[Row]:
        now = datetime.now(timezone.utc).isoformat()
        encoded_rows = []
        for row in rows:
            encoded = self._encode(entity, row)
            encoded["id"] = encoded.get("id") or uuid4().hex
            encoded["created_at"] = now
            encoded["updated_at"] = now
            encoded_rows.append(encoded)
        if not encoded_rows:
            return []
        with self._connect() as conn:
            for encoded in encoded_rows:
                columns = list(encoded)
                conn.execute(
                    f"INSERT INTO {entity} ({', '.join(columns)}) "
                    f"VALUES ({', '.join('?' for _ in columns)})",
                    tuple(encoded[column] for column in columns),
                )
            conn.commit()
        return self.fetch(entity, {"id": [encoded["id"] for encoded in encoded_rows]})

    def update(self, entity: str, row_id: str, patch: Mapping[str, Any]) -> Row:
        if self.get(entity, row_id) is None:
            raise KeyError(f"{entity} row {row_id} not found")
        self.update_where(entity, patch, {"id": row_id})
        updated = self.get(entity, row_id)
        if updated is None:  # pragma: no cover
            raise KeyError(f"{entity} row {row_id} not found after update")
        return updated

    def update_where(self, entity: str, patch: Mapping[str, Any], filters: Filters) -> int:
        if not filters:
            raise ValueError("update_where requires at least one filter")
        encoded = self._encode(entity, {k: v for k, v in patch.items() if k != "id"})
        encoded["updated_at"] = datetime.now(timezone.utc).isoformat()
        where, params = self._where(entity, filters)
        assignments = ", ".join(f"{column} = ?" for column in encoded)
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE {entity} SET {assignments}{where}",
                tuple(encoded.values()) + tuple(params),
            )
            conn.commit()
            return cursor.rowcount

    def upsert(
        self,
        entity: str,
        rows: Iterable[Mapping[str, Any]],
        conflict_columns: Sequence[str],
    ) -> List[Row]:
        now = datetime.now(timezone.utc).isoformat()
        keys: list[dict[str, Any]] = []
        with self._connect() as conn:
            for row in rows:
                encoded = self._encode(entity, row)
                encoded["id"] = encoded.get("id") or uuid4().hex
                encoded["created_at"] = now
                encoded["updated_at"] = now
                columns = list(encoded)
                updates = [
                    f"{column} = excluded.{column}"
                    for column in columns
                    if column not in {"id", "created_at", *conflict_columns}
                ]
                conn.execute(
                    f"INSERT INTO {entity} ({', '.join(columns)}) "
                    f"VALUES ({', '.join('?' for _ in columns)}) "
                    f"ON CONFLICT({', '.join(conflict_columns)}) DO UPDATE SET {', '.join(updates)}",
                    tuple(encoded[column] for column in columns),
                )
                keys.append({column: row[column] for column in conflict_columns})
            conn.commit()
        results: List[Row] = []
        for key in keys:
            results.extend(self.fetch(entity, key, limit=1))
        return results

    def remove(self, entity: str, row_id: str) -> None:
        self.remove_where(entity, {"id": row_id})

    def remove_where(self, entity: str, filters: Filters) -> int:
        if not filters:
            raise ValueError("remove_where requires at least one filter")
        where, params = self._where(entity, filters)
        with self._connect() as conn:
            cursor = conn.execute(f"DELETE FROM {entity}{where}", tuple(params))
            conn.commit()
            return cursor.rowcount


__all__ = ["DataStore", "Filters", "Row", "SquadStore"]
