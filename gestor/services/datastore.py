"""Entity storage behind the list and report views."""

from __future__ import annotations

import json
import logging
import os
import uuid
from typing import Any, Dict, List, Mapping, Optional, Protocol

import duckdb

from gestor.models import DATE_FIELDS

logger = logging.getLogger("gestor")

# entity kind -> primary key field
ID_FIELDS: Dict[str, str] = {kind: "id" for kind in DATE_FIELDS}
ID_FIELDS["profits"] = "orderId"


def _check_kind(kind: str) -> str:
    if kind not in ID_FIELDS:
        raise ValueError(f"Unknown entity kind: {kind!r}")
    return ID_FIELDS[kind]


def _with_id(kind: str, record: Mapping[str, Any]) -> Dict[str, Any]:
    id_field = _check_kind(kind)
    out = dict(record)
    if not out.get(id_field):
        out[id_field] = str(uuid.uuid4())
    out[id_field] = str(out[id_field])
    return out


class EntityStore(Protocol):
    """Per-kind key-value access: what every view needs from storage."""

    def get_all(self, kind: str) -> List[Dict[str, Any]]: ...

    def get(self, kind: str, record_id: str) -> Optional[Dict[str, Any]]: ...

    def save(self, kind: str, record: Mapping[str, Any]) -> Dict[str, Any]: ...

    def delete(self, kind: str, record_id: str) -> bool: ...

    def counts(self) -> Dict[str, int]: ...


class MemoryStore:
    """Dict-backed store; insertion order is the listing order."""

    def __init__(self, seed: Optional[Mapping[str, List[Mapping[str, Any]]]] = None):
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {kind: {} for kind in ID_FIELDS}
        for kind, records in (seed or {}).items():
            for record in records:
                self.save(kind, record)

    def get_all(self, kind: str) -> List[Dict[str, Any]]:
        _check_kind(kind)
        return [dict(r) for r in self._data[kind].values()]

    def get(self, kind: str, record_id: str) -> Optional[Dict[str, Any]]:
        _check_kind(kind)
        found = self._data[kind].get(str(record_id))
        return dict(found) if found is not None else None

    def save(self, kind: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        out = _with_id(kind, record)
        self._data[kind][out[ID_FIELDS[kind]]] = out
        return dict(out)

    def delete(self, kind: str, record_id: str) -> bool:
        _check_kind(kind)
        return self._data[kind].pop(str(record_id), None) is not None

    def counts(self) -> Dict[str, int]:
        return {kind: len(records) for kind, records in self._data.items()}


class DataStore:
    """DuckDB-backed entity store.

    Storage backend: DuckDB (.duckdb file, or ``:memory:``)
    - Table store.entities(kind, id, seq, body) with body as JSON text
    - ``seq`` keeps first-insert order so listings are stable across updates
    """

    def __init__(self, config: Mapping[str, Any]):
        self.config = config
        self._con: Optional[duckdb.DuckDBPyConnection] = None

    # ---------- DuckDB helpers ----------

    def _connect(self) -> duckdb.DuckDBPyConnection:
        if self._con is None:
            db_path = str(self.config.get("DUCKDB_PATH") or ":memory:")
            if db_path != ":memory:":
                parent = os.path.dirname(db_path)
                if parent:
                    os.makedirs(parent, exist_ok=True)
            self._con = duckdb.connect(db_path)
            self._ensure_schema()
            logger.info("Opened entity store at %s", db_path)
        return self._con

    def _ensure_schema(self) -> None:
        con = self._con
        con.execute("CREATE SCHEMA IF NOT EXISTS store;")
        con.execute(
            """
            CREATE TABLE IF NOT EXISTS store.entities (
              kind VARCHAR NOT NULL,
              id VARCHAR NOT NULL,
              seq BIGINT NOT NULL,
              body VARCHAR NOT NULL,
              PRIMARY KEY (kind, id)
            );
            """
        )

    def close(self) -> None:
        if self._con is not None:
            self._con.close()
            self._con = None

    # ---------- port ----------

    def get_all(self, kind: str) -> List[Dict[str, Any]]:
        _check_kind(kind)
        rows = self._connect().execute(
            "SELECT body FROM store.entities WHERE kind = ? ORDER BY seq;", [kind]
        ).fetchall()
        return [json.loads(body) for (body,) in rows]

    def get(self, kind: str, record_id: str) -> Optional[Dict[str, Any]]:
        _check_kind(kind)
        row = self._connect().execute(
            "SELECT body FROM store.entities WHERE kind = ? AND id = ?;", [kind, str(record_id)]
        ).fetchone()
        return json.loads(row[0]) if row else None

    def save(self, kind: str, record: Mapping[str, Any]) -> Dict[str, Any]:
        out = _with_id(kind, record)
        record_id = out[ID_FIELDS[kind]]
        body = json.dumps(out)
        con = self._connect()
        exists = con.execute(
            "SELECT COUNT(*) FROM store.entities WHERE kind = ? AND id = ?;", [kind, record_id]
        ).fetchone()[0]
        if exists:
            con.execute(
                "UPDATE store.entities SET body = ? WHERE kind = ? AND id = ?;",
                [body, kind, record_id],
            )
        else:
            seq = con.execute("SELECT COALESCE(MAX(seq), 0) + 1 FROM store.entities;").fetchone()[0]
            con.execute(
                "INSERT INTO store.entities VALUES (?, ?, ?, ?);",
                [kind, record_id, int(seq), body],
            )
        logger.debug("Saved %s/%s", kind, record_id)
        return out

    def delete(self, kind: str, record_id: str) -> bool:
        _check_kind(kind)
        con = self._connect()
        found = con.execute(
            "SELECT COUNT(*) FROM store.entities WHERE kind = ? AND id = ?;", [kind, str(record_id)]
        ).fetchone()[0]
        if found:
            con.execute(
                "DELETE FROM store.entities WHERE kind = ? AND id = ?;", [kind, str(record_id)]
            )
            logger.info("Deleted %s/%s", kind, record_id)
        return bool(found)

    def counts(self) -> Dict[str, int]:
        rows = self._connect().execute(
            "SELECT kind, COUNT(*) FROM store.entities GROUP BY kind;"
        ).fetchall()
        out = {kind: 0 for kind in ID_FIELDS}
        out.update({kind: int(n) for kind, n in rows})
        return out


__all__ = ["DataStore", "EntityStore", "ID_FIELDS", "MemoryStore"]
