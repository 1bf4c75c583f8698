"""
Memory store - Process-local DataStore

Used for local runs (STORE_BACKEND=memory) and the test suite. Rows are
copied on the way in and out so callers never share state with the tables.
"""
from copy import deepcopy
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Dict, List, Optional
import uuid

from .base import DataStore

# Columns stamped with the insert time when the caller leaves them out
_TIMESTAMP_DEFAULTS = {
    "habits": "created_at",
    "teams": "created_at",
    "team_members": "joined_at",
    "habit_logs": "completed_at",
    "user_goals": "created_at",
    "habit_statistics": "created_at",
    "profiles": "created_at",
}


def _matches(row: Dict[str, Any], filters: Optional[Dict[str, Any]]) -> bool:
    return all(row.get(column) == value for column, value in (filters or {}).items())


class MemoryStore(DataStore):
    """Dictionary-of-lists tables with an access-token registry"""

    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.tokens: Dict[str, str] = {}
        self._lock = RLock()

    def register_token(self, access_token: str, user_id: str) -> None:
        self.tokens[access_token] = user_id

    def query(self, collection: str, filters: Optional[Dict[str, Any]] = None,
              order: Optional[str] = None, desc: bool = False,
              limit: Optional[int] = None) -> List[Dict[str, Any]]:
        with self._lock:
            rows = [deepcopy(r) for r in self.tables.get(collection, []) if _matches(r, filters)]
        if order:
            # NULLs sort last in both directions, as PostgREST does by default
            present = [r for r in rows if r.get(order) is not None]
            missing = [r for r in rows if r.get(order) is None]
            rows = sorted(present, key=lambda r: r[order], reverse=desc) + missing
        if limit:
            rows = rows[:limit]
        return rows

    def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        row = deepcopy(record)
        row.setdefault("id", str(uuid.uuid4()))
        stamp_column = _TIMESTAMP_DEFAULTS.get(collection)
        if stamp_column:
            row.setdefault(stamp_column, datetime.now(timezone.utc).isoformat())
        with self._lock:
            self.tables.setdefault(collection, []).append(row)
        return deepcopy(row)

    def update(self, collection: str, filters: Dict[str, Any],
               patch: Dict[str, Any]) -> List[Dict[str, Any]]:
        affected = []
        with self._lock:
            for row in self.tables.get(collection, []):
                if _matches(row, filters):
                    row.update(deepcopy(patch))
                    affected.append(deepcopy(row))
        return affected

    def delete(self, collection: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        with self._lock:
            rows = self.tables.get(collection, [])
            removed = [r for r in rows if _matches(r, filters)]
            self.tables[collection] = [r for r in rows if not _matches(r, filters)]
        return removed

    def get_current_user(self, access_token: str) -> Optional[str]:
        return self.tokens.get(access_token)
