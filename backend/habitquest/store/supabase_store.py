"""
Supabase store - DataStore backed by the Supabase (PostgREST) client
"""
from typing import Any, Dict, List, Optional
import logging

from supabase import Client

from .base import DataStore

logger = logging.getLogger(__name__)


def _apply_filters(query, filters: Optional[Dict[str, Any]]):
    for column, value in (filters or {}).items():
        if value is None:
            query = query.is_(column, "null")
        else:
            query = query.eq(column, value)
    return query


class SupabaseStore(DataStore):
    """Thin adapter from the DataStore interface to supabase-py"""

    def __init__(self, client: Client):
        self.client = client

    def query(self, collection: str, filters: Optional[Dict[str, Any]] = None,
              order: Optional[str] = None, desc: bool = False,
              limit: Optional[int] = None) -> List[Dict[str, Any]]:
        query = _apply_filters(self.client.table(collection).select("*"), filters)
        if order:
            query = query.order(order, desc=desc)
        if limit:
            query = query.limit(limit)
        return query.execute().data

    def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        result = self.client.table(collection).insert(record).execute()
        return result.data[0] if result.data else {}

    def update(self, collection: str, filters: Dict[str, Any],
               patch: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = _apply_filters(self.client.table(collection).update(patch), filters)
        return query.execute().data

    def delete(self, collection: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        query = _apply_filters(self.client.table(collection).delete(), filters)
        return query.execute().data

    def get_current_user(self, access_token: str) -> Optional[str]:
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            logger.info(f"Access token rejected by identity provider: {e}")
            return None
        if response is None or response.user is None:
            return None
        return response.user.id
