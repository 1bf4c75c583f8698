"""
DataStore - Interface every store backend implements

Filters are column equality matches. A filter value of None matches NULL.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class DataStore(ABC):
    """Collection-scoped query/insert/update/delete plus identity lookup"""

    @abstractmethod
    def query(self, collection: str, filters: Optional[Dict[str, Any]] = None,
              order: Optional[str] = None, desc: bool = False,
              limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return rows of a collection matching all filters"""

    @abstractmethod
    def insert(self, collection: str, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record and return the created row"""

    @abstractmethod
    def update(self, collection: str, filters: Dict[str, Any],
               patch: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Apply a patch to matching rows and return the affected rows"""

    @abstractmethod
    def delete(self, collection: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Delete matching rows and return them"""

    @abstractmethod
    def get_current_user(self, access_token: str) -> Optional[str]:
        """Resolve an access token to a user id, or None when it is not valid"""
