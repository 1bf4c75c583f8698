"""
Persistent store module
Generic collection-level access to the relational data store
"""
from .base import DataStore
from .memory import MemoryStore
from .supabase_store import SupabaseStore

__all__ = ['DataStore', 'MemoryStore', 'SupabaseStore']
