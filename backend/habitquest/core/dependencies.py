"""
Dependency injection for shared clients and resources
"""
from typing import Optional

from fastapi import Header, HTTPException
from supabase import create_client, Client

from habitquest.core.config import settings
from habitquest.core.exceptions import NotAuthenticatedError
from habitquest.store import DataStore, MemoryStore, SupabaseStore

# Shared instances, created on first use
_store: Optional[DataStore] = None
_session_manager = None


def get_supabase_client() -> Client:
    """Get Supabase client instance"""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)


def get_store() -> DataStore:
    """Get the configured data store, creating it on first use"""
    global _store

    if _store is None:
        if settings.STORE_BACKEND == "memory":
            _store = MemoryStore()
        else:
            _store = SupabaseStore(get_supabase_client())
    return _store


def set_store(store: Optional[DataStore]) -> None:
    """Replace the shared data store (None resets to the configured backend)"""
    global _store
    _store = store


def get_session_manager():
    """Get the shared habit session manager"""
    global _session_manager

    if _session_manager is None:
        from habitquest.services.sessions import SessionManager
        from habitquest.services.scheduler import get_scheduler
        _session_manager = SessionManager(scheduler=get_scheduler())
    return _session_manager


def set_session_manager(manager) -> None:
    """Replace the shared session manager (None recreates it on next use)"""
    global _session_manager
    _session_manager = manager


def authenticate(authorization: Optional[str]) -> str:
    """
    Resolve an Authorization header value to a user id

    Raises:
        NotAuthenticatedError: If the header is missing or the token is rejected
    """
    if not authorization or not authorization.lower().startswith("bearer "):
        raise NotAuthenticatedError()

    token = authorization.split(" ", 1)[1].strip()
    user_id = get_store().get_current_user(token)
    if not user_id:
        raise NotAuthenticatedError()
    return user_id


def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """FastAPI dependency: the authenticated caller's user id, or a 401"""
    try:
        return authenticate(authorization)
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e), headers={"WWW-Authenticate": "Bearer"})
