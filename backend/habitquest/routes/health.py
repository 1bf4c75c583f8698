"""
Health Routes - Health check endpoints
"""
from fastapi import APIRouter, Depends
from habitquest.core.config import settings
from habitquest.core.dependencies import get_session_manager

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(manager=Depends(get_session_manager)):
    """Liveness plus the number of sessions currently counting down"""
    return {
        "status": "ok",
        "store": settings.STORE_BACKEND,
        "active_sessions": manager.active_count()
    }
