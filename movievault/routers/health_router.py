import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ..config import APP_VERSION
from ..dependencies import get_db_pool, get_session_registry
from ..exceptions import STORAGE_ERRORS

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/health")
async def health_check(
    db=Depends(get_db_pool),
    sessions=Depends(get_session_registry)
):
    """Health check endpoint"""
    database = "unavailable"
    if db is not None:
        try:
            await db.fetchval("SELECT 1")
            database = "connected"
        except STORAGE_ERRORS as exc:
            logger.warning(f"Database health probe failed: {exc}")

    return {
        "success": True,
        "status": "healthy" if database == "connected" else "degraded",
        "message": "Server is running",
        "database": database,
        "sessionBackend": sessions.name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": APP_VERSION,
    }
