"""
Health checks - for load balancers and monitoring.
"""

from fastapi import APIRouter
from sqlalchemy import text

from petfinder.config import get_settings
from petfinder.db.session import DbSession

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name, "storage": settings.storage_backend}


@router.get("/ready")
async def ready(session: DbSession):
    """Readiness: the SQL backend answers a trivial query."""
    if settings.storage_backend == "sql":
        await session.execute(text("SELECT 1"))
    return {"status": "ready"}
