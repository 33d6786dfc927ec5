"""
Health checks - for load balancers, Kubernetes, and monitoring.
Challenge: Fast liveness; database round trip for readiness.
"""

from fastapi import APIRouter
from sqlalchemy import text

from vehicle_reports.config import get_settings
from vehicle_reports.db.session import DbSession

router = APIRouter()
settings = get_settings()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": settings.app_name}


@router.get("/ready")
async def ready(session: DbSession):
    """Readiness: can the database answer a trivial query?"""
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
