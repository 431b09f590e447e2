"""Health check endpoints."""
from fastapi import APIRouter
import logging

from ..core.config import settings
from ..core.database import health_check_db

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])

@router.get("/")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }

@router.get("/db")
async def database_health():
    healthy = await health_check_db()
    return {"status": "healthy" if healthy else "unhealthy", "database": "connected" if healthy else "unreachable"}
