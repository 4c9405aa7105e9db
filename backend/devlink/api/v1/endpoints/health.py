"""
Health Check Endpoints

- /health       - Basic liveness (app is running)
- /health/ready - Readiness check (database reachable)
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime
import time

from devlink.core.config import settings
from devlink.core.database import get_db
from devlink.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


@router.get("")
async def health_check():
    """Liveness: the process is up"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.utcnow().isoformat(),
    }


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Readiness: the database answers a trivial query"""
    start = time.time()
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "unreachable"},
        )

    return {
        "status": "healthy",
        "database": "ok",
        "latency_ms": round((time.time() - start) * 1000, 2),
    }
