"""
Health and operational API endpoints
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from product_api.core.config import Config
from product_api.core.logger import logger
from product_api.db.session import Database
from product_api.dependencies.product import get_database
from product_api.dependencies.settings import get_settings
from product_api.repositories.product import STORE_ERRORS

router = APIRouter()

# Track service start time
start_time = time.time()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
def health_check(settings: Config = Depends(get_settings)):
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.service_name,
        "timestamp": _now(),
        "version": settings.service_version,
    }


@router.get("/health/live")
def liveness_check(settings: Config = Depends(get_settings)):
    """Liveness probe - check if the app is running"""
    return {
        "status": "alive",
        "service": settings.service_name,
        "timestamp": _now(),
        "uptime": time.time() - start_time,
    }


@router.get("/health/ready")
async def readiness_check(
    database: Database = Depends(get_database),
    settings: Config = Depends(get_settings),
):
    """Readiness probe - check that the store answers queries"""
    started = time.perf_counter()
    try:
        await database.ping()
    except STORE_ERRORS as e:
        logger.warning(
            "Readiness check failed - database unreachable",
            metadata={"event": "readiness_check_failed", "error": str(e)},
        )
        return JSONResponse(
            status_code=503,
            content={
                "status": "not ready",
                "service": settings.service_name,
                "timestamp": _now(),
                "checks": [{"name": "database", "status": "unhealthy", "error": str(e)}],
            },
        )

    return {
        "status": "ready",
        "service": settings.service_name,
        "timestamp": _now(),
        "checks": [{
            "name": "database",
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - started) * 1000, 2),
        }],
    }
