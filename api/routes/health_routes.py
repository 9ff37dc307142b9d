"""
Health Check Routes
"""
from fastapi import APIRouter
from typing import Dict, Any
import logging
import time
from datetime import datetime

from api.schemas.response_schemas import (
    HealthCheckResponse,
    HealthStatus
)
from database.client import check_connection
from config.settings import settings

logger = logging.getLogger(__name__)
router = APIRouter()

# Track startup time
START_TIME = time.time()


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Service health summary"""

    services = [await check_database(), check_resolver()]

    overall_status = "healthy"
    if any(s.status == "unhealthy" for s in services):
        overall_status = "degraded"

    return HealthCheckResponse(
        status=overall_status,
        version=settings.app_version,
        environment=settings.app_env,
        services=services,
        uptime_seconds=time.time() - START_TIME
    )


@router.get("/live")
async def liveness_probe() -> Dict[str, Any]:
    """
    Liveness probe
    Returns 200 if service is alive
    """
    return {
        "status": "alive",
        "timestamp": datetime.now().isoformat()
    }


async def check_database() -> HealthStatus:
    """Check database health"""
    start = time.time()

    if await check_connection():
        return HealthStatus(
            service="database",
            status="healthy",
            latency_ms=(time.time() - start) * 1000,
            details={"connected": True}
        )

    return HealthStatus(
        service="database",
        status="unhealthy",
        details={"connected": False}
    )


def check_resolver() -> HealthStatus:
    """Report which availability stages are configured"""
    apis = settings.get_domain_apis()

    # Without a registry API every answer is a probe or an estimate
    status = "healthy" if apis else "degraded"

    return HealthStatus(
        service="availability_resolver",
        status=status,
        details={
            "registry_apis": [api["provider"] for api in apis],
            "presence_probe": settings.enable_presence_probe,
            "heuristic": True,
            "batch_size": settings.availability_batch_size,
            "batch_delay": settings.availability_batch_delay
        }
    )
