"""
Health check endpoints.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel
from pymongo.errors import PyMongoError

from ...core.config import get_settings
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/health", tags=["health"])
logger = logging.getLogger("clinicbook")


class HealthResponse(BaseModel):
    """Payload of GET /health."""

    status: str
    timestamp: datetime
    version: str
    service: str


@router.get("", response_model=ApiResponse[HealthResponse])
async def health_check(request: Request):
    """Static health payload; does not touch MongoDB."""
    settings = get_settings()
    return ok(request, data=HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version=settings.app_version,
        service="ClinicBook Appointment Service",
    ), message="OK")


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(request: Request):
    """
    Readiness probe.

    Pings MongoDB through the client opened in the lifespan; stays 200 and
    reports "degraded" so orchestrators can read the checks.
    """
    checks = {}
    all_ok = True

    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        checks["database"] = "not_connected"
        all_ok = False
    else:
        try:
            await client.admin.command("ping")
            checks["database"] = "ok"
        except PyMongoError as e:
            logger.error(f"Database ping failed: {e}")
            checks["database"] = f"error: {str(e)[:50]}"
            all_ok = False

    status = "ready" if all_ok else "degraded"

    return ok(request, data={
        "status": status,
        "timestamp": datetime.utcnow(),
        "checks": checks,
    }, message="OK" if all_ok else "Some services unavailable")


@router.get("/live", response_model=ApiResponse[dict])
async def liveness_check(request: Request):
    """Liveness probe: the event loop answers."""
    return ok(request, data={"status": "alive", "timestamp": datetime.utcnow()}, message="OK")
