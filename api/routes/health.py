"""Service information and health check endpoints."""

import time
from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from core.config import settings
from core.utils.datetime import now

router = APIRouter(tags=["health"])

_started = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    uptime: float
    timestamp: datetime


class ServiceInfo(BaseModel):
    name: str
    version: str
    description: str
    status: str
    environment: str
    timestamp: datetime
    endpoints: dict[str, str]


@router.get("", response_model=ServiceInfo)
async def service_info(request: Request):
    """Describe the service and the resources it exposes."""
    base = str(request.base_url).rstrip("/") + settings.api_prefix
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        description="Interview configurations, interviews, results, reports and questions",
        status="running",
        environment=settings.app_env,
        timestamp=now(),
        endpoints={
            "health": f"{base}/health",
            "interview_configs": f"{base}/interview-configs",
            "interviews": f"{base}/interviews",
            "interview_results": f"{base}/interview-results",
            "interview_reports": f"{base}/interview-reports",
            "questions": f"{base}/questions",
        },
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        uptime=round(time.monotonic() - _started, 3),
        timestamp=now(),
    )
