# /healthlens/routes/public.py

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from prometheus_client import generate_latest

from healthlens.config.settings import settings
from healthlens.utils.dependencies import get_flow_registry, verify_metrics_access

# This file defines public-facing endpoints that do not require
# authentication: service info, health checks and the /metrics endpoint,
# which is protected by an API key when one is configured.

SERVICE_NAME = "HealthLens Flow Service"
SERVICE_VERSION = "1.0.0"

router = APIRouter()


@router.get("/")
async def root(request: Request):
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "operational",
        "environment": settings.environment,
        "flows": get_flow_registry(request).names(),
    }


@router.get("/health", summary="Basic Health Check")
async def health_check():
    """Basic health check for load balancers."""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc)}


@router.get("/health/live", summary="Liveness Check")
async def liveness_check():
    """Kubernetes/Docker liveness check."""
    return {"status": "alive"}


@router.get("/metrics", tags=["Monitoring"])
async def metrics(_: bool = Depends(verify_metrics_access)):
    """Prometheus metrics endpoint."""
    return PlainTextResponse(generate_latest(), media_type="text/plain")
