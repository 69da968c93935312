# /healthlens/utils/dependencies.py

import secrets
import structlog
from fastapi import HTTPException, Request

from healthlens.config.settings import settings
from healthlens.flows.runner import FlowRunner
from healthlens.flows.catalog import flow_registry
from healthlens.flows.registry import FlowRegistry

log = structlog.get_logger(__name__)


def get_flow_runner(request: Request) -> FlowRunner:
    runner = getattr(request.app.state, "flow_runner", None)
    if runner is None:
        log.error("Flow runner requested before startup completed.")
        raise HTTPException(status_code=503, detail="Service is starting up")
    return runner


def get_flow_registry(request: Request) -> FlowRegistry:
    return getattr(request.app.state, "flow_registry", None) or flow_registry


async def verify_metrics_access(request: Request):
    if settings.api_key:
        provided_key = request.headers.get("X-API-KEY")
        if not (provided_key and secrets.compare_digest(provided_key, settings.api_key)):
            log.warning("Rejected metrics request with a missing or invalid API key.")
            raise HTTPException(status_code=403, detail="Invalid or missing API key")
