# /healthlens/routes/flows.py

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from healthlens.config.settings import settings
from healthlens.flows.errors import FlowError, InputValidationError
from healthlens.flows.registry import FlowRegistry
from healthlens.flows.runner import FlowRunner
from healthlens.models.api import FlowCatalogResponse, FlowErrorResponse, FlowResponse
from healthlens.utils.dependencies import get_flow_registry, get_flow_runner

# This file exposes every registered flow over HTTP: a catalog listing with
# contract documentation, and one POST endpoint per flow name.

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/flows",
    tags=["Flows"],
)


def error_status(error: FlowError) -> int:
    """HTTP status for a flow failure: 422 for caller errors, 502 for upstream ones."""
    if isinstance(error, InputValidationError):
        return 422
    return 502


def error_response(error: FlowError) -> JSONResponse:
    body = FlowErrorResponse(
        message=error.message,
        error=error.to_dict(),
        retryable=error.retryable,
        version=settings.api_version,
    )
    return JSONResponse(status_code=error_status(error), content=body.model_dump(mode="json"))


@router.get("", response_model=FlowCatalogResponse)
async def list_flows(registry: FlowRegistry = Depends(get_flow_registry)):
    """Lists the available flows with their input and output contracts."""
    return FlowCatalogResponse(flows=registry.describe(), version=settings.api_version)


@router.post("/{flow_name}", response_model=FlowResponse, responses={422: {"model": FlowErrorResponse}, 502: {"model": FlowErrorResponse}})
async def run_flow(
    flow_name: str,
    payload: Dict[str, Any] = Body(default={}),
    runner: FlowRunner = Depends(get_flow_runner),
    registry: FlowRegistry = Depends(get_flow_registry),
):
    """Runs one flow with the JSON body as its request."""
    if flow_name not in registry:
        raise HTTPException(status_code=404, detail=f"Unknown flow '{flow_name}'")

    result = await runner.run(registry.get(flow_name), payload)
    if not result.ok:
        return error_response(result.error)

    return FlowResponse(
        success=True,
        message="Flow completed",
        data=result.value,
        safety_override=result.safety_override,
        version=settings.api_version,
    )
