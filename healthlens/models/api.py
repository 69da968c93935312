# /healthlens/models/api.py

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

# This file contains Pydantic models that define the structure of API
# responses, so every endpoint answers with the same envelope.


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class APIResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=_utcnow)
    version: str


class FlowResponse(APIResponse):
    """Successful flow run. `safety_override` names the safety check that supplied the data, if any."""
    safety_override: Optional[str] = None


class FlowErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Dict[str, Any]
    retryable: bool = False
    timestamp: datetime = Field(default_factory=_utcnow)
    version: str


class FlowCatalogResponse(BaseModel):
    success: bool = True
    flows: List[Dict[str, Any]]
    version: str
