# /healthlens/models/endpoint.py

from typing import List, Optional
from pydantic import BaseModel, Field

# Request/response envelopes exchanged with the model endpoint client.


class ModelRequest(BaseModel):
    prompt: str
    model: Optional[str] = Field(default=None, description="Model override; the client default is used when unset")
    response_mime_type: Optional[str] = Field(default=None, description="'application/json' for structured output")
    response_modalities: List[str] = Field(default_factory=list, description="e.g. ['TEXT', 'IMAGE']")
    temperature: Optional[float] = None
    idempotent: bool = True


class ModelResponse(BaseModel):
    text: Optional[str] = None
    media_url: Optional[str] = Field(default=None, description="Generated media as a data URI")
    media_mime_type: Optional[str] = None
    finish_reason: Optional[str] = None
    model: Optional[str] = None
