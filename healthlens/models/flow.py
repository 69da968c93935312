# /healthlens/models/flow.py

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from healthlens.models.contract import Contract
from healthlens.models.endpoint import ModelResponse
from healthlens.flows.errors import FlowError
from healthlens.flows.rules import PostProcessingRule
from healthlens.flows.safety import SafetyCheck
from healthlens.flows.template import PromptTemplate


class OutputMode(str, Enum):
    JSON = "json"    # the model answers with JSON matching the output contract
    MEDIA = "media"  # the model answers with generated media; `media_mapper` builds the output


class FlowDefinition(BaseModel):
    """
    A named unit binding an input contract, an output contract and a prompt
    template, plus the safety checks and post-processing rules applied around
    the model call. Definitions are static and shared between invocations.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str = ""
    input_contract: Contract
    output_contract: Contract
    template: PromptTemplate
    safety_checks: Tuple[SafetyCheck, ...] = ()
    post_processing: Tuple[PostProcessingRule, ...] = ()
    output_mode: OutputMode = OutputMode.JSON
    media_mapper: Optional[Callable[[Dict[str, Any], ModelResponse], Dict[str, Any]]] = None
    model: Optional[str] = Field(default=None, description="Model override for this flow")
    temperature: Optional[float] = None
    response_modalities: Tuple[str, ...] = ()
    idempotent: bool = True


class FlowInvocation(BaseModel):
    """
    Transient per-call record. Created when a call starts and dropped when it
    returns; it is never persisted.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    flow_name: str
    raw_request: Dict[str, Any]
    validated_request: Optional[Dict[str, Any]] = None
    rendered_prompt: Optional[str] = None
    raw_response: Optional[ModelResponse] = None
    validated_output: Optional[Dict[str, Any]] = None
    final_output: Optional[Dict[str, Any]] = None
    applied_rules: List[str] = Field(default_factory=list)
    safety_check: Optional[str] = None
    model_calls: int = 0


class FlowResult(BaseModel):
    """Outcome of a flow invocation: either `value` or `error` is set."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    ok: bool
    value: Optional[Dict[str, Any]] = None
    error: Optional[FlowError] = None
    safety_override: Optional[str] = None
    invocation: Optional[FlowInvocation] = None

    @classmethod
    def success(cls, value: Dict[str, Any], invocation: FlowInvocation) -> "FlowResult":
        return cls(ok=True, value=value, safety_override=invocation.safety_check, invocation=invocation)

    @classmethod
    def failure(cls, error: FlowError, invocation: FlowInvocation) -> "FlowResult":
        return cls(ok=False, error=error, invocation=invocation)

    def unwrap(self) -> Dict[str, Any]:
        """Return the value or raise the error."""
        if not self.ok:
            raise self.error
        return self.value
