# /healthlens/flows/runner.py

"""
Typed flow execution.

FlowRunner.run executes one flow end-to-end:
1. Validates the raw request against the input contract (no model call on failure)
2. Evaluates preempting safety checks; a match returns the check's fallback as written
3. Renders the prompt template from the validated request
4. Calls the model endpoint (bounded by the client's timeout)
5. Parses and validates the model output against the output contract
6. Applies overriding safety checks (fallback returned as written), otherwise
   the post-processing rules in order
7. Re-validates the final output and returns it

The runner holds no mutable state; one instance serves concurrent requests.
It never retries: retry policy belongs to the caller (or to the client for
idempotent requests).
"""

import json
import time
from typing import Any, Dict, Mapping, Optional

import structlog

from healthlens.flows.errors import (
    EmptyModelOutputError,
    FlowError,
    InputValidationError,
    ModelInvocationError,
    OutputValidationError,
)
from healthlens.flows.rules import apply_rules, rule_names
from healthlens.flows.safety import SafetyMode
from healthlens.flows.validator import validate_contract
from healthlens.models.contract import FieldViolation
from healthlens.models.endpoint import ModelRequest, ModelResponse
from healthlens.models.flow import FlowDefinition, FlowInvocation, FlowResult, OutputMode
from healthlens.services.model_client import ModelEndpoint
from healthlens.utils.metrics import flow_duration_histogram, flow_invocations_counter

log = structlog.get_logger(__name__)

JSON_MIME_TYPE = "application/json"


def build_prompt(definition: FlowDefinition, request: Mapping[str, Any]) -> str:
    """Renders the flow template and, for JSON flows, appends the output-format hint."""
    prompt = definition.template.render(request, definition.input_contract)
    if definition.output_mode == OutputMode.JSON:
        outline = "\n".join(definition.output_contract.outline())
        prompt = (
            f"{prompt.rstrip()}\n\n"
            f"Respond with a single JSON object with these fields:\n{outline}\n"
        )
    return prompt


def parse_json_payload(text: str) -> Any:
    """
    Decodes the model's JSON text. Tolerates a surrounding markdown code fence,
    which some models add even in JSON mode.
    """
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return json.loads(stripped)


class FlowRunner:
    def __init__(self, client: ModelEndpoint):
        self.client = client

    async def run(self, definition: FlowDefinition, raw_request: Optional[Mapping[str, Any]]) -> FlowResult:
        """Execute one flow. Errors are returned in the FlowResult, never raised."""
        raw = dict(raw_request) if isinstance(raw_request, Mapping) else {}
        invocation = FlowInvocation(flow_name=definition.name, raw_request=raw)
        started = time.perf_counter()
        try:
            value = await self._execute(definition, raw_request, invocation)
        except FlowError as e:
            e.flow_name = definition.name
            self._log_failure(definition, e)
            flow_invocations_counter.labels(flow=definition.name, outcome=e.code.lower()).inc()
            return FlowResult.failure(e, invocation)
        finally:
            flow_duration_histogram.labels(flow=definition.name).observe(time.perf_counter() - started)

        outcome = "safety_override" if invocation.safety_check else "ok"
        flow_invocations_counter.labels(flow=definition.name, outcome=outcome).inc()
        log.info(
            "flow.completed",
            flow=definition.name,
            safety_override=invocation.safety_check,
            rules=invocation.applied_rules,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return FlowResult.success(value, invocation)

    async def run_or_raise(self, definition: FlowDefinition, raw_request: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Execute one flow and return its output, raising the FlowError on failure."""
        result = await self.run(definition, raw_request)
        return result.unwrap()

    async def _execute(self, definition: FlowDefinition, raw_request: Any, invocation: FlowInvocation) -> Dict[str, Any]:
        # 1. Input contract
        checked = validate_contract(definition.input_contract, raw_request)
        if not checked["is_valid"]:
            raise InputValidationError(checked["violations"], definition.name)
        request = checked["value"]
        invocation.validated_request = request

        # 2. Preempting safety checks
        for check in definition.safety_checks:
            if check.mode == SafetyMode.PREEMPT and check.matches(request):
                invocation.safety_check = check.name
                log.warning("flow.safety_override", flow=definition.name, check=check.name, mode=check.mode.value)
                return self._finish(definition, request, check.fallback_for(request), invocation)

        # 3. Prompt
        prompt = build_prompt(definition, request)
        invocation.rendered_prompt = prompt

        # 4. Model call
        model_request = ModelRequest(
            prompt=prompt,
            model=definition.model,
            response_mime_type=JSON_MIME_TYPE if definition.output_mode == OutputMode.JSON else None,
            response_modalities=list(definition.response_modalities),
            temperature=definition.temperature,
            idempotent=definition.idempotent,
        )
        invocation.model_calls += 1
        try:
            response = await self.client.generate(model_request)
        except ModelInvocationError:
            raise
        except Exception as e:
            raise ModelInvocationError(f"Model call failed: {e}", cause=e) from e
        if not isinstance(response, ModelResponse):
            raise ModelInvocationError("Model endpoint returned a malformed envelope")
        invocation.raw_response = response

        # 5. Output contract
        payload = self._extract_payload(definition, request, response)
        checked = validate_contract(definition.output_contract, payload)
        if not checked["is_valid"]:
            raise OutputValidationError(checked["violations"], definition.name)
        output = checked["value"]
        invocation.validated_output = output

        # 6. Overriding safety checks
        for check in definition.safety_checks:
            if check.mode == SafetyMode.OVERRIDE and check.matches(request):
                invocation.safety_check = check.name
                log.warning("flow.safety_override", flow=definition.name, check=check.name, mode=check.mode.value)
                output = check.fallback_for(request)
                break

        return self._finish(definition, request, output, invocation)

    def _extract_payload(self, definition: FlowDefinition, request: Dict[str, Any], response: ModelResponse) -> Any:
        if definition.output_mode == OutputMode.MEDIA:
            if not response.media_url:
                raise EmptyModelOutputError("Model response did not include the requested media", definition.name)
            return definition.media_mapper(request, response)

        if not response.text or not response.text.strip():
            raise EmptyModelOutputError("Model response was empty", definition.name)
        try:
            return parse_json_payload(response.text)
        except ValueError:
            raise OutputValidationError(
                [FieldViolation(path="<root>", code="INVALID_JSON", message="Model output is not valid JSON")],
                definition.name,
            )

    def _finish(self, definition: FlowDefinition, request: Dict[str, Any], output: Dict[str, Any], invocation: FlowInvocation) -> Dict[str, Any]:
        # 7. Post-processing, then make sure no rule broke the contract.
        # Safety fallbacks are fixed texts and skip the rules.
        if invocation.safety_check:
            processed = dict(output)
        else:
            processed = apply_rules(definition.post_processing, request, output)
            invocation.applied_rules = rule_names(definition.post_processing)
        checked = validate_contract(definition.output_contract, processed)
        if not checked["is_valid"]:
            raise OutputValidationError(checked["violations"], definition.name, stage="post_processing")
        invocation.final_output = checked["value"]
        return checked["value"]

    def _log_failure(self, definition: FlowDefinition, error: FlowError) -> None:
        if isinstance(error, InputValidationError):
            log.info("flow.input_invalid", flow=definition.name, fields=[v.path for v in error.violations])
        elif isinstance(error, OutputValidationError):
            # Distinct event: the model or the contract has drifted.
            log.error(
                "flow.output_drift",
                flow=definition.name,
                stage=error.stage,
                fields=[v.path for v in error.violations],
                codes=[v.code for v in error.violations],
            )
        elif isinstance(error, EmptyModelOutputError):
            log.warning("flow.model_empty", flow=definition.name, detail=error.message)
        else:
            log.error("flow.model_failed", flow=definition.name, detail=error.message)
