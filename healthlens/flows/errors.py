# /healthlens/flows/errors.py

from typing import List, Optional
from healthlens.models.contract import FieldViolation

# Error taxonomy for flow invocations. FlowError subclasses are terminal for a
# single invocation; configuration errors are raised while flows are
# registered and never reach a caller at request time.


class FlowError(Exception):
    code = "FLOW_ERROR"
    retryable = False

    def __init__(self, message: str, flow_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.flow_name = flow_name

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "flow": self.flow_name,
            "retryable": self.retryable,
        }


class InputValidationError(FlowError):
    """The request does not satisfy the flow's input contract. Caller-fixable."""
    code = "INPUT_VALIDATION_ERROR"

    def __init__(self, violations: List[FieldViolation], flow_name: Optional[str] = None):
        paths = ", ".join(v.path for v in violations)
        super().__init__(f"Invalid request fields: {paths}", flow_name)
        self.violations = violations

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["violations"] = [v.model_dump() for v in self.violations]
        return data


class ModelInvocationError(FlowError):
    """The model endpoint call failed (transport, status, timeout, envelope)."""
    code = "MODEL_INVOCATION_ERROR"
    retryable = True

    def __init__(self, message: str, cause: Optional[BaseException] = None, flow_name: Optional[str] = None):
        super().__init__(message, flow_name)
        self.cause = cause


class EmptyModelOutputError(FlowError):
    """The model endpoint answered but returned nothing usable."""
    code = "EMPTY_MODEL_OUTPUT"
    retryable = True


class OutputValidationError(FlowError):
    """The model output does not satisfy the flow's output contract."""
    code = "OUTPUT_VALIDATION_ERROR"

    def __init__(self, violations: List[FieldViolation], flow_name: Optional[str] = None, stage: str = "model_output"):
        paths = ", ".join(v.path for v in violations) or "<root>"
        super().__init__(f"Model output failed validation at: {paths}", flow_name)
        self.violations = violations
        self.stage = stage

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["violations"] = [v.model_dump() for v in self.violations]
        data["stage"] = self.stage
        return data


class FlowConfigurationError(Exception):
    """A flow definition is inconsistent. Raised at registration time."""


class TemplateResolutionError(FlowConfigurationError):
    """A prompt template cannot be parsed or references an unknown field."""


class FlowDefinitionError(FlowConfigurationError):
    """A flow definition is invalid (duplicate name, bad fallback, ...)."""
