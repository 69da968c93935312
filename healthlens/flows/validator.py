# /healthlens/flows/validator.py

"""
Pure validation functions for flow contracts.

This module checks untyped request/response mappings against a Contract and
produces a cleaned value plus a list of field-level violations.

All functions are:
- Pure (no side effects, inputs are never mutated)
- Deterministic (same input = same output)
- No AI calls
- No logging

Semantics:
- Required fields must be present. Optional fields may be absent; an optional
  field set to None is treated as absent unless the field is nullable.
- Optional fields with a default receive a copy of the default when absent.
- Unknown keys are dropped from the cleaned value.
- Booleans are never accepted as numbers. Integral floats (e.g. 30.0) are
  accepted for integer fields and converted to int.
"""

import copy
import math
from typing import Any, Dict, List, Mapping, Tuple, TypedDict
from healthlens.models.contract import Contract, FieldSpec, FieldType, FieldViolation


class ValidationResult(TypedDict):
    """Result of validating a mapping against a contract."""
    is_valid: bool
    value: Dict[str, Any]
    violations: List[FieldViolation]


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _violation(path: str, code: str, message: str) -> FieldViolation:
    return FieldViolation(path=path or "<root>", code=code, message=message)


def validate_contract(contract: Contract, data: Any, path: str = "") -> ValidationResult:
    """
    Validate a mapping against a contract.

    Args:
        contract: The contract to check against
        data: The untyped value, normally a dict decoded from JSON
        path: Prefix for violation paths when validating a nested object

    Returns:
        ValidationResult with the cleaned value when valid
    """
    if not isinstance(data, Mapping):
        return {
            "is_valid": False,
            "value": {},
            "violations": [_violation(path, "NOT_AN_OBJECT", f"Expected an object for '{contract.name}'")],
        }

    cleaned: Dict[str, Any] = {}
    violations: List[FieldViolation] = []

    for name, spec in contract.fields.items():
        field_path = _join(path, name)
        present = name in data and not (data[name] is None and not spec.nullable and not spec.required)

        if not present:
            if spec.has_default:
                cleaned[name] = copy.deepcopy(spec.default)
            elif spec.required:
                violations.append(_violation(field_path, "MISSING_FIELD", f"Field '{field_path}' is required"))
            continue

        value, field_violations = validate_field(spec, data[name], field_path)
        if field_violations:
            violations.extend(field_violations)
        else:
            cleaned[name] = value

    return {
        "is_valid": not violations,
        "value": cleaned if not violations else {},
        "violations": violations,
    }


def validate_field(spec: FieldSpec, value: Any, path: str) -> Tuple[Any, List[FieldViolation]]:
    """Validate a single value against a field spec. Returns (cleaned_value, violations)."""
    if value is None:
        if spec.nullable:
            return None, []
        return None, [_violation(path, "NULL_NOT_ALLOWED", f"Field '{path}' cannot be null")]

    if spec.type == FieldType.STRING:
        return _validate_string(spec, value, path)
    if spec.type in (FieldType.NUMBER, FieldType.INTEGER):
        return _validate_number(spec, value, path)
    if spec.type == FieldType.BOOLEAN:
        if not isinstance(value, bool):
            return None, [_violation(path, "WRONG_TYPE", f"Field '{path}' must be a boolean")]
        return value, []
    if spec.type == FieldType.ENUM:
        if not isinstance(value, str) or value not in spec.choices:
            return None, [_violation(
                path, "NOT_IN_CHOICES",
                f"Field '{path}' must be one of: {', '.join(spec.choices)}"
            )]
        return value, []
    if spec.type == FieldType.ARRAY:
        return _validate_array(spec, value, path)
    if spec.type == FieldType.OBJECT:
        result = validate_contract(spec.fields, value, path)
        return result["value"], result["violations"]

    return None, [_violation(path, "UNKNOWN_TYPE", f"Field '{path}' has unsupported type {spec.type}")]


def _validate_string(spec: FieldSpec, value: Any, path: str) -> Tuple[Any, List[FieldViolation]]:
    if not isinstance(value, str):
        return None, [_violation(path, "WRONG_TYPE", f"Field '{path}' must be a string")]
    if spec.min_length is not None and len(value) < spec.min_length:
        return None, [_violation(
            path, "TOO_SHORT", f"Field '{path}' must be at least {spec.min_length} characters"
        )]
    if spec.max_length is not None and len(value) > spec.max_length:
        return None, [_violation(
            path, "TOO_LONG", f"Field '{path}' must be at most {spec.max_length} characters"
        )]
    return value, []


def _validate_number(spec: FieldSpec, value: Any, path: str) -> Tuple[Any, List[FieldViolation]]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None, [_violation(path, "WRONG_TYPE", f"Field '{path}' must be a {spec.type.value}")]
    if isinstance(value, float) and not math.isfinite(value):
        return None, [_violation(path, "WRONG_TYPE", f"Field '{path}' must be a finite number")]

    if spec.type == FieldType.INTEGER:
        if isinstance(value, float):
            if not value.is_integer():
                return None, [_violation(path, "WRONG_TYPE", f"Field '{path}' must be an integer")]
            value = int(value)

    if spec.gt is not None and not value > spec.gt:
        return None, [_violation(path, "BELOW_MINIMUM", f"Field '{path}' must be greater than {spec.gt:g}")]
    if spec.ge is not None and not value >= spec.ge:
        return None, [_violation(path, "BELOW_MINIMUM", f"Field '{path}' must be at least {spec.ge:g}")]
    if spec.lt is not None and not value < spec.lt:
        return None, [_violation(path, "ABOVE_MAXIMUM", f"Field '{path}' must be less than {spec.lt:g}")]
    if spec.le is not None and not value <= spec.le:
        return None, [_violation(path, "ABOVE_MAXIMUM", f"Field '{path}' must be at most {spec.le:g}")]
    return value, []


def _validate_array(spec: FieldSpec, value: Any, path: str) -> Tuple[Any, List[FieldViolation]]:
    if not isinstance(value, (list, tuple)):
        return None, [_violation(path, "WRONG_TYPE", f"Field '{path}' must be an array")]
    if spec.min_items is not None and len(value) < spec.min_items:
        return None, [_violation(
            path, "TOO_FEW_ITEMS", f"Field '{path}' needs at least {spec.min_items} item(s)"
        )]
    if spec.max_items is not None and len(value) > spec.max_items:
        return None, [_violation(
            path, "TOO_MANY_ITEMS", f"Field '{path}' allows at most {spec.max_items} item(s)"
        )]

    cleaned = []
    violations: List[FieldViolation] = []
    for index, element in enumerate(value):
        item_value, item_violations = validate_field(spec.item, element, f"{path}[{index}]")
        violations.extend(item_violations)
        cleaned.append(item_value)
    if violations:
        return None, violations
    return cleaned, []
