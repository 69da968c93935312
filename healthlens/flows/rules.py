# /healthlens/flows/rules.py

import copy
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Sequence

from healthlens.config.safety import DISCLAIMER_MARKERS

# Post-processing rules: named, pure functions of (validated input, validated
# output) that return a possibly-modified copy of the output. A flow applies its
# rules in the order they are declared.

logger = logging.getLogger(__name__)

RuleFunc = Callable[[Mapping[str, Any], Dict[str, Any]], Dict[str, Any]]


class PostProcessingRule:
    def __init__(self, name: str, func: RuleFunc):
        self.name = name
        self._func = func

    def __call__(self, request: Mapping[str, Any], output: Mapping[str, Any]) -> Dict[str, Any]:
        # Rules receive their own copy so the caller's output is never mutated.
        return self._func(request, copy.deepcopy(dict(output)))

    def __repr__(self) -> str:
        return f"PostProcessingRule({self.name!r})"


def contains_marker(text: Any, markers: Iterable[str]) -> bool:
    if not isinstance(text, str):
        return False
    lowered = text.lower()
    return any(marker.lower() in lowered for marker in markers)


def ensure_disclaimer(
    fields: Sequence[str],
    disclaimer: str,
    markers: Sequence[str] = tuple(DISCLAIMER_MARKERS),
    name: str | None = None,
) -> PostProcessingRule:
    """
    Guarantees that at least one of `fields` carries a disclaimer.

    If no listed field already contains one of `markers` (case-insensitive), the
    disclaimer is appended to the first non-empty field, or set on the first
    field when all are empty. The disclaimer must contain a marker itself, so
    applying the rule twice never duplicates it.
    """
    fields = list(fields)
    if not fields:
        raise ValueError("ensure_disclaimer needs at least one field")
    if not contains_marker(disclaimer, markers):
        raise ValueError("disclaimer text must contain one of the markers")

    def apply(request: Mapping[str, Any], output: Dict[str, Any]) -> Dict[str, Any]:
        if any(contains_marker(output.get(f), markers) for f in fields):
            return output
        for field_name in fields:
            current = output.get(field_name)
            if isinstance(current, str) and current.strip():
                output[field_name] = current + disclaimer
                return output
        output[fields[0]] = disclaimer.strip()
        return output

    return PostProcessingRule(name or f"ensure_disclaimer:{'|'.join(fields)}", apply)


def set_field(field_name: str, value: Any, name: str | None = None) -> PostProcessingRule:
    """Always overwrites `field_name` with a fixed value."""

    def apply(request: Mapping[str, Any], output: Dict[str, Any]) -> Dict[str, Any]:
        output[field_name] = copy.deepcopy(value)
        return output

    return PostProcessingRule(name or f"set_field:{field_name}", apply)


def fill_missing(field_name: str, value: Any, name: str | None = None) -> PostProcessingRule:
    """Sets `field_name` only when it is absent or empty."""

    def apply(request: Mapping[str, Any], output: Dict[str, Any]) -> Dict[str, Any]:
        current = output.get(field_name)
        if current is None or (isinstance(current, (str, list, dict)) and not current):
            output[field_name] = copy.deepcopy(value)
        return output

    return PostProcessingRule(name or f"fill_missing:{field_name}", apply)


def apply_rules(
    rules: Sequence[PostProcessingRule],
    request: Mapping[str, Any],
    output: Mapping[str, Any],
) -> Dict[str, Any]:
    """Runs `rules` in order and returns the final output."""
    result: Dict[str, Any] = dict(output)
    for rule in rules:
        result = rule(request, result)
        logger.debug(f"Applied post-processing rule {rule.name}")
    return result


def rule_names(rules: Sequence[PostProcessingRule]) -> List[str]:
    return [rule.name for rule in rules]
