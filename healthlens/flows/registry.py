# /healthlens/flows/registry.py

import logging
from typing import Any, Dict, List

from healthlens.flows.errors import FlowDefinitionError, TemplateResolutionError
from healthlens.flows.validator import validate_contract
from healthlens.models.flow import FlowDefinition, OutputMode

# The registry holds every flow definition the service exposes. Registration
# runs the static checks once, so a broken template or fallback fails at
# startup instead of on a user's request.

logger = logging.getLogger(__name__)


def check_definition(definition: FlowDefinition) -> None:
    """
    Static checks over a flow definition.

    Raises:
        TemplateResolutionError: the template references a field the input contract lacks
        FlowDefinitionError: any other inconsistency
    """
    try:
        definition.template.check_against(definition.input_contract)
    except TemplateResolutionError as e:
        raise TemplateResolutionError(f"Flow '{definition.name}': {e}") from e

    if definition.output_mode == OutputMode.MEDIA and definition.media_mapper is None:
        raise FlowDefinitionError(f"Flow '{definition.name}' uses media output but has no media_mapper")

    for check in definition.safety_checks:
        unknown = [f for f in check.fields if f not in definition.input_contract.fields]
        if unknown:
            raise FlowDefinitionError(
                f"Safety check '{check.name}' of flow '{definition.name}' watches unknown fields: {unknown}"
            )
        if check.language_field and check.language_field not in definition.input_contract.fields:
            raise FlowDefinitionError(
                f"Safety check '{check.name}' of flow '{definition.name}' uses unknown language field "
                f"'{check.language_field}'"
            )
        for fallback in check.all_fallbacks():
            result = validate_contract(definition.output_contract, fallback)
            if not result["is_valid"]:
                paths = ", ".join(v.path for v in result["violations"])
                raise FlowDefinitionError(
                    f"Fallback of safety check '{check.name}' in flow '{definition.name}' "
                    f"violates the output contract at: {paths}"
                )


class FlowRegistry:
    def __init__(self):
        self._flows: Dict[str, FlowDefinition] = {}

    def register(self, definition: FlowDefinition) -> FlowDefinition:
        if definition.name in self._flows:
            raise FlowDefinitionError(f"Flow '{definition.name}' is already registered")
        check_definition(definition)
        self._flows[definition.name] = definition
        logger.debug(f"Registered flow {definition.name}")
        return definition

    def get(self, name: str) -> FlowDefinition:
        try:
            return self._flows[name]
        except KeyError:
            raise KeyError(f"Unknown flow '{name}'") from None

    def __contains__(self, name: str) -> bool:
        return name in self._flows

    def __len__(self) -> int:
        return len(self._flows)

    def names(self) -> List[str]:
        return sorted(self._flows)

    def describe(self) -> List[Dict[str, Any]]:
        """Catalog entries with contract documentation, for the API."""
        entries = []
        for name in self.names():
            definition = self._flows[name]
            entries.append({
                "name": name,
                "description": definition.description,
                "output_mode": definition.output_mode.value,
                "input": definition.input_contract.describe(),
                "output": definition.output_contract.describe(),
                "safety_checks": [check.name for check in definition.safety_checks],
                "post_processing": [rule.name for rule in definition.post_processing],
            })
        return entries
