# tests/unit/test_registry.py
import pytest

from healthlens.flows.catalog import ALL_FLOWS, build_registry, flow_registry
from healthlens.flows.errors import FlowDefinitionError, TemplateResolutionError
from healthlens.flows.registry import FlowRegistry, check_definition
from healthlens.flows.safety import SafetyCheck
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.flow import FlowDefinition, OutputMode

BASE = FlowDefinition(
    name="base",
    input_contract=Contract(name="In", fields={"message": string()}),
    output_contract=Contract(name="Out", fields={"response": string()}),
    template=PromptTemplate("{{message}}"),
)


def test_catalog_registers_every_flow():
    assert flow_registry.names() == sorted([
        "behavioral_health_nudging",
        "body_part_info",
        "care_coordination_hub",
        "cognitive_health_tracker",
        "conversational_health_coach",
        "cultural_health_companion",
        "daily_wellness_tip",
        "diet_planner",
        "digital_detox_guidance",
        "digital_therapeutics_recommender",
        "generate_image",
        "habit_conflict_detector",
        "health_literacy_coach",
        "health_myth_buster",
        "health_question_formulator",
        "mental_health_check_in",
        "mood_language_monitor",
        "multilingual_literacy_guide",
        "secure_emergency_info",
        "self_care_plan",
        "symptom_journal_synthesizer",
        "symptom_timeline",
        "virtual_nursing_assistant",
    ])
    assert len(flow_registry) == len(ALL_FLOWS)


def test_registry_rejects_duplicates():
    registry = build_registry()
    with pytest.raises(FlowDefinitionError):
        registry.register(ALL_FLOWS[0])


def test_unknown_flow_raises_key_error():
    with pytest.raises(KeyError):
        flow_registry.get("does_not_exist")
    assert "does_not_exist" not in flow_registry
    assert "diet_planner" in flow_registry


def test_template_with_unknown_field_fails_at_registration():
    broken = BASE.model_copy(update={"template": PromptTemplate("{{message}} {{missing}}")})
    with pytest.raises(TemplateResolutionError, match="base"):
        FlowRegistry().register(broken)


def test_fallback_must_satisfy_the_output_contract():
    check = SafetyCheck(name="bad", keywords=["x"], fields=["message"], fallback={"wrong": "shape"})
    with pytest.raises(FlowDefinitionError, match="response"):
        check_definition(BASE.model_copy(update={"safety_checks": (check,)}))


def test_safety_check_fields_must_exist_in_the_input_contract():
    check = SafetyCheck(name="bad", keywords=["x"], fields=["nope"], fallback={"response": "ok"})
    with pytest.raises(FlowDefinitionError):
        check_definition(BASE.model_copy(update={"safety_checks": (check,)}))


def test_media_flow_needs_a_mapper():
    with pytest.raises(FlowDefinitionError):
        check_definition(BASE.model_copy(update={"output_mode": OutputMode.MEDIA}))


def test_describe_documents_contracts_and_rules():
    entries = {entry["name"]: entry for entry in flow_registry.describe()}
    diet = entries["diet_planner"]
    assert diet["output_mode"] == "json"
    assert "age" in diet["input"]["fields"]
    assert diet["safety_checks"] == ["eating_disorder_support"]
    assert diet["post_processing"] == ["diet_disclaimer"]
    assert entries["generate_image"]["output_mode"] == "media"
