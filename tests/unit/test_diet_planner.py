# tests/unit/test_diet_planner.py
import json

import pytest

from healthlens.config.strings import DIET_PLAN_DISCLAIMER, EATING_DISORDER_SUPPORT
from healthlens.flows.definitions.diet_planner import DIET_PLANNER_FLOW, generate_diet_plan
from healthlens.flows.errors import InputValidationError
from healthlens.models.endpoint import ModelResponse


@pytest.mark.asyncio
async def test_one_day_plan_gets_a_consult_a_professional_disclaimer(runner, stub_client, diet_request, minimal_diet_plan):
    stub_client.queue_json(minimal_diet_plan)

    plan = await generate_diet_plan(runner, diet_request)

    assert len(plan["dailyPlans"]) == 1
    assert plan["overallDisclaimer"].startswith("Enjoy!")
    assert "healthcare professional or registered dietitian" in plan["overallDisclaimer"]
    assert stub_client.calls == 1


@pytest.mark.asyncio
async def test_prompt_includes_profile_and_unspecified_preferences(runner, stub_client, diet_request, minimal_diet_plan):
    stub_client.queue_json(minimal_diet_plan)

    await generate_diet_plan(runner, diet_request)

    prompt = stub_client.requests[0].prompt
    assert "Age: 30" in prompt
    assert "Weight: 70 kg" in prompt
    assert 'Health Goals: "general healthy eating"' in prompt
    assert "Diet Type: None specified" in prompt
    assert "Allergies: None specified" in prompt
    assert "Plan Duration: 1 day(s)" in prompt
    assert "Calorie Target: estimate" in prompt
    assert "Medical Conditions" not in prompt
    assert "dailyPlans (array of object, required)" in prompt


@pytest.mark.asyncio
async def test_plan_duration_defaults_to_one_day(runner, stub_client, diet_request, minimal_diet_plan):
    del diet_request["planDurationDays"]
    stub_client.queue_json(minimal_diet_plan)

    result = await runner.run(DIET_PLANNER_FLOW, diet_request)

    assert result.invocation.validated_request["planDurationDays"] == 1


@pytest.mark.asyncio
async def test_existing_disclaimer_is_not_duplicated(runner, stub_client, diet_request, minimal_diet_plan):
    minimal_diet_plan["overallDisclaimer"] = "Please consult a registered dietitian before changing your diet."
    stub_client.queue_json(minimal_diet_plan)

    plan = await generate_diet_plan(runner, diet_request)

    assert plan["overallDisclaimer"] == "Please consult a registered dietitian before changing your diet."


@pytest.mark.asyncio
async def test_negative_age_is_rejected_without_a_model_call(runner, stub_client, diet_request):
    diet_request["age"] = -1

    with pytest.raises(InputValidationError) as exc_info:
        await generate_diet_plan(runner, diet_request)

    assert [v.path for v in exc_info.value.violations] == ["age"]
    assert stub_client.calls == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("language", ["en", "es"])
async def test_eating_disorder_mention_returns_localized_guidance(runner, stub_client, diet_request, language):
    diet_request["healthGoals"] = ["Recovering from an Eating Disorder"]
    diet_request["language"] = language
    stub_client.queue(ModelResponse(text=json.dumps({"planTitle": "Should never be used"})))

    result = await runner.run(DIET_PLANNER_FLOW, diet_request)

    assert result.ok is True
    assert result.safety_override == "eating_disorder_support"
    assert stub_client.calls == 0
    assert result.value["planTitle"] == EATING_DISORDER_SUPPORT[language]["title"]
    assert result.value["overallDisclaimer"] == DIET_PLAN_DISCLAIMER


@pytest.mark.asyncio
async def test_eating_disorder_keyword_in_conditions_uses_english_for_unknown_language(runner, stub_client, diet_request):
    diet_request["medicalConditions"] = ["bulimia"]
    diet_request["language"] = "kn"

    plan = await generate_diet_plan(runner, diet_request)

    assert plan["planTitle"] == EATING_DISORDER_SUPPORT["en"]["title"]
    assert stub_client.calls == 0
