# /healthlens/flows/definitions/self_care_plan.py

# Short, app-based self-care plans for a condition or goal. Every step has to be
# doable with information, reminders or in-app tools alone.

from typing import Any, Dict, Mapping

from healthlens.config.strings import SELF_CARE_DISCLAIMER
from healthlens.flows.rules import set_field
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, obj, string
from healthlens.models.flow import FlowDefinition

SelfCarePlanInput = Contract(name="SelfCarePlanInput", fields={
    "userConditionOrGoal": string(
        "Condition (e.g. 'tension headache') or goal (e.g. 'improve sleep quality').",
        min_length=3,
        max_length=300,
    ),
    "relevantHabits": string("Habits or lifestyle factors relevant to the goal.", required=False, max_length=1000),
    "durationPreference": string("Preferred plan length, e.g. '1 week'.", required=False, max_length=100),
    "userName": string("User's name for personalization.", required=False, max_length=100),
})

SelfCarePlanOutput = Contract(name="SelfCarePlanOutput", fields={
    "planTitle": string("Encouraging, relevant plan title."),
    "planIntroduction": string("Short introduction, personalized when a name is given."),
    "planDurationSuggestion": string("How long to follow the plan, e.g. 'For the next 3 days'."),
    "steps": array(obj("PlanStep", {
        "stepTitle": string("Concise step title."),
        "stepDescription": string("What to do and how."),
        "frequencyOrTiming": string("e.g. 'Daily', 'Before bed'.", required=False),
    }), "3-5 simple, software-based steps.", min_items=1, max_items=7),
    "motivationalTip": string("A word of encouragement."),
    "disclaimer": string("Not-medical-advice disclaimer."),
})

TEMPLATE = PromptTemplate("""You are an AI assistant for a digital health platform. Create a simple, actionable self-care plan that needs no medical devices or sensors: everything must be doable with information, reminders or in-app tools such as journaling prompts or guided text.

Condition or goal: "{{userConditionOrGoal}}"
{{#if userName}}Name: {{userName}}
{{/if}}{{#if relevantHabits}}Relevant habits: "{{relevantHabits}}"
{{/if}}{{#if durationPreference}}Preferred duration: "{{durationPreference}}"{{else}}Default duration: 3-5 days.{{/if}}

Instructions:
1. Write an encouraging 'planTitle' and a 'planIntroduction'{{#if userName}} that greets {{userName}}{{/if}}.
2. Set 'planDurationSuggestion'{{#if durationPreference}} based on the preferred duration{{/if}}.
3. Give 3-5 'steps', each with 'stepTitle', 'stepDescription' and optionally 'frequencyOrTiming'. Prefer "Track your water intake in the app" over "Use a humidifier".
4. Add a 'motivationalTip'.
5. Add a 'disclaimer' saying the plan is not medical advice.
""")

SELF_CARE_PLAN_FLOW = FlowDefinition(
    name="self_care_plan",
    description="A short self-care plan for a condition or goal.",
    input_contract=SelfCarePlanInput,
    output_contract=SelfCarePlanOutput,
    template=TEMPLATE,
    post_processing=(
        set_field("disclaimer", SELF_CARE_DISCLAIMER, name="standard_disclaimer"),
    ),
)


async def generate_self_care_plan(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(SELF_CARE_PLAN_FLOW, request)
