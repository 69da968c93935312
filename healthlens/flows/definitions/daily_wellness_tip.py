# /healthlens/flows/definitions/daily_wellness_tip.py

"""
Daily wellness tips.

The tip is written in the requested language. When the model returns nothing
usable the entry point returns a fixed, general self-care tip instead of
raising.
"""

from typing import Any, Dict, Mapping

import structlog

from healthlens.config.strings import WELLNESS_TIP_FALLBACK
from healthlens.flows.errors import EmptyModelOutputError
from healthlens.flows.rules import fill_missing
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, integer, string
from healthlens.models.flow import FlowDefinition

log = structlog.get_logger(__name__)

DEFAULT_CATEGORY = "General Wellness"

WellnessTipInput = Contract(name="WellnessTipInput", fields={
    "userFocus": string("Focus area, e.g. 'hydration', 'better sleep'.", required=False, max_length=200),
    "language": string("Target language code, e.g. 'en', 'es', 'hi'.", required=False, min_length=2, max_length=10),
    "age": integer("User's age, for more tailored tips.", required=False, gt=0, le=120),
    "healthGoals": array(string(), "Health goals, e.g. 'increase energy'.", required=False),
})

WellnessTipOutput = Contract(name="WellnessTipOutput", fields={
    "wellnessTip": string("A concise, actionable wellness tip.", min_length=1),
    "category": string("Tip category, e.g. 'Hydration', 'Mindfulness', 'Sleep Hygiene'."),
})

TEMPLATE = PromptTemplate("""You are an AI Health and Wellness Coach. Give one concise, actionable and encouraging wellness tip for today.

{{#if userFocus}}Focus area: "{{userFocus}}"
{{/if}}{{#if age}}Age: {{age}}
{{/if}}{{#if healthGoals}}Health goals: {{#each healthGoals}}"{{this}}" {{/each}}
{{/if}}{{#if language}}Target language: "{{language}}". Write the whole response, including the category, in this language. Use English if you are unsure of the language.
{{/if}}
Instructions:
1. Write a practical 'wellnessTip' that is easy to act on today.
{{#if userFocus}}   Tailor it to the focus area.
{{else}}   Cover a general area such as hydration, movement, mindfulness, sleep or nutrition.
{{/if}}2. Make it relevant to the age and goals when given, without assumptions or medical advice.
3. Set a 'category' such as "Hydration", "Mindfulness", "Nutrition", "Physical Activity", "Sleep Hygiene", "Stress Management" or "General Wellness".
4. Keep the tone positive and avoid medical jargon.
""")

DAILY_WELLNESS_TIP_FLOW = FlowDefinition(
    name="daily_wellness_tip",
    description="A short, optionally localized wellness tip for the day.",
    input_contract=WellnessTipInput,
    output_contract=WellnessTipOutput,
    template=TEMPLATE,
    post_processing=(
        fill_missing("category", DEFAULT_CATEGORY),
    ),
    temperature=0.7,
)


async def generate_daily_wellness_tip(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    try:
        return await runner.run_or_raise(DAILY_WELLNESS_TIP_FLOW, request)
    except EmptyModelOutputError:
        log.warning("wellness_tip.fallback_used")
        return {"wellnessTip": WELLNESS_TIP_FALLBACK, "category": DEFAULT_CATEGORY}
