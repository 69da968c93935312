# /healthlens/flows/definitions/digital_therapeutics_recommender.py

# Recommends one short, self-contained exercise (breathing, grounding,
# relaxation or a brief cognitive prompt) for a stated need. Crisis language
# gets crisis-line steps instead of an exercise.

from typing import Any, Dict, Mapping

from healthlens.config.safety import MENTAL_HEALTH_CRISIS_PHRASES
from healthlens.config.strings import CRISIS_SUPPORT_STEPS, MENTAL_HEALTH_CRISIS_RESPONSE
from healthlens.flows.safety import SafetyCheck, SafetyMode
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, string
from healthlens.models.flow import FlowDefinition

TherapyInput = Contract(name="TherapyInput", fields={
    "userNeed": string("Main concern or goal, e.g. 'anxiety', 'help with sleep'.", min_length=2, max_length=500),
    "recentSymptoms": string("Recent symptoms, e.g. 'racing thoughts'.", required=False, max_length=1000),
    "userPreferences": string("Preferred kind of exercise, e.g. 'something quick'.", required=False, max_length=500),
})

TherapyOutput = Contract(name="TherapyOutput", fields={
    "recommendedTherapyName": string("Name of the exercise, e.g. 'Box Breathing'."),
    "description": string("What the exercise is and why it helps with the stated need."),
    "initialGuidance": array(string(), "Clear step-by-step instructions to begin.", min_items=1, max_items=8),
    "estimatedDuration": string("e.g. 'About 3-5 minutes'.", required=False),
})

TEMPLATE = PromptTemplate("""You are an AI assistant for a digital health platform. Recommend one simple, software-based therapeutic exercise for the user's need. Nothing may require external tools, objects beyond a chair, or complex movement.

User's primary need: "{{userNeed}}"
{{#if recentSymptoms}}Recent symptoms: "{{recentSymptoms}}"
{{/if}}{{#if userPreferences}}Preferences: "{{userPreferences}}"
{{/if}}
1. Choose an exercise from one of these categories:
   - Breathing (Box Breathing, 4-7-8 Breathing, Diaphragmatic Breathing)
   - Mindfulness and grounding (5-4-3-2-1 Grounding, Mindful Observation, a one-area Body Scan)
   - Simple relaxation (visualizing a calm place, Progressive Muscle Relaxation for hands and shoulders)
   - Brief cognitive prompts ("What is one piece of evidence against this thought?")
2. Give its 'recommendedTherapyName' and a 'description' of why it helps with "{{userNeed}}".
3. Give 'initialGuidance' as 3-5 clear steps that can be done sitting or standing in place.
4. Optionally give an 'estimatedDuration'.

Do not suggest apps, websites or other external resources. If the need is vague, pick a general stress-reduction or mindfulness technique.
""")

CRISIS_CHECK = SafetyCheck(
    name="mental_health_crisis",
    keywords=MENTAL_HEALTH_CRISIS_PHRASES,
    fields=["userNeed", "recentSymptoms"],
    fallback={
        "recommendedTherapyName": "Reach out for support now",
        "description": MENTAL_HEALTH_CRISIS_RESPONSE,
        "initialGuidance": CRISIS_SUPPORT_STEPS,
    },
    mode=SafetyMode.PREEMPT,
)

DIGITAL_THERAPEUTICS_RECOMMENDER_FLOW = FlowDefinition(
    name="digital_therapeutics_recommender",
    description="Recommends a short breathing, grounding or relaxation exercise.",
    input_contract=TherapyInput,
    output_contract=TherapyOutput,
    template=TEMPLATE,
    safety_checks=(CRISIS_CHECK,),
)


async def recommend_therapy(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(DIGITAL_THERAPEUTICS_RECOMMENDER_FLOW, request)
