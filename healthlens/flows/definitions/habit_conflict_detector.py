# /healthlens/flows/definitions/habit_conflict_detector.py

# Looks for risky combinations in a described routine (e.g. fasting while
# training for a marathon), optionally in light of known health conditions.

from typing import Any, Dict, Mapping

from healthlens.config.strings import HABIT_CONFLICT_DISCLAIMER
from healthlens.flows.rules import ensure_disclaimer, fill_missing
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.flow import FlowDefinition

NO_SYNERGIES_NOTE = "No clear positive synergies noted without professional guidance."

HabitConflictInput = Contract(name="HabitConflictInput", fields={
    "habitsDescription": string(
        "The habits or routine to analyse, e.g. 'Intermittent fasting while training for a marathon'.",
        min_length=10,
        max_length=2000,
    ),
    "healthConditions": string("Known health conditions, e.g. 'hypertension'.", required=False, max_length=500),
})

HabitConflictOutput = Contract(name="HabitConflictOutput", fields={
    "conflictAnalysis": string("Potential conflicts, risks or contraindications, and why."),
    "positiveSynergies": string("Benefits of the combination, when it is generally safe.", required=False),
    "recommendations": string("Safer alternatives, modifications and things to monitor."),
    "youtubeSearchQuery": string("Short YouTube search query (max 5 words)."),
    "imageHintDiagram": string("1-3 word hint for a diagram, e.g. 'habit synergy chart'.", max_length=30),
})

TEMPLATE = PromptTemplate("""You are an AI Health Routine Analyst. Identify potential conflicts, risks or contraindications in the habits described below, especially in combination and in the context of any health conditions.

Habits or routine: "{{habitsDescription}}"
{{#if healthConditions}}Known health conditions: "{{healthConditions}}"
{{/if}}
Instructions:
1. Write a 'conflictAnalysis' covering negative interactions and risks such as nutrient deficiencies, overtraining or blood sugar swings.
2. If the combination is generally safe and has clear benefits, describe them in 'positiveSynergies'.
3. Give 'recommendations': safer alternatives, modifications, what to monitor and what to discuss with a healthcare professional or dietitian.
4. Give a 'youtubeSearchQuery' of at most 5 words.
5. Give an 'imageHintDiagram' of 1-3 words for a diagram comparing healthy and conflicting routines.
6. End the recommendations with a clear statement that this is not medical or nutritional advice.
""")

HABIT_CONFLICT_DETECTOR_FLOW = FlowDefinition(
    name="habit_conflict_detector",
    description="Detects conflicts and risks in a combination of health habits.",
    input_contract=HabitConflictInput,
    output_contract=HabitConflictOutput,
    template=TEMPLATE,
    post_processing=(
        fill_missing("positiveSynergies", NO_SYNERGIES_NOTE),
        ensure_disclaimer(["recommendations", "conflictAnalysis"], HABIT_CONFLICT_DISCLAIMER, name="habit_disclaimer"),
    ),
)


async def detect_habit_conflicts(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(HABIT_CONFLICT_DETECTOR_FLOW, request)
