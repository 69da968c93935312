# /healthlens/flows/definitions/symptom_timeline.py

# Plays back a dated symptom history as a narrative and a list of recurring
# patterns or possible triggers.

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, obj, string
from healthlens.models.flow import FlowDefinition

SymptomEntry = obj("SymptomEntry", {
    "date": string("Date of the entry, ISO format.", min_length=10, max_length=32),
    "symptoms": array(string(min_length=1), "Symptoms on this date.", min_items=1),
    "notes": string("Extra context for the entry.", required=False, max_length=2000),
})

TimelineInput = Contract(name="TimelineInput", fields={
    "userId": string("The user's ID.", min_length=1, max_length=128),
    "symptomEntries": array(SymptomEntry, "Symptom entries over time.", min_items=1, max_items=365),
})

TimelineOutput = Contract(name="TimelineOutput", fields={
    "timelineNarrative": string("How the symptoms evolved over time."),
    "keyPatterns": array(string(), "Recurring patterns, trends or possible triggers."),
})

TEMPLATE = PromptTemplate("""You are an AI assistant that summarizes medical records and identifies key patterns in symptom history.

Symptom entries for user {{userId}}:
{{#each symptomEntries}}- Date: {{date}}
  Symptoms: {{symptoms}}
{{#if notes}}  Notes: {{{notes}}}
{{/if}}{{/each}}
Write 'timelineNarrative', a concise account of how the symptoms evolved, and 'keyPatterns', the recurring patterns or potential triggers you see. Do not diagnose.
""")

SYMPTOM_TIMELINE_FLOW = FlowDefinition(
    name="symptom_timeline",
    description="Narrative playback of symptom history with key patterns.",
    input_contract=TimelineInput,
    output_contract=TimelineOutput,
    template=TEMPLATE,
    temperature=0.2,
)


async def generate_symptom_timeline(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(SYMPTOM_TIMELINE_FLOW, request)
