# /healthlens/flows/definitions/cultural_health_companion.py

# Explains a medical concept, symptom, self-care practice or piece of
# medication guidance in the user's language, with their cultural context in
# mind.

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.flow import FlowDefinition

HealthConceptInput = Contract(name="HealthConceptInput", fields={
    "concept": string("Concept, symptom, self-care practice or medication guidance to explain.", min_length=2, max_length=1000),
    "language": string("Target language, e.g. en, es, fr.", min_length=2, max_length=35),
    "culture": string("Cultural context, e.g. Mexican, Indian.", min_length=2, max_length=100),
    "educationLevel": string("When given, the explanation uses simpler terms.", required=False, max_length=50),
})

HealthConceptOutput = Contract(name="HealthConceptOutput", fields={
    "explanation": string("One culturally sensitive paragraph in the target language.", min_length=1),
})

TEMPLATE = PromptTemplate("""You are a multilingual and multicultural health expert. Explain health concepts so they are easy to understand and culturally sensitive.

Concept: {{concept}}
Language: {{language}}
Cultural context: {{culture}}
{{#if educationLevel}}Education level: {{educationLevel}}
{{/if}}
Write the explanation in the requested language as a single paragraph. Use simple terms for readers with limited medical knowledge, and respect cultural practices without endorsing anything unsafe.
""")

CULTURAL_HEALTH_COMPANION_FLOW = FlowDefinition(
    name="cultural_health_companion",
    description="Culturally sensitive health explanations in the user's language.",
    input_contract=HealthConceptInput,
    output_contract=HealthConceptOutput,
    template=TEMPLATE,
)


async def explain_health_concept(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(CULTURAL_HEALTH_COMPANION_FLOW, request)
