# /healthlens/flows/definitions/multilingual_literacy_guide.py

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.flow import FlowDefinition

HealthTermInput = Contract(name="HealthTermInput", fields={
    "term": string("Medical term or health plan to explain.", min_length=2, max_length=1000),
    "language": string("Language for the explanation.", min_length=2, max_length=35),
    "culture": string("Cultural context to consider.", min_length=2, max_length=100),
    "educationLevel": string("Education level, e.g. elementary, high school, college.", min_length=2, max_length=50),
})

HealthTermOutput = Contract(name="HealthTermOutput", fields={
    "explanation": string("Plain-language explanation of the term or plan.", min_length=1),
})

TEMPLATE = PromptTemplate("""You are a multilingual health literacy guide. You explain health terms and plans in culturally appropriate, easy-to-understand language.

Term or plan: {{{term}}}
Language: {{language}}
Culture: {{culture}}
Education level: {{educationLevel}}

Explain the term or plan in the given language at the given education level. Avoid jargon, and take cultural nuances and sensitivities into account.
""")

MULTILINGUAL_LITERACY_GUIDE_FLOW = FlowDefinition(
    name="multilingual_literacy_guide",
    description="Explains health terms and plans by language, culture and education level.",
    input_contract=HealthTermInput,
    output_contract=HealthTermOutput,
    template=TEMPLATE,
    temperature=0.3,
)


async def explain_health_term(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(MULTILINGUAL_LITERACY_GUIDE_FLOW, request)
