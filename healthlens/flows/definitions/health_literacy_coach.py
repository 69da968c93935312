# /healthlens/flows/definitions/health_literacy_coach.py

# Explains a medical term, diagnosis or prescription in plain language pitched
# at the reader's education level.

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, enum, string
from healthlens.models.flow import FlowDefinition

EDUCATION_LEVELS = ["elementary", "high school", "college", "graduate"]

ExplainTermInput = Contract(name="ExplainTermInput", fields={
    "term": string("The medical term, diagnosis or prescription to explain.", min_length=2, max_length=200),
    "context": string("Where the term came up, e.g. 'on my blood test report'.", min_length=1, max_length=2000),
    "educationLevel": enum(EDUCATION_LEVELS, "The reader's education level."),
})

ExplainTermOutput = Contract(name="ExplainTermOutput", fields={
    "explanation": string("Plain-language explanation of the term.", min_length=1),
})

TEMPLATE = PromptTemplate("""You are a helpful AI assistant that explains medical terms in plain language.

Education level: {{educationLevel}}
Medical term: {{{term}}}
Context: {{{context}}}

Explain the term in plain language suited to the education level and the context. Avoid jargon, or define it when unavoidable. Do not give a diagnosis or change any treatment.
""")

HEALTH_LITERACY_COACH_FLOW = FlowDefinition(
    name="health_literacy_coach",
    description="Plain-language explanations of medical terms.",
    input_contract=ExplainTermInput,
    output_contract=ExplainTermOutput,
    template=TEMPLATE,
    temperature=0.3,
)


async def explain_medical_term(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(HEALTH_LITERACY_COACH_FLOW, request)
