# /healthlens/flows/definitions/health_question_formulator.py

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, string
from healthlens.models.flow import FlowDefinition

QuestionFormulatorInput = Contract(name="QuestionFormulatorInput", fields={
    "condition": string("The user's current health condition.", min_length=2, max_length=500),
    "symptoms": string("Description of the user's symptoms.", min_length=2, max_length=2000),
})

QuestionFormulatorOutput = Contract(name="QuestionFormulatorOutput", fields={
    "suggestedQuestions": array(string(min_length=1), "Questions to ask the doctor.", min_items=1, max_items=12),
})

TEMPLATE = PromptTemplate("""You are an AI assistant that helps users prepare for doctor appointments.
Based on the condition and symptoms below, suggest the questions the user should ask their doctor to get the most out of the appointment. Order them from most to least important and keep each one short.

Condition: {{{condition}}}
Symptoms: {{{symptoms}}}
""")

HEALTH_QUESTION_FORMULATOR_FLOW = FlowDefinition(
    name="health_question_formulator",
    description="Suggests questions to ask at a doctor appointment.",
    input_contract=QuestionFormulatorInput,
    output_contract=QuestionFormulatorOutput,
    template=TEMPLATE,
    temperature=0.4,
)


async def formulate_health_questions(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(HEALTH_QUESTION_FORMULATOR_FLOW, request)
