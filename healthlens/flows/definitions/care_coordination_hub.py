# /healthlens/flows/definitions/care_coordination_hub.py

# Organizes patient notes before a doctor visit (tasks and questions) or
# summarizes key points after one.

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, enum, string
from healthlens.models.flow import FlowDefinition

VISIT_TYPES = ["pre-visit", "post-visit"]

CareCoordinationInput = Contract(name="CareCoordinationInput", fields={
    "visitType": enum(VISIT_TYPES, "pre-visit to organize notes into tasks and questions, post-visit to summarize key points."),
    "patientNotes": string("Notes about the patient, their symptoms and health concerns.", min_length=1, max_length=10000),
})

CareCoordinationOutput = Contract(name="CareCoordinationOutput", fields={
    "summary": string("Key points, tasks and questions for the doctor visit."),
})

TEMPLATE = PromptTemplate("""You are a helpful assistant that organizes and summarizes patient information for doctor visits.

Patient notes: {{{patientNotes}}}
Visit type: {{visitType}}

If the visit type is pre-visit, organize the notes into a list of tasks to do before the appointment and questions to ask the doctor.
If the visit type is post-visit, summarize the key points, follow-up tasks and anything still to clarify with the care team.
Do not add diagnoses or treatment advice that are not in the notes.
""")

CARE_COORDINATION_HUB_FLOW = FlowDefinition(
    name="care_coordination_hub",
    description="Prepares for or summarizes a doctor visit from patient notes.",
    input_contract=CareCoordinationInput,
    output_contract=CareCoordinationOutput,
    template=TEMPLATE,
    temperature=0.2,
)


async def coordinate_care(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(CARE_COORDINATION_HUB_FLOW, request)
