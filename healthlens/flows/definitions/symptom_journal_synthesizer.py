# /healthlens/flows/definitions/symptom_journal_synthesizer.py

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, integer, string
from healthlens.models.flow import FlowDefinition

JournalInput = Contract(name="JournalInput", fields={
    "journalEntries": string("Journal entries describing symptoms and experiences.", min_length=1, max_length=20000),
    "patientName": string("Patient's name.", min_length=1, max_length=200),
    "patientAge": integer("Patient's age in years.", ge=0, le=130),
    "patientGender": string("Patient's gender.", min_length=1, max_length=50),
})

JournalOutput = Contract(name="JournalOutput", fields={
    "medicalSummary": string("Structured summary for a healthcare provider.", min_length=1),
})

TEMPLATE = PromptTemplate("""You are an AI assistant that turns patient journal entries into structured medical summaries for healthcare providers.

Patient name: {{{patientName}}}
Patient age: {{patientAge}}
Patient gender: {{{patientGender}}}

Journal entries:
{{{journalEntries}}}

Write a concise, structured summary: key symptoms, when they started and how they changed, possible triggers, and anything else the provider should know. Report only what the entries say; do not diagnose.
""")

SYMPTOM_JOURNAL_SYNTHESIZER_FLOW = FlowDefinition(
    name="symptom_journal_synthesizer",
    description="Summarizes symptom journal entries for a healthcare provider.",
    input_contract=JournalInput,
    output_contract=JournalOutput,
    template=TEMPLATE,
    temperature=0.2,
)


async def synthesize_journal_entries(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(SYMPTOM_JOURNAL_SYNTHESIZER_FLOW, request)
