# /healthlens/flows/definitions/virtual_nursing_assistant.py

"""
The virtual nursing assistant.

Conversational guidance, plain-language explanations, simple text exercises,
cautious medication-interaction notes and yoga suggestions. Messages that
describe a physical emergency or a mental health crisis never reach the model:
they get the fixed emergency or crisis response.
"""

from typing import Any, Dict, Mapping

from healthlens.config.safety import MENTAL_HEALTH_CRISIS_PHRASES, PHYSICAL_EMERGENCY_PHRASES
from healthlens.config.strings import MEDICAL_EMERGENCY_RESPONSE, MENTAL_HEALTH_CRISIS_RESPONSE, NURSE_DISCLAIMER
from healthlens.flows.rules import ensure_disclaimer
from healthlens.flows.safety import SafetyCheck, SafetyMode
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, obj, string
from healthlens.models.flow import FlowDefinition

VirtualNurseInput = Contract(name="VirtualNurseInput", fields={
    "message": string("The user's message.", min_length=1, max_length=4000),
    "medications": array(string(), "Current medications, for context and interaction checks.", required=False),
    "healthGoals": array(string(), "The user's health goals.", required=False),
    "medicationToCheck": string("A medication to check against the current list.", required=False, max_length=200),
    "conversationHistory": string("Summary of recent turns in this session.", required=False, max_length=8000),
})

VirtualNurseOutput = Contract(name="VirtualNurseOutput", fields={
    "response": string("The main conversational reply."),
    "interactionWarning": string("Medication interaction warning with a strong disclaimer.", required=False),
    "suggestedAction": string("A concrete next step, e.g. a breathing exercise.", required=False),
    "suggestedYogaRoutines": array(obj("YogaRoutine", {
        "title": string("e.g. '5-Min Chair Yoga for Back Pain'."),
        "category": string("e.g. 'Desk Yoga', 'Back Relief', 'Sleep Aid'."),
        "youtubeSearchQuery": string("YouTube search query for a guided video."),
        "description": string("1-2 sentences on the routine and its benefit."),
    }), "Yoga or stretching routines, when recommending movement.", required=False, max_items=5),
})

TEMPLATE = PromptTemplate("""You are a friendly, empathetic Virtual Nursing Assistant with memory of the current session. You give medication reminders and general health guidance, explain medical terms in plain language, offer simple text-based exercises (breathing, grounding, basic CBT prompts), give cautious general information on medication interactions, suggest yoga or stretching routines, and respond to emotional check-ins with empathy.

User's current medications: {{#each medications}}- {{this}} {{else}}None specified{{/each}}
User's health goals: {{#each healthGoals}}- {{this}} {{else}}None specified{{/each}}
{{#if conversationHistory}}
Recent conversation (this session):
{{{conversationHistory}}}
---
{{/if}}
Current user message: "{{message}}"

Guidelines:
- Use the session history to continue the conversation naturally. Do not ask again for what the user already said.
- Keep replies varied and concise. Use **bold** or _italics_ for emphasis only; no headings, lists or links in 'response'.
- If the user is stressed or anxious, validate the feeling and offer a short exercise; put its steps in 'suggestedAction'.
- To explain a medical term, be clear and simple.
{{#if medicationToCheck}}- The user asks about interactions between {{medicationToCheck}} and their medications. Say that this needs review by a professional, mention only widely known interaction types you are confident about, never invent interactions, and fill 'interactionWarning' with a warning that this is not a complete list and not a substitute for professional medical advice.
{{/if}}- For stress or physical discomfort (e.g. back pain, stiff neck), suggest 2-3 routines in 'suggestedYogaRoutines', each with 'title', 'category', 'youtubeSearchQuery' and 'description'.
- Do not diagnose. For anything beyond general guidance, point the user to their doctor or a healthcare professional.
""")

EMERGENCY_CHECK = SafetyCheck(
    name="physical_emergency",
    keywords=PHYSICAL_EMERGENCY_PHRASES,
    fields=["message"],
    fallback={"response": MEDICAL_EMERGENCY_RESPONSE},
    mode=SafetyMode.PREEMPT,
)

CRISIS_CHECK = SafetyCheck(
    name="mental_health_crisis",
    keywords=MENTAL_HEALTH_CRISIS_PHRASES,
    fields=["message"],
    fallback={"response": MENTAL_HEALTH_CRISIS_RESPONSE},
    mode=SafetyMode.PREEMPT,
)

VIRTUAL_NURSING_ASSISTANT_FLOW = FlowDefinition(
    name="virtual_nursing_assistant",
    description="Conversational nursing assistant with emergency and crisis safeguards.",
    input_contract=VirtualNurseInput,
    output_contract=VirtualNurseOutput,
    template=TEMPLATE,
    safety_checks=(EMERGENCY_CHECK, CRISIS_CHECK),
    post_processing=(
        ensure_disclaimer(["response", "interactionWarning"], NURSE_DISCLAIMER, name="nurse_disclaimer"),
    ),
    temperature=0.5,
)


async def ask_virtual_nurse(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(VIRTUAL_NURSING_ASSISTANT_FLOW, request)
