# /healthlens/flows/definitions/cognitive_health_tracker.py

"""
Brief cognitive check-ins.

An opening message ("Track my focus", "Brain fog") gets one reflection
question back. A reply about the user's state gets an empathetic answer and
an optional analysis of fatigue, stress, emotional decline, early cognitive
decline and burnout signals. Crisis language returns the crisis-line response.
"""

from typing import Any, Dict, Mapping

from healthlens.config.safety import MENTAL_HEALTH_CRISIS_PHRASES
from healthlens.config.strings import MENTAL_HEALTH_CRISIS_RESPONSE
from healthlens.flows.safety import SafetyCheck, SafetyMode
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, boolean, obj, string
from healthlens.models.flow import FlowDefinition

REFLECTION_QUESTIONS = [
    "How has your concentration been today?",
    "Were you able to remember your tasks and appointments easily today?",
    "Would you say you felt more mentally sharp or a bit foggy today?",
    "How would you rate your focus level today - high, medium, or low?",
    "Did anything specific make it hard to concentrate or remember things today?",
]

CognitiveCheckInInput = Contract(name="CognitiveCheckInInput", fields={
    "userMessage": string(
        "An opening trigger, an answer to a previous question, or a statement about the user's cognitive state.",
        min_length=1,
        max_length=2000,
    ),
    "userId": string("User identifier, used only to address the user.", min_length=1, max_length=128),
    "conversationContext": string("Snippets from previous check-ins.", required=False, max_length=4000),
})

CognitiveAnalysis = obj("CognitiveAnalysis", {
    "cognitiveFatigueDetected": boolean(required=False),
    "stressPatternDetected": boolean(required=False),
    "emotionalDeclineDetected": boolean(required=False),
    "earlyCognitiveDeclineSigns": boolean(required=False),
    "burnoutSigns": boolean(required=False),
    "summary": string("Brief summary of the analysis.", required=False),
}, "Only present when the message was analysed.", required=False)

CognitiveCheckInOutput = Contract(name="CognitiveCheckInOutput", fields={
    "aiResponse": string("A question, an observation or an empathetic acknowledgment.", min_length=1),
    "analysis": CognitiveAnalysis,
    "isAskingQuestion": boolean("True when aiResponse mainly asks the user a question."),
})

TEMPLATE_SOURCE = """You are an empathetic Cognitive Health Tracker AI. Help user {{userId}} monitor their cognitive and emotional wellness through brief, non-intrusive interactions.

User's message: "{{userMessage}}"
{{#if conversationContext}}Previous conversation context: {{{conversationContext}}}
{{else}}There is no previous conversation context.
{{/if}}
Instructions:
1. If the message is an opening trigger (e.g. "Track my focus", "Cognitive check-in", "Brain fog") or there is little context, reply with one reflection question from this list and set 'isAskingQuestion' to true. Do not include 'analysis'.
[REFLECTION_QUESTIONS]
2. If the message answers a question or describes the user's state, analyse tone, language and consistency for cognitive fatigue, stress, emotional decline, memory and focus problems, and burnout. Fill 'analysis' cautiously; never diagnose.
   Reply supportively: reflect on what they said, offer a gentle suggestion such as a short break or better sleep, and if problems seem persistent mention that self-care plans or talking to someone can help.
   Set 'isAskingQuestion' to true only if you end with a question.
3. Keep a friendly, compassionate tone and do not ask for personal details.
"""

TEMPLATE = PromptTemplate(
    TEMPLATE_SOURCE.replace("[REFLECTION_QUESTIONS]", "\n".join(f"   - {q}" for q in REFLECTION_QUESTIONS))
)

CRISIS_CHECK = SafetyCheck(
    name="mental_health_crisis",
    keywords=MENTAL_HEALTH_CRISIS_PHRASES,
    fields=["userMessage", "conversationContext"],
    fallback={"aiResponse": MENTAL_HEALTH_CRISIS_RESPONSE, "isAskingQuestion": False},
    mode=SafetyMode.PREEMPT,
)

COGNITIVE_HEALTH_TRACKER_FLOW = FlowDefinition(
    name="cognitive_health_tracker",
    description="Short cognitive check-ins with cautious fatigue, stress and burnout analysis.",
    input_contract=CognitiveCheckInInput,
    output_contract=CognitiveCheckInOutput,
    template=TEMPLATE,
    safety_checks=(CRISIS_CHECK,),
    temperature=0.6,
)


async def process_cognitive_check_in(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(COGNITIVE_HEALTH_TRACKER_FLOW, request)
