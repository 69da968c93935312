# /healthlens/flows/definitions/conversational_health_coach.py

# Motivational-interviewing style coach for one habit topic at a time. The
# coach may propose one small task per turn.

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, enum, string
from healthlens.models.flow import FlowDefinition

HEALTH_TOPICS = ["hydration", "exercise", "sleep", "stressReduction", "mindfulness", "posture", "diet"]

HealthCoachInput = Contract(name="HealthCoachInput", fields={
    "userMessage": string("Latest message, e.g. 'motivate me' or a reply to the coach.", min_length=1, max_length=2000),
    "healthTopic": enum(HEALTH_TOPICS, "Health topic the conversation focuses on."),
    "userName": string("The user's name.", min_length=1, max_length=100),
    "conversationHistory": string("Summary of recent turns, to show continuity.", required=False, max_length=8000),
})

HealthCoachOutput = Contract(name="HealthCoachOutput", fields={
    "coachResponse": string("The coach's next message; engaging and supportive.", min_length=1),
    "suggestedTask": string("One small, achievable health task, when the coach suggests one.", required=False),
})

TEMPLATE = PromptTemplate("""You are {{userName}}'s empathetic Conversational Health Coach. Guide them in building and keeping better habits around {{healthTopic}}, using behavioral psychology and motivational interviewing:
- Understand {{userName}}'s current habits and barriers. Ask open-ended questions when their message lacks detail.
- Reflect their feelings and motivations, and affirm their efforts and strengths.
- When they report difficulty or low motivation, respond with empathy and explore very small steps together.
- Suggest small, personalized tasks that fit their readiness for change, and put any task in 'suggestedTask'.
- Track progress conversationally ("Did you manage an extra glass of water today?").
{{#if conversationHistory}}- Refer back to the conversation so far to show continuity:
{{{conversationHistory}}}
{{/if}}
Current message: "{{userMessage}}"

If the message is a trigger such as "Health coach", "motivate me", "build routine" or "I want to get healthier", open by asking about their goals for {{healthTopic}}.
Keep 'coachResponse' a natural continuation of the conversation.
""")

CONVERSATIONAL_HEALTH_COACH_FLOW = FlowDefinition(
    name="conversational_health_coach",
    description="Habit-building coach for hydration, exercise, sleep and similar topics.",
    input_contract=HealthCoachInput,
    output_contract=HealthCoachOutput,
    template=TEMPLATE,
    temperature=0.7,
)


async def conversational_health_coach(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(CONVERSATIONAL_HEALTH_COACH_FLOW, request)
