# /healthlens/flows/definitions/mental_health_check_in.py

# Mood and sentiment check-in. Crisis language skips the model and returns the
# crisis-line response; every other reply ends with a soft reminder that
# professional support is available.

from typing import Any, Dict, Mapping

from healthlens.config.safety import MENTAL_HEALTH_CRISIS_PHRASES
from healthlens.config.strings import CHECK_IN_REMINDER, MENTAL_HEALTH_CRISIS_RESPONSE
from healthlens.flows.rules import ensure_disclaimer
from healthlens.flows.safety import SafetyCheck, SafetyMode
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.flow import FlowDefinition

CheckInInput = Contract(name="CheckInInput", fields={
    "recentActivity": string("Recent activities and feelings, in the user's words.", min_length=1, max_length=4000),
})

CheckInOutput = Contract(name="CheckInOutput", fields={
    "sentiment": string("Overall sentiment, e.g. positive, negative, neutral."),
    "mood": string("Identified mood, e.g. happy, sad, anxious."),
    "supportMessage": string("A personalized, supportive message."),
})

TEMPLATE = PromptTemplate("""You are an AI mental health companion helping the user check in with how they are doing.
Read the user's recent activities and feelings, identify the overall sentiment and mood, and write a warm, personalized support message.

Recent activities and feelings:
{{{recentActivity}}}
""")

CRISIS_CHECK = SafetyCheck(
    name="mental_health_crisis",
    keywords=MENTAL_HEALTH_CRISIS_PHRASES,
    fields=["recentActivity"],
    fallback={
        "sentiment": "negative",
        "mood": "distressed",
        "supportMessage": MENTAL_HEALTH_CRISIS_RESPONSE,
    },
    mode=SafetyMode.PREEMPT,
)

MENTAL_HEALTH_CHECK_IN_FLOW = FlowDefinition(
    name="mental_health_check_in",
    description="Sentiment and mood check-in with a supportive message.",
    input_contract=CheckInInput,
    output_contract=CheckInOutput,
    template=TEMPLATE,
    safety_checks=(CRISIS_CHECK,),
    post_processing=(
        ensure_disclaimer(["supportMessage"], CHECK_IN_REMINDER, name="check_in_reminder"),
    ),
)


async def mental_health_check_in(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(MENTAL_HEALTH_CHECK_IN_FLOW, request)
