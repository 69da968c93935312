# /healthlens/flows/definitions/behavioral_health_nudging.py

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.flow import FlowDefinition

NudgingInput = Contract(name="NudgingInput", fields={
    "chatHistory": string("Chat history between the user and the assistant.", min_length=1, max_length=20000),
})

NudgingOutput = Contract(name="NudgingOutput", fields={
    "nudge": string("A personalized nudge, positive reinforcement or journaling prompt.", min_length=1),
})

TEMPLATE = PromptTemplate("""You are an AI behavioral health assistant. Look through the chat history below for unhealthy behavioral patterns, such as skipped sleep, constant screen time or isolation.
Reply with one personalized nudge, a piece of positive reinforcement, or a journaling prompt that helps the user. Keep it short and kind.

Chat history:
{{{chatHistory}}}
""")

BEHAVIORAL_HEALTH_NUDGING_FLOW = FlowDefinition(
    name="behavioral_health_nudging",
    description="Spots unhealthy behavior patterns and answers with a gentle nudge.",
    input_contract=NudgingInput,
    output_contract=NudgingOutput,
    template=TEMPLATE,
)


async def behavioral_health_nudging(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(BEHAVIORAL_HEALTH_NUDGING_FLOW, request)
