# /healthlens/flows/definitions/mood_language_monitor.py

# Reads a chat transcript for tone, sentiment and word choice, flags early
# signs of anxiety, depression or burnout and suggests coping strategies.

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, boolean, string
from healthlens.models.flow import FlowDefinition

MoodMonitorInput = Contract(name="MoodMonitorInput", fields={
    "chatHistory": string("The chat history to analyse.", min_length=1, max_length=20000),
})

MoodMonitorOutput = Contract(name="MoodMonitorOutput", fields={
    "mood": string("Overall mood detected in the chat history."),
    "sentiment": string("Overall sentiment detected in the chat history."),
    "anxietyDetected": boolean("Whether signs of anxiety are present."),
    "depressionDetected": boolean("Whether signs of depression are present."),
    "burnoutDetected": boolean("Whether signs of burnout are present."),
    "copingStrategies": array(string(), "Coping strategies suited to what was detected.", min_items=1),
})

TEMPLATE = PromptTemplate("""You are an AI assistant that reads chat history to notice early signs of anxiety, depression or burnout, and recommends coping strategies.

Chat history:
{{{chatHistory}}}

Determine the overall mood and sentiment. Say whether there are signs of anxiety, depression or burnout; these are observations, not diagnoses. Finally, recommend practical coping strategies that fit what you observed.
""")

MOOD_LANGUAGE_MONITOR_FLOW = FlowDefinition(
    name="mood_language_monitor",
    description="Detects anxiety, depression and burnout signals in chat language.",
    input_contract=MoodMonitorInput,
    output_contract=MoodMonitorOutput,
    template=TEMPLATE,
    temperature=0.3,
)


async def analyze_chat_history(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(MOOD_LANGUAGE_MONITOR_FLOW, request)
