# /healthlens/flows/definitions/body_part_info.py

from typing import Any, Dict, Mapping

from healthlens.config.strings import BODY_PART_DISCLAIMER
from healthlens.flows.rules import ensure_disclaimer
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.flow import FlowDefinition

BodyPartInput = Contract(name="BodyPartInput", fields={
    "bodyPart": string("Body part of interest, e.g. 'lower back', 'knee'.", min_length=3, max_length=100),
    "concern": string("Specific concern, e.g. 'pain', 'stiffness', 'strengthening'.", required=False, max_length=200),
})

BodyPartOutput = Contract(name="BodyPartOutput", fields={
    "bodyPartName": string("Common name of the body part."),
    "commonIssues": string("Common issues or discomforts for this body part."),
    "generalCareTips": string("Posture, movement and prevention tips."),
    "exerciseTypes": string("Exercise types that usually help.", required=False),
    "youtubeSearchQuery": string("Short YouTube search query (max 5 words)."),
    "anatomicalImageHint": string("1-3 word hint for an anatomical illustration.", max_length=30),
})

TEMPLATE = PromptTemplate("""You are an AI Health Information Assistant. Give concise, general information about the body part below.

Body part: "{{bodyPart}}"
{{#if concern}}Specific concern: "{{concern}}"
{{/if}}
Instructions:
1. Confirm the 'bodyPartName' using its common name (e.g. "low back" becomes "Lower Back").
2. Describe 'commonIssues' in 1-2 sentences{{#if concern}}, focusing on the concern{{/if}}.
3. Give 'generalCareTips' in 1-2 sentences.
4. Optionally list beneficial 'exerciseTypes'.
5. Give a 'youtubeSearchQuery' of at most 5 words.
6. Give an 'anatomicalImageHint' of 1-3 words, e.g. "knee joint diagram".
7. State that this is general knowledge and not medical advice.
""")

BODY_PART_INFO_FLOW = FlowDefinition(
    name="body_part_info",
    description="General information and care tips for a body part.",
    input_contract=BodyPartInput,
    output_contract=BodyPartOutput,
    template=TEMPLATE,
    post_processing=(
        ensure_disclaimer(["generalCareTips", "commonIssues"], BODY_PART_DISCLAIMER, name="body_part_disclaimer"),
    ),
)


async def get_body_part_info(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(BODY_PART_INFO_FLOW, request)
