# /healthlens/flows/definitions/health_myth_buster.py

# Checks a common health myth against general scientific consensus. The
# explanation always ends up carrying an educational-use disclaimer.

from typing import Any, Dict, Mapping

from healthlens.config.strings import MYTH_BUSTER_DISCLAIMER
from healthlens.flows.rules import ensure_disclaimer
from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, boolean, enum, string
from healthlens.models.flow import FlowDefinition

CONFIDENCE_LEVELS = ["High", "Medium", "Low", "Uncertain"]

HealthMythInput = Contract(name="HealthMythInput", fields={
    "mythQuery": string(
        "The myth or question to check, e.g. 'Does cracking knuckles cause arthritis?'.",
        min_length=10,
        max_length=500,
    ),
})

HealthMythOutput = Contract(name="HealthMythOutput", fields={
    "explanation": string("Why the myth holds, fails, or is unsettled, based on general consensus."),
    "youtubeSearchQuery": string("Short YouTube search query (max 5 words) for an explainer video."),
    "imageHint": string("1-3 word hint for an illustrative image.", max_length=30),
    "isMythTrue": boolean("true, false, or null when the evidence is mixed.", nullable=True),
    "confidenceLevel": enum(CONFIDENCE_LEVELS, "Confidence in the assessment."),
})

TEMPLATE = PromptTemplate("""You are an AI Health Myth Buster. Analyse the health myth or question below and give a clear, evidence-based answer.

Myth or question: "{{mythQuery}}"

Instructions:
1. Decide whether the claim is generally true, false, or unsettled. Set 'isMythTrue' to true, false or null.
2. Set 'confidenceLevel' to High, Medium, Low or Uncertain.
3. Write an 'explanation': why it is a myth, what supports it, or where the nuance lies. Refer to general scientific consensus, not to individual studies.
4. Give a 'youtubeSearchQuery' of at most 5 words for an educational video from a trusted health channel.
5. Give an 'imageHint' of 1-3 words, e.g. "garlic cloves" or "hand xray".
6. Remind the user that the answer is educational and that a healthcare professional should be consulted for personal medical advice.
""")

HEALTH_MYTH_BUSTER_FLOW = FlowDefinition(
    name="health_myth_buster",
    description="Debunks or confirms a common health myth.",
    input_contract=HealthMythInput,
    output_contract=HealthMythOutput,
    template=TEMPLATE,
    post_processing=(
        ensure_disclaimer(["explanation"], MYTH_BUSTER_DISCLAIMER, name="myth_disclaimer"),
    ),
)


async def bust_health_myth(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(HEALTH_MYTH_BUSTER_FLOW, request)
