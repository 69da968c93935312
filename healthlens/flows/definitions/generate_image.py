# /healthlens/flows/definitions/generate_image.py

# Illustrative image generation. The model is asked for both text and image
# parts; the first image comes back as a base64 data URI.

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.endpoint import ModelResponse
from healthlens.models.flow import FlowDefinition, OutputMode

GenerateImageInput = Contract(name="GenerateImageInput", fields={
    "prompt": string("Descriptive text prompt for the image.", min_length=5, max_length=2000),
})

GenerateImageOutput = Contract(name="GenerateImageOutput", fields={
    "imageDataUri": string("The generated image as a base64 data URI.", min_length=1),
    "revisedPrompt": string("Text the model returned alongside the image, if any.", required=False),
})

TEMPLATE = PromptTemplate("{{prompt}}")


def to_image_output(request: Dict[str, Any], response: ModelResponse) -> Dict[str, Any]:
    output = {"imageDataUri": response.media_url}
    if response.text and response.text.strip():
        output["revisedPrompt"] = response.text.strip()
    return output


GENERATE_IMAGE_FLOW = FlowDefinition(
    name="generate_image",
    description="Generates an illustrative image from a text prompt.",
    input_contract=GenerateImageInput,
    output_contract=GenerateImageOutput,
    template=TEMPLATE,
    output_mode=OutputMode.MEDIA,
    media_mapper=to_image_output,
    response_modalities=("TEXT", "IMAGE"),
    idempotent=False,
)


async def generate_image(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(GENERATE_IMAGE_FLOW, request)
