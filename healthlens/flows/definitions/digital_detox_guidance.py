# /healthlens/flows/definitions/digital_detox_guidance.py

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, array, obj, string
from healthlens.models.flow import FlowDefinition

DigitalDetoxInput = Contract(name="DigitalDetoxInput", fields={
    "userConcern": string(
        "Concern or goal, e.g. 'I feel addicted to my phone' or 'less screen time before bed'.",
        min_length=5,
        max_length=1000,
    ),
    "userName": string("Name for personalization.", required=False, max_length=100),
})

DigitalDetoxOutput = Contract(name="DigitalDetoxOutput", fields={
    "introduction": string("Personalized introduction addressing the concern."),
    "screenTimeRisksGuide": array(
        obj("ScreenTimeRisk", {"title": string(), "point": string()}),
        "Risks of excessive screen time relevant to the concern.",
        min_items=2,
        max_items=3,
    ),
    "journalingPrompts": array(string(), "Prompts for reflecting on digital habits.", min_items=2, max_items=2),
    "activityChallenges": array(
        obj("ActivityChallenge", {"title": string(), "description": string()}),
        "Simple screen-free activity challenges.",
        min_items=2,
        max_items=2,
    ),
    "aiNudgeSuggestion": string("A nudge the app could offer, e.g. a screen-break reminder."),
    "motivationalMessage": string("Encouraging closing message."),
})

TEMPLATE = PromptTemplate("""You are an AI assistant helping {{#if userName}}{{userName}}{{else}}a user{{/if}} with a digital detox. Their concern or goal is: "{{userConcern}}"

Provide:
1. 'introduction': a brief, empathetic acknowledgment of the concern.
2. 'screenTimeRisksGuide': 2-3 risks of excessive screen time tailored to the concern, each with a 'title' and a 'point', e.g. Sleep Disruption: blue light in the evening delays melatonin.
3. 'journalingPrompts': exactly two prompts for reflecting on their digital habits and feelings about technology.
4. 'activityChallenges': exactly two simple screen-free challenges, each with a 'title' and a 'description', e.g. a device-free meal.
5. 'aiNudgeSuggestion': a nudge the app could offer, such as a 'Tech-Free Zone' reminder for the bedroom after 9 PM.
6. 'motivationalMessage': a short, encouraging close.

Keep the tone supportive and practical. Suggestions must not need any device beyond the phone or computer they already use.
""")

DIGITAL_DETOX_GUIDANCE_FLOW = FlowDefinition(
    name="digital_detox_guidance",
    description="Screen-time risks, journaling prompts and screen-free challenges.",
    input_contract=DigitalDetoxInput,
    output_contract=DigitalDetoxOutput,
    template=TEMPLATE,
)


async def get_digital_detox_guidance(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(DIGITAL_DETOX_GUIDANCE_FLOW, request)
