# /healthlens/flows/definitions/secure_emergency_info.py

# Formats a patient's emergency details into a printable markdown sheet. The
# model only lays the sheet out; it must not add or drop medical facts.

from typing import Any, Dict, Mapping

from healthlens.flows.template import PromptTemplate
from healthlens.models.contract import Contract, string
from healthlens.models.flow import FlowDefinition

EmergencySheetInput = Contract(name="EmergencySheetInput", fields={
    "name": string("Patient's full name.", min_length=1, max_length=200),
    "birthDate": string("Date of birth, YYYY-MM-DD.", min_length=10, max_length=10),
    "conditions": string("Medical conditions.", max_length=2000),
    "medications": string("Current medications with dosages.", max_length=2000),
    "allergies": string("Allergies with reactions.", max_length=2000),
    "emergencyContactName": string("Emergency contact's name.", min_length=1, max_length=200),
    "emergencyContactPhone": string("Emergency contact's phone number.", min_length=3, max_length=40),
    "insuranceProvider": string("Insurance provider.", max_length=200),
    "insurancePolicyNumber": string("Insurance policy number.", max_length=100),
    "additionalInformation": string("Anything else useful in an emergency.", required=False, max_length=4000),
})

EmergencySheetOutput = Contract(name="EmergencySheetOutput", fields={
    "emergencySheetContent": string("The emergency sheet as markdown.", min_length=1),
})

TEMPLATE = PromptTemplate("""You are an AI assistant that helps users create a downloadable emergency sheet.
Return the sheet below as markdown in 'emergencySheetContent'. Keep every value exactly as given; write "None reported" for empty values. Do not add medical advice.

# Emergency Information Sheet

**Patient Name:** {{{name}}}
**Date of Birth:** {{{birthDate}}}

## Medical Information

**Conditions:** {{{conditions}}}
**Medications:** {{{medications}}}
**Allergies:** {{{allergies}}}

## Emergency Contact

**Contact Name:** {{{emergencyContactName}}}
**Contact Phone:** {{{emergencyContactPhone}}}

## Insurance Information

**Insurance Provider:** {{{insuranceProvider}}}
**Policy Number:** {{{insurancePolicyNumber}}}
{{#if additionalInformation}}
## Additional Information

{{{additionalInformation}}}
{{/if}}""")

SECURE_EMERGENCY_INFO_FLOW = FlowDefinition(
    name="secure_emergency_info",
    description="Builds a markdown emergency information sheet.",
    input_contract=EmergencySheetInput,
    output_contract=EmergencySheetOutput,
    template=TEMPLATE,
    temperature=0.0,
)


async def create_emergency_sheet(runner, request: Mapping[str, Any]) -> Dict[str, Any]:
    return await runner.run_or_raise(SECURE_EMERGENCY_INFO_FLOW, request)
