# /healthlens/flows/catalog.py

# This file assembles the default registry of health flows served by the API.
# Importing it runs the static checks for every definition.

from healthlens.flows.definitions.behavioral_health_nudging import BEHAVIORAL_HEALTH_NUDGING_FLOW
from healthlens.flows.definitions.body_part_info import BODY_PART_INFO_FLOW
from healthlens.flows.definitions.care_coordination_hub import CARE_COORDINATION_HUB_FLOW
from healthlens.flows.definitions.cognitive_health_tracker import COGNITIVE_HEALTH_TRACKER_FLOW
from healthlens.flows.definitions.conversational_health_coach import CONVERSATIONAL_HEALTH_COACH_FLOW
from healthlens.flows.definitions.cultural_health_companion import CULTURAL_HEALTH_COMPANION_FLOW
from healthlens.flows.definitions.daily_wellness_tip import DAILY_WELLNESS_TIP_FLOW
from healthlens.flows.definitions.diet_planner import DIET_PLANNER_FLOW
from healthlens.flows.definitions.digital_detox_guidance import DIGITAL_DETOX_GUIDANCE_FLOW
from healthlens.flows.definitions.digital_therapeutics_recommender import DIGITAL_THERAPEUTICS_RECOMMENDER_FLOW
from healthlens.flows.definitions.generate_image import GENERATE_IMAGE_FLOW
from healthlens.flows.definitions.habit_conflict_detector import HABIT_CONFLICT_DETECTOR_FLOW
from healthlens.flows.definitions.health_literacy_coach import HEALTH_LITERACY_COACH_FLOW
from healthlens.flows.definitions.health_myth_buster import HEALTH_MYTH_BUSTER_FLOW
from healthlens.flows.definitions.health_question_formulator import HEALTH_QUESTION_FORMULATOR_FLOW
from healthlens.flows.definitions.mental_health_check_in import MENTAL_HEALTH_CHECK_IN_FLOW
from healthlens.flows.definitions.mood_language_monitor import MOOD_LANGUAGE_MONITOR_FLOW
from healthlens.flows.definitions.multilingual_literacy_guide import MULTILINGUAL_LITERACY_GUIDE_FLOW
from healthlens.flows.definitions.secure_emergency_info import SECURE_EMERGENCY_INFO_FLOW
from healthlens.flows.definitions.self_care_plan import SELF_CARE_PLAN_FLOW
from healthlens.flows.definitions.symptom_journal_synthesizer import SYMPTOM_JOURNAL_SYNTHESIZER_FLOW
from healthlens.flows.definitions.symptom_timeline import SYMPTOM_TIMELINE_FLOW
from healthlens.flows.definitions.virtual_nursing_assistant import VIRTUAL_NURSING_ASSISTANT_FLOW
from healthlens.flows.registry import FlowRegistry

ALL_FLOWS = (
    # Nutrition, habits and general wellness
    DIET_PLANNER_FLOW,
    HEALTH_MYTH_BUSTER_FLOW,
    HABIT_CONFLICT_DETECTOR_FLOW,
    BODY_PART_INFO_FLOW,
    DAILY_WELLNESS_TIP_FLOW,
    SELF_CARE_PLAN_FLOW,
    CONVERSATIONAL_HEALTH_COACH_FLOW,
    DIGITAL_DETOX_GUIDANCE_FLOW,
    # Conversation and mental wellbeing
    VIRTUAL_NURSING_ASSISTANT_FLOW,
    MENTAL_HEALTH_CHECK_IN_FLOW,
    MOOD_LANGUAGE_MONITOR_FLOW,
    BEHAVIORAL_HEALTH_NUDGING_FLOW,
    COGNITIVE_HEALTH_TRACKER_FLOW,
    DIGITAL_THERAPEUTICS_RECOMMENDER_FLOW,
    # Health literacy
    HEALTH_LITERACY_COACH_FLOW,
    CULTURAL_HEALTH_COMPANION_FLOW,
    MULTILINGUAL_LITERACY_GUIDE_FLOW,
    # Care preparation and records
    CARE_COORDINATION_HUB_FLOW,
    HEALTH_QUESTION_FORMULATOR_FLOW,
    SYMPTOM_JOURNAL_SYNTHESIZER_FLOW,
    SYMPTOM_TIMELINE_FLOW,
    SECURE_EMERGENCY_INFO_FLOW,
    # Media
    GENERATE_IMAGE_FLOW,
)


def build_registry() -> FlowRegistry:
    registry = FlowRegistry()
    for definition in ALL_FLOWS:
        registry.register(definition)
    return registry


# Globally accessible instance
flow_registry = build_registry()
