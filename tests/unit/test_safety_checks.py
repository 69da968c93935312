# tests/unit/test_safety_checks.py
import pytest

from healthlens.config.strings import EATING_DISORDER_SUPPORT
from healthlens.flows.definitions.diet_planner import EATING_DISORDER_CHECK
from healthlens.flows.definitions.virtual_nursing_assistant import CRISIS_CHECK, EMERGENCY_CHECK
from healthlens.flows.safety import SafetyCheck, SafetyMode


@pytest.mark.parametrize("message, check", [
    ("I have CHEST PAIN right now", EMERGENCY_CHECK),
    ("I can't breathe properly", EMERGENCY_CHECK),
    ("Sometimes I want to die", CRISIS_CHECK),
    ("thinking about self-harm", CRISIS_CHECK),
])
def test_phrases_match_case_insensitively(message, check):
    assert check.matches({"message": message})


def test_unrelated_message_does_not_match():
    request = {"message": "How much water should I drink?"}
    assert not EMERGENCY_CHECK.matches(request)
    assert not CRISIS_CHECK.matches(request)


def test_array_elements_are_searched():
    request = {"healthGoals": ["weight loss", "recover from Anorexia"]}
    assert EATING_DISORDER_CHECK.matched_keyword(request) == "anorexia"


def test_non_string_values_are_ignored():
    assert not EATING_DISORDER_CHECK.matches({"healthGoals": [1, 2], "medicalConditions": None})


@pytest.mark.parametrize("language, expected", [
    ("en", "en"),
    ("es", "es"),
    ("ES-mx", "es"),
    ("fr", "en"),
    (None, "en"),
])
def test_localized_fallback_selection(language, expected):
    fallback = EATING_DISORDER_CHECK.fallback_for({"language": language})
    assert fallback["planTitle"] == EATING_DISORDER_SUPPORT[expected]["title"]


def test_fallback_is_a_fresh_copy():
    first = EMERGENCY_CHECK.fallback_for({})
    first["response"] = "changed"
    assert EMERGENCY_CHECK.fallback_for({})["response"] != "changed"


def test_all_fallbacks_lists_every_language():
    assert len(EATING_DISORDER_CHECK.all_fallbacks()) == len(EATING_DISORDER_SUPPORT)


def test_check_needs_keywords():
    with pytest.raises(ValueError):
        SafetyCheck(name="empty", keywords=[], fields=["message"], fallback={"response": "x"})


def test_localized_check_needs_default_language():
    with pytest.raises(ValueError):
        SafetyCheck(
            name="no_english",
            keywords=["x"],
            fields=["message"],
            fallback={"es": {"response": "x"}},
            mode=SafetyMode.OVERRIDE,
            language_field="language",
        )
