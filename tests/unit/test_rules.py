# tests/unit/test_rules.py
import pytest

from healthlens.config.strings import HABIT_CONFLICT_DISCLAIMER, MYTH_BUSTER_DISCLAIMER
from healthlens.flows.rules import apply_rules, contains_marker, ensure_disclaimer, fill_missing, rule_names, set_field

MYTH_RULE = ensure_disclaimer(["explanation"], MYTH_BUSTER_DISCLAIMER)
HABIT_RULE = ensure_disclaimer(["recommendations", "conflictAnalysis"], HABIT_CONFLICT_DISCLAIMER)


def test_disclaimer_is_appended_when_missing():
    output = MYTH_RULE({}, {"explanation": "Garlic does not cure colds."})
    assert output["explanation"] == "Garlic does not cure colds." + MYTH_BUSTER_DISCLAIMER


def test_existing_disclaimer_is_left_alone():
    text = "Garlic does not cure colds. This is not Medical Advice."
    assert MYTH_RULE({}, {"explanation": text})["explanation"] == text


def test_disclaimer_rule_is_idempotent():
    once = MYTH_RULE({}, {"explanation": "Short answer."})
    twice = MYTH_RULE({}, once)
    assert twice == once
    assert twice["explanation"].count("not medical advice") == 1


def test_marker_in_any_listed_field_satisfies_the_rule():
    output = {"recommendations": "Rest well.", "conflictAnalysis": "Consult a healthcare professional."}
    assert HABIT_RULE({}, output) == output


def test_disclaimer_goes_to_the_first_non_empty_field():
    output = HABIT_RULE({}, {"recommendations": "", "conflictAnalysis": "Risky combination."})
    assert output["recommendations"] == ""
    assert output["conflictAnalysis"].endswith(HABIT_CONFLICT_DISCLAIMER)


def test_disclaimer_is_set_when_all_fields_are_empty():
    output = HABIT_RULE({}, {"recommendations": "", "conflictAnalysis": ""})
    assert output["recommendations"] == HABIT_CONFLICT_DISCLAIMER.strip()


def test_rules_never_mutate_their_input():
    original = {"explanation": "Short answer."}
    MYTH_RULE({}, original)
    assert original == {"explanation": "Short answer."}


def test_disclaimer_without_marker_is_rejected():
    with pytest.raises(ValueError):
        ensure_disclaimer(["explanation"], "Have a nice day.")


def test_set_field_and_fill_missing():
    output = apply_rules(
        [set_field("disclaimer", "Not medical advice."), fill_missing("category", "General Wellness")],
        {},
        {"disclaimer": "whatever", "category": ""},
    )
    assert output == {"disclaimer": "Not medical advice.", "category": "General Wellness"}
    assert fill_missing("category", "X")({}, {"category": "Sleep"}) == {"category": "Sleep"}


def test_rules_apply_in_declared_order():
    rules = [set_field("a", "first"), set_field("a", "second")]
    assert apply_rules(rules, {}, {})["a"] == "second"
    assert rule_names(rules) == ["set_field:a", "set_field:a"]


def test_contains_marker_ignores_case_and_non_strings():
    assert contains_marker("See a HEALTHCARE PROFESSIONAL", ["healthcare professional"])
    assert not contains_marker(None, ["healthcare professional"])
