# tests/unit/test_validator.py
import pytest

from healthlens.flows.validator import validate_contract, validate_field
from healthlens.models.contract import Contract, array, boolean, enum, integer, number, obj, string

PROFILE = Contract(name="Profile", fields={
    "name": string("Name", min_length=2, max_length=20),
    "age": integer("Age", gt=0, le=120),
    "weightKg": number("Weight", gt=0),
    "active": boolean("Active", required=False),
    "level": enum(["low", "high"], "Level", required=False, default="low"),
    "tags": array(string(), "Tags", required=False, max_items=2),
    "prefs": obj("Prefs", {
        "diet": string("Diet", required=False),
        "allergies": array(string(), "Allergies", required=False),
    }, "Preferences", required=False),
    "note": string("Note", required=False, nullable=True),
})


def valid_profile(**overrides):
    data = {"name": "Ana", "age": 30, "weightKg": 61.5}
    data.update(overrides)
    return data


def paths(result):
    return [v.path for v in result["violations"]]


def codes(result):
    return [v.code for v in result["violations"]]


def test_valid_profile_applies_defaults_and_drops_unknown_keys():
    result = validate_contract(PROFILE, valid_profile(extra="ignored"))
    assert result["is_valid"] is True
    assert result["value"] == {"name": "Ana", "age": 30, "weightKg": 61.5, "level": "low"}


def test_missing_required_field_is_reported_by_name():
    data = valid_profile()
    del data["age"]
    result = validate_contract(PROFILE, data)
    assert result["is_valid"] is False
    assert paths(result) == ["age"]
    assert codes(result) == ["MISSING_FIELD"]
    assert result["value"] == {}


def test_every_violation_is_collected():
    result = validate_contract(PROFILE, {"name": "A", "age": -1})
    assert set(paths(result)) == {"name", "age", "weightKg"}


@pytest.mark.parametrize("age, code", [
    (-1, "BELOW_MINIMUM"),
    (0, "BELOW_MINIMUM"),
    (121, "ABOVE_MAXIMUM"),
    (30.5, "WRONG_TYPE"),
    ("30", "WRONG_TYPE"),
    (True, "WRONG_TYPE"),
])
def test_age_violations(age, code):
    result = validate_contract(PROFILE, valid_profile(age=age))
    assert paths(result) == ["age"]
    assert codes(result) == [code]


def test_integral_float_is_accepted_as_integer():
    result = validate_contract(PROFILE, valid_profile(age=30.0))
    assert result["is_valid"] is True
    assert result["value"]["age"] == 30
    assert isinstance(result["value"]["age"], int)


def test_string_length_refinements():
    assert codes(validate_contract(PROFILE, valid_profile(name="A"))) == ["TOO_SHORT"]
    assert codes(validate_contract(PROFILE, valid_profile(name="A" * 21))) == ["TOO_LONG"]


def test_enum_must_be_one_of_the_choices():
    result = validate_contract(PROFILE, valid_profile(level="medium"))
    assert codes(result) == ["NOT_IN_CHOICES"]


def test_nested_violation_paths():
    result = validate_contract(PROFILE, valid_profile(prefs={"allergies": ["nuts", 3]}))
    assert paths(result) == ["prefs.allergies[1]"]
    assert codes(result) == ["WRONG_TYPE"]


def test_array_item_count():
    result = validate_contract(PROFILE, valid_profile(tags=["a", "b", "c"]))
    assert codes(result) == ["TOO_MANY_ITEMS"]


def test_optional_none_is_treated_as_absent():
    result = validate_contract(PROFILE, valid_profile(active=None, level=None))
    assert result["is_valid"] is True
    assert "active" not in result["value"]
    assert result["value"]["level"] == "low"


def test_nullable_field_keeps_none():
    result = validate_contract(PROFILE, valid_profile(note=None))
    assert result["is_valid"] is True
    assert result["value"]["note"] is None


def test_required_field_cannot_be_null():
    result = validate_contract(PROFILE, valid_profile(name=None))
    assert codes(result) == ["NULL_NOT_ALLOWED"]


def test_non_mapping_input_is_rejected():
    result = validate_contract(PROFILE, ["not", "an", "object"])
    assert codes(result) == ["NOT_AN_OBJECT"]
    assert paths(result) == ["<root>"]


def test_defaults_are_copied_not_shared():
    contract = Contract(name="C", fields={"items": array(string(), required=False, default=[])})
    first = validate_contract(contract, {})["value"]
    first["items"].append("x")
    second = validate_contract(contract, {})["value"]
    assert second["items"] == []


def test_input_is_not_mutated():
    data = valid_profile(extra=1)
    snapshot = dict(data)
    validate_contract(PROFILE, data)
    assert data == snapshot


def test_validate_field_rejects_bool_as_number():
    value, violations = validate_field(number(), False, "x")
    assert value is None
    assert violations[0].code == "WRONG_TYPE"
